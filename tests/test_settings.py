"""Test system configuration conversion and validation."""

import pytest

from solar_monitor.exceptions import SystemConfigurationError
from solar_monitor.settings import (
    NOMINAL_BATTERY_VOLTAGE,
    REFERENCE_SYSTEM,
    SystemConfig,
    SystemSpec,
)


def test_system_config_defaults_convert_to_spec():
    """Amp-hours, SoC percentage and panel ratings convert to kWh and kW."""
    config = SystemConfig()
    spec = config.to_system_spec()

    assert spec.battery_capacity_kwh == pytest.approx(200 * NOMINAL_BATTERY_VOLTAGE / 1000)
    assert spec.min_soc_kwh == pytest.approx(spec.battery_capacity_kwh * 0.2)
    assert spec.system_size_kw == pytest.approx(2.8)  # 8 x 350 W
    assert spec.efficiency == 0.75


def test_system_config_update_ignores_unknown_keys():
    config = SystemConfig()
    config.update(battery_amp_hours=100, panel_count=4, not_a_setting=1)

    assert config.battery_amp_hours == 100
    assert config.panel_count == 4
    assert not hasattr(config, "not_a_setting")

    spec = SystemSpec.from_config(config)
    assert spec.battery_capacity_kwh == pytest.approx(1.2)
    assert spec.system_size_kw == pytest.approx(1.4)


@pytest.mark.parametrize(
    "field, value",
    [
        ("battery_amp_hours", 0),
        ("battery_amp_hours", -50),
        ("min_soc_percent", 100),
        ("min_soc_percent", -1),
        ("panel_watts", 0),
        ("panel_count", 0),
        ("efficiency", 0),
        ("efficiency", 1.5),
    ],
)
def test_invalid_config_is_rejected(field, value):
    config = SystemConfig()
    config.update(**{field: value})

    with pytest.raises(SystemConfigurationError) as exc_info:
        config.to_system_spec()
    assert exc_info.value.field == field


def test_installation_year_does_not_affect_spec():
    a = SystemConfig(installation_year=2015).to_system_spec()
    b = SystemConfig(installation_year=2024).to_system_spec()
    assert a == b


def test_clamp_soc_and_percent():
    assert REFERENCE_SYSTEM.clamp_soc(10.0) == 5.0
    assert REFERENCE_SYSTEM.clamp_soc(0.2) == 1.0
    assert REFERENCE_SYSTEM.clamp_soc(3.3) == 3.3
    assert REFERENCE_SYSTEM.soc_percent(2.5) == pytest.approx(50.0)
