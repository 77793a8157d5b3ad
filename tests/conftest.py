"""Shared fixtures for the solar monitor tests."""

import json
from datetime import datetime, timedelta

import pytest

from solar_monitor.appliances import ApplianceSpec, Room
from solar_monitor.irradiance import IrradianceSample
from solar_monitor.load_estimator import FixedJitter
from solar_monitor.settings import REFERENCE_SYSTEM, SystemSpec


def make_day(irradiance, day=datetime(2024, 1, 15)):
    """Hourly samples from midnight; ``irradiance`` is a list or a constant."""
    if not isinstance(irradiance, (list, tuple)):
        irradiance = [irradiance] * 24
    return [
        IrradianceSample(timestamp=day + timedelta(hours=h), irradiance=value)
        for h, value in enumerate(irradiance)
    ]


def always_on(name, watts, room=Room.KITCHEN):
    return ApplianceSpec(name, room, watts, frozenset(range(24)))


@pytest.fixture
def no_jitter():
    return FixedJitter(1.0)


@pytest.fixture
def reference_system():
    return REFERENCE_SYSTEM


@pytest.fixture
def large_system():
    """Large battery and array: stays far from its limits on dim days."""
    return SystemSpec(
        battery_capacity_kwh=20.0,
        min_soc_kwh=4.0,
        system_size_kw=10.0,
        efficiency=0.75,
    )


@pytest.fixture
def dataset_file(tmp_path):
    """Two days of hourly data written as the bundled JSON format."""
    entries = []
    start = datetime(2024, 3, 1)
    for h in range(48):
        ts = start + timedelta(hours=h)
        value = 0.6 if 9 <= ts.hour <= 15 else 0.0
        entries.append({"timestamp": ts.isoformat(), "ALLSKY_SFC_SW_DWN": value})
    # Out of order on disk
    entries.reverse()
    path = tmp_path / "solarData.json"
    path.write_text(json.dumps(entries))
    return path
