"""Test hourly load estimation."""

import numpy as np
import pytest

from solar_monitor.appliances import REFERENCE_APPLIANCES, ApplianceSpec, Room
from solar_monitor.load_estimator import FixedJitter, estimate_load


@pytest.mark.parametrize("hour", range(24))
def test_no_appliances_no_load(hour):
    assert estimate_load(hour, []) == (0, [])


def test_only_active_appliances_contribute(no_jitter):
    appliances = [
        ApplianceSpec("fan", Room.PARLOUR, 45, frozenset({12})),
        ApplianceSpec("TV", Room.PARLOUR, 90, frozenset({20})),
    ]

    load, active = estimate_load(12, appliances, no_jitter)

    assert load == pytest.approx(0.045)
    assert [a.name for a in active] == ["parlour_fan"]
    assert active[0].power_watts == 45
    assert active[0].load_kw == pytest.approx(0.045)


def test_jitter_multiplier_is_applied():
    appliances = [ApplianceSpec("iron", Room.BEDROOM, 1000, frozenset({13}))]

    load, active = estimate_load(13, appliances, FixedJitter(1.1))

    assert load == pytest.approx(1.1)
    # Rated power is reported unscaled
    assert active[0].power_watts == 1000


def test_random_jitter_within_ten_percent():
    rng = np.random.default_rng(7)
    appliances = [ApplianceSpec("AC", Room.BEDROOM, 1000, frozenset(range(24)))]

    for hour in range(24):
        load, _ = estimate_load(hour, appliances, rng)
        assert 0.9 <= load <= 1.1


def test_seeded_generators_agree():
    a = [estimate_load(h, REFERENCE_APPLIANCES, np.random.default_rng(3))[0] for h in range(24)]
    b = [estimate_load(h, REFERENCE_APPLIANCES, np.random.default_rng(3))[0] for h in range(24)]
    assert a == b


def test_reference_household_evening_peak(no_jitter):
    load, active = estimate_load(21, REFERENCE_APPLIANCES, no_jitter)

    names = {a.name for a in active}
    assert "bedroom_AC" in names
    assert "kitchen_refrigerator" not in names
    # AC + three sets of bulbs + TV
    assert load == pytest.approx((1000 + 24 + 18 + 90 + 18) / 1000)
