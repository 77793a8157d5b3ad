"""Household load estimation for a single hour of day."""

from dataclasses import dataclass

import numpy as np

JITTER_LOW = 0.9
JITTER_HIGH = 1.1


@dataclass(frozen=True)
class ActiveAppliance:
    name: str
    power_watts: float
    load_kw: float


class FixedJitter:
    """Random source that always returns the same multiplier.

    Stands in for a numpy Generator when reproducible loads are needed.
    """

    def __init__(self, multiplier=1.0):
        self.multiplier = multiplier

    def uniform(self, low=0.0, high=1.0):
        return self.multiplier


def default_rng(seed=None):
    return np.random.default_rng(seed)


def estimate_load(hour, appliances, rng=None):
    """Estimate the household load for ``hour``.

    Each active appliance draws its rated power scaled by a uniform
    multiplier in [0.9, 1.1]. ``rng`` is any object with a
    ``uniform(low, high)`` method; a fresh numpy Generator is used if omitted.

    Returns:
        (load_kw, active) where ``active`` lists the contributing appliances.
    """
    if rng is None:
        rng = default_rng()

    load_kw = 0.0
    active = []
    for appliance in appliances:
        if not appliance.is_active(hour):
            continue
        multiplier = float(rng.uniform(JITTER_LOW, JITTER_HIGH))
        contribution = appliance.power_watts * multiplier / 1000.0
        load_kw += contribution
        active.append(
            ActiveAppliance(
                name=appliance.key,
                power_watts=appliance.power_watts,
                load_kw=contribution,
            )
        )
    return load_kw, active
