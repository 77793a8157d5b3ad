"""Household appliance definitions and their hour-of-day activity windows."""

import math
import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterable

import numpy as np

from .exceptions import SystemConfigurationError

HOURS_PER_DAY = 24


class Room(str, Enum):
    PARLOUR = "Parlour"
    KITCHEN = "Kitchen"
    BEDROOM = "Bedroom"

    @classmethod
    def parse(cls, value) -> "Room":
        if isinstance(value, cls):
            return value
        for room in cls:
            if str(value).strip().lower() == room.value.lower():
                return room
        raise SystemConfigurationError("room", f"Unknown room: {value!r}")


@dataclass(frozen=True)
class ApplianceSpec:
    """An appliance with a fixed daily activity pattern.

    ``active_hours`` holds the hours of day (0-23) in which the appliance
    draws its rated power. Day of week and season are not modelled.
    """

    name: str
    room: Room
    power_watts: float
    active_hours: frozenset = frozenset()

    def is_active(self, hour: int) -> bool:
        return hour % HOURS_PER_DAY in self.active_hours

    @property
    def key(self) -> str:
        return f"{self.room.value.lower()}_{self.name}"


@dataclass(frozen=True)
class ApplianceRecord:
    """Appliance row as configured by the user."""

    name: str
    room: str
    wattage: float
    usage_hours: float


# (keywords, first active hour); checked in order, first match wins
_USAGE_START_HOURS = (
    (("ac", "air condition"), 18),
    (("bulb", "light"), 18),
    (("laptop", "computer"), 8),
    (("iron", "pressing"), 13),
    (("fan",), 19),
)
_CONTINUOUS_KEYWORDS = ("fridge", "refrigerator", "freezer")
DEFAULT_START_HOUR = 6


def _matches(name: str, keyword: str) -> bool:
    # short keywords must be whole words, "ac" must not match "vacuum"
    if len(keyword) <= 2:
        return keyword in re.findall(r"[a-z]+", name)
    return keyword in name


def hour_window(start: int, hours: float) -> frozenset:
    """Consecutive hours from ``start``, wrapping past midnight."""
    count = min(HOURS_PER_DAY, max(0, math.ceil(hours)))
    return frozenset((start + offset) % HOURS_PER_DAY for offset in range(count))


def spread_hours(hours: float) -> frozenset:
    """``hours`` active hours spaced evenly across the day."""
    count = min(HOURS_PER_DAY, max(0, math.ceil(hours)))
    if count == 0:
        return frozenset()
    step = HOURS_PER_DAY / count
    return frozenset(int(i * step) for i in range(count))


def usage_window(name: str, usage_hours: float) -> frozenset:
    """Guess the active hours of an appliance from its name.

    Known appliances run for ``usage_hours`` consecutive hours from a typical
    start time; cycling appliances (fridges) are spread across the day.
    Keywords are checked in that order, so "Fridge light" is a light.
    """
    lowered = name.lower()
    for keywords, start in _USAGE_START_HOURS:
        if any(_matches(lowered, keyword) for keyword in keywords):
            return hour_window(start, usage_hours)
    if any(_matches(lowered, keyword) for keyword in _CONTINUOUS_KEYWORDS):
        return spread_hours(usage_hours)
    return hour_window(DEFAULT_START_HOUR, usage_hours)


def appliance_from_record(record: ApplianceRecord) -> ApplianceSpec:
    """Validate a configured appliance row and derive its activity window."""
    name = record.name.strip()
    if not name:
        raise SystemConfigurationError("name", "Appliance name is required")
    if record.wattage <= 0:
        raise SystemConfigurationError(
            "wattage", f"Wattage of {name} must be positive"
        )
    if not 0 <= record.usage_hours <= HOURS_PER_DAY:
        raise SystemConfigurationError(
            "usage_hours", f"Usage hours of {name} must be between 0 and 24"
        )
    return ApplianceSpec(
        name=name,
        room=Room.parse(record.room),
        power_watts=float(record.wattage),
        active_hours=usage_window(name, record.usage_hours),
    )


def appliances_from_records(records: Iterable[ApplianceRecord]) -> list:
    return [appliance_from_record(record) for record in records]


def _hours(*ranges) -> frozenset:
    hours = set()
    for start, stop in ranges:
        hours.update(range(start, stop))
    return frozenset(hours)


REFERENCE_APPLIANCES = (
    ApplianceSpec("AC", Room.BEDROOM, 1000, _hours((21, 24), (0, 2))),
    ApplianceSpec("laptop", Room.BEDROOM, 40, _hours((8, 16))),
    ApplianceSpec("bulbs", Room.BEDROOM, 24, _hours((18, 24))),
    ApplianceSpec("iron", Room.BEDROOM, 1000, _hours((13, 14))),
    ApplianceSpec("refrigerator", Room.KITCHEN, 100, _hours((9, 21))),
    ApplianceSpec("microwave", Room.KITCHEN, 1000, frozenset({8, 16})),
    ApplianceSpec("washingMachine", Room.KITCHEN, 400, _hours((10, 12))),
    ApplianceSpec("bulbs", Room.KITCHEN, 18, _hours((19, 24))),
    ApplianceSpec("fan", Room.PARLOUR, 45, _hours((11, 17))),
    ApplianceSpec("TV", Room.PARLOUR, 90, _hours((16, 23))),
    ApplianceSpec("bulbs", Room.PARLOUR, 18, _hours((18, 23))),
)


def daily_energy_kwh(appliances) -> float:
    """Nominal energy drawn per day, ignoring jitter."""
    return sum(a.power_watts * len(a.active_hours) for a in appliances) / 1000.0


def room_hourly_load(appliances, room) -> np.ndarray:
    """Nominal hourly load profile (kW) of one room, shape (24,)."""
    room = Room.parse(room)
    profile = np.zeros(HOURS_PER_DAY)
    for appliance in appliances:
        if appliance.room is not room:
            continue
        for hour in appliance.active_hours:
            profile[hour] += appliance.power_watts / 1000.0
    return profile
