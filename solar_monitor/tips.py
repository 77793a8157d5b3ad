"""Optimization tips derived from one simulated day.

A tip pairs advisory text with a predicate over the day's HourlyRecord
list. The catalog is plain data built for a given SystemSpec, so every
view evaluates the same rules against the same thresholds.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable

# Thresholds on the irradiance scale of the dataset
LOW_IRRADIANCE = 0.15
HIGH_IRRADIANCE = 0.3
PEAK_HOURS = range(10, 15)
DAYLIGHT_HOURS = range(9, 17)

LOW_PEAK_LOAD_KW = 0.3
FULL_FRACTION = 0.9
MAX_FULL_HOURS = 3
HEAVY_APPLIANCE_WATTS = 400
HIGH_LOAD_FRACTION = 0.6  # of system size
HEAVY_DISCHARGE_FRACTION = 0.2  # of battery capacity
BALANCE_TOLERANCE_KW = 0.2


class TipCategory(str, Enum):
    WEATHER = "weather"
    BATTERY = "battery"
    APPLIANCE = "appliance"
    SYSTEM = "system"


@dataclass(frozen=True)
class Tip:
    id: int
    category: TipCategory
    title: str
    description: str
    predicate: Callable
    fallback: bool = False


def applicable_tips(records, catalog):
    """Return the tips of ``catalog`` whose predicate holds for ``records``.

    Catalog order is preserved. Fallback tips are not evaluated as
    predicates: they apply exactly when no regular tip does. ``records``
    must not be empty.
    """
    fired = [not tip.fallback and bool(tip.predicate(records)) for tip in catalog]
    any_fired = any(fired)
    return [
        tip
        for tip, hit in zip(catalog, fired)
        if (not any_fired if tip.fallback else hit)
    ]


def _average_irradiance(records):
    return sum(r.irradiance for r in records) / len(records)


def _low_solar_day(records):
    return _average_irradiance(records) < LOW_IRRADIANCE


def _peak_not_utilized(records):
    peak = [r for r in records if r.hour in PEAK_HOURS]
    high_irradiance = any(r.irradiance > HIGH_IRRADIANCE for r in peak)
    low_load = all(r.load_kw < LOW_PEAK_LOAD_KW for r in peak)
    return high_irradiance and low_load


def _heavy_appliance_low_solar(records):
    return any(
        r.irradiance < LOW_IRRADIANCE
        and any(a.power_watts >= HEAVY_APPLIANCE_WATTS for a in r.active_appliances)
        for r in records
    )


def _solar_barely_covered(records):
    close = sum(1 for r in records if abs(r.solar_kw - r.load_kw) < BALANCE_TOLERANCE_KW)
    return close > len(records) / 2


def _battery_covered_load(records):
    dependent = sum(1 for r in records if r.solar_kw < r.load_kw and r.soc < r.prev_soc)
    return dependent > len(records) / 2


def build_tip_catalog(system, include_fallback=False):
    """Build the tip catalog with battery thresholds scaled to ``system``."""
    full_soc = system.battery_capacity_kwh * FULL_FRACTION
    high_load = system.system_size_kw * HIGH_LOAD_FRACTION
    heavy_discharge = system.battery_capacity_kwh * HEAVY_DISCHARGE_FRACTION

    def battery_low(records):
        return any(r.soc <= system.min_soc_kwh for r in records)

    def battery_full_too_long(records):
        full_hours = sum(
            1 for r in records if r.hour in DAYLIGHT_HOURS and r.soc >= full_soc
        )
        return full_hours > MAX_FULL_HOURS

    def peak_discharge(records):
        return any(
            r.load_kw > high_load and r.prev_soc - r.soc > heavy_discharge
            for r in records
        )

    catalog = [
        Tip(
            1,
            TipCategory.WEATHER,
            "Low Solar Day",
            "Solar output was low today. Limit appliance use during early or "
            "late hours, or consider a backup energy plan on cloudy days.",
            _low_solar_day,
        ),
        Tip(
            2,
            TipCategory.WEATHER,
            "Peak Solar Period Not Utilized",
            "Solar generation peaked midday but wasn't fully used. Shift some "
            "appliance use (e.g., ironing or TV) into 10:00-14:00.",
            _peak_not_utilized,
        ),
        Tip(
            3,
            TipCategory.BATTERY,
            "Battery Entered Low State",
            "Battery dropped to critical levels today. Try moving "
            "high-consumption appliances to daylight hours when solar is available.",
            battery_low,
        ),
        Tip(
            4,
            TipCategory.BATTERY,
            "Battery Stayed Full Too Long",
            "Battery remained full during solar hours. Consider shifting "
            "appliance use to daylight to make better use of solar energy.",
            battery_full_too_long,
        ),
        Tip(
            5,
            TipCategory.APPLIANCE,
            "Heavy Appliance Used During Low Solar",
            "High-power appliance was used when solar generation was low. "
            "Delay its use to after 10:00 for better battery health.",
            _heavy_appliance_low_solar,
        ),
        Tip(
            6,
            TipCategory.APPLIANCE,
            "Appliance Load Caused Peak Discharge",
            "A high load period caused heavy battery discharge. Avoid "
            "clustering multiple appliances at the same time.",
            peak_discharge,
        ),
        Tip(
            7,
            TipCategory.SYSTEM,
            "Solar Barely Covered Load",
            "Solar generation just covered your household load. Reduce "
            "high-power usage during early or late hours.",
            _solar_barely_covered,
        ),
        Tip(
            8,
            TipCategory.SYSTEM,
            "Battery Covered Load All Day",
            "Battery handled most of the day's usage. Shift more load to "
            "daylight when solar is available.",
            _battery_covered_load,
        ),
    ]
    if include_fallback:
        catalog.append(
            Tip(
                9,
                TipCategory.SYSTEM,
                "System Running Smoothly",
                "Solar, battery and household load were well balanced today. "
                "Keep up your current usage pattern.",
                lambda records: True,
                fallback=True,
            )
        )
    return catalog
