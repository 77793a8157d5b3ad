"""
Battery state-of-charge simulation over hourly irradiance samples.

Simulates a household PV-battery system:
- One calendar day at hourly resolution (charts and optimization tips)
- Consecutive days with the state of charge carried across midnight
- A forward projection on a clear-sky curve for a constant load
"""

import logging
from dataclasses import dataclass, field
from itertools import groupby
from typing import Optional

import pandas as pd

from .irradiance import clear_sky_irradiance
from .load_estimator import default_rng, estimate_load

logger = logging.getLogger(__name__)

LOW_BATTERY_MARGIN_PERCENT = 5


@dataclass(frozen=True)
class HourlyRecord:
    hour: int
    irradiance: float
    solar_kw: float
    load_kw: float
    soc: float
    prev_soc: float
    active_appliances: tuple = ()


def simulate_day(samples, appliances, system, start_soc=None, rng=None):
    """Fold hourly samples into a chain of battery states.

    The battery starts full unless ``start_soc`` (kWh) is given. Surplus
    solar charges up to capacity and is curtailed beyond it; a deficit
    discharges down to the minimum state of charge and the rest is unmet.

    Args:
        samples: chronologically ordered IrradianceSample values.
        appliances: ApplianceSpec values driving the load.
        system: SystemSpec of the installation.
        start_soc: state of charge before the first sample, in kWh.
        rng: random source for load jitter, see ``estimate_load``.

    Returns:
        One HourlyRecord per sample.
    """
    if rng is None:
        rng = default_rng()
    if start_soc is None:
        soc = system.battery_capacity_kwh
    else:
        soc = system.clamp_soc(start_soc)
        if soc != start_soc:
            logger.warning(
                "Start SoC %.2f kWh outside battery range, clamped to %.2f kWh",
                start_soc,
                soc,
            )

    records = []
    for sample in samples:
        hour = sample.timestamp.hour
        solar_kw = max(0.0, sample.irradiance) * system.system_size_kw * system.efficiency
        load_kw, active = estimate_load(hour, appliances, rng)

        prev_soc = soc
        if solar_kw >= load_kw:
            surplus = solar_kw - load_kw
            soc = min(system.battery_capacity_kwh, soc + surplus)
        else:
            deficit = load_kw - solar_kw
            soc = max(system.min_soc_kwh, soc - deficit)

        records.append(
            HourlyRecord(
                hour=hour,
                irradiance=sample.irradiance,
                solar_kw=solar_kw,
                load_kw=load_kw,
                soc=soc,
                prev_soc=prev_soc,
                active_appliances=tuple(active),
            )
        )

    if records:
        logger.debug(
            "Simulated %d hours: SoC %.2f -> %.2f kWh",
            len(records),
            records[0].prev_soc,
            records[-1].soc,
        )
    return records


def simulate_period(samples, appliances, system, start_soc=None, rng=None):
    """Simulate consecutive days, carrying the end-of-day SoC forward.

    Returns:
        dict mapping each calendar date to its HourlyRecord list.
    """
    if rng is None:
        rng = default_rng()
    soc = start_soc
    days = {}
    for day, day_samples in groupby(samples, key=lambda s: s.timestamp.date()):
        records = simulate_day(list(day_samples), appliances, system, soc, rng)
        days[day] = records
        soc = records[-1].soc
    return days


def summarize_day(records, system):
    """Aggregate one simulated day into the figures shown on the dashboard."""
    if not records:
        return {
            "total_solar": 0.0,
            "total_load": 0.0,
            "charged": 0.0,
            "discharged": 0.0,
            "start_soc_percent": 0.0,
            "end_soc_percent": 0.0,
            "max_soc_percent": 0.0,
            "min_soc_percent": 0.0,
            "low_battery_hours": 0,
            "peak_load": 0.0,
            "peak_hour": None,
        }
    total_solar = sum(r.solar_kw for r in records)
    total_load = sum(r.load_kw for r in records)
    charged = sum(max(0.0, r.soc - r.prev_soc) for r in records)
    discharged = sum(max(0.0, r.prev_soc - r.soc) for r in records)
    peak = max(records, key=lambda r: r.load_kw)
    soc_values = [r.soc for r in records]
    return {
        "total_solar": total_solar,
        "total_load": total_load,
        "charged": charged,
        "discharged": discharged,
        "start_soc_percent": system.soc_percent(records[0].prev_soc),
        "end_soc_percent": system.soc_percent(records[-1].soc),
        "max_soc_percent": system.soc_percent(max(soc_values)),
        "min_soc_percent": system.soc_percent(min(soc_values)),
        # an hour counts as low when it starts at or below the floor
        "low_battery_hours": sum(1 for r in records if r.prev_soc <= system.min_soc_kwh),
        "peak_load": peak.load_kw,
        "peak_hour": peak.hour,
    }


_PERIOD_AGGREGATES = {
    "total_solar": "sum",
    "total_load": "sum",
    "charged": "sum",
    "discharged": "sum",
    "max_soc_percent": "max",
    "min_soc_percent": "min",
    "low_battery_hours": "sum",
}


def summarize_period(days, system, by="day"):
    """Summarize a ``simulate_period`` result per day or per month.

    Returns:
        (periods, totals): a DataFrame with one row per day (indexed by date)
        or per month (indexed by "YYYY-MM"), and a dict of figures for the
        whole period. ``low_battery_periods`` counts the rows with at least
        one low-battery hour.
    """
    if by not in ("day", "month"):
        raise ValueError(f"Unknown period grouping: {by!r}")
    if not days:
        raise ValueError("No simulated days to summarize")

    rows = []
    for day, records in days.items():
        summary = summarize_day(records, system)
        summary["date"] = day
        rows.append(summary)
    daily = pd.DataFrame(rows).set_index("date")[list(_PERIOD_AGGREGATES)]

    if by == "day":
        periods = daily
    else:
        months = [f"{d:%Y-%m}" for d in daily.index]
        periods = daily.groupby(months).agg(_PERIOD_AGGREGATES)
        periods.index.name = "month"

    first, last = next(iter(days.values())), list(days.values())[-1]
    totals = {
        "total_solar": float(periods["total_solar"].sum()),
        "total_load": float(periods["total_load"].sum()),
        "charged": float(periods["charged"].sum()),
        "discharged": float(periods["discharged"].sum()),
        "start_soc_percent": system.soc_percent(first[0].prev_soc),
        "end_soc_percent": system.soc_percent(last[-1].soc),
        "max_soc_percent": float(periods["max_soc_percent"].max()),
        "min_soc_percent": float(periods["min_soc_percent"].min()),
        "low_battery_periods": int((periods["low_battery_hours"] > 0).sum()),
    }
    return periods, totals


def records_to_frame(records) -> pd.DataFrame:
    """Tabulate records for charting, one row per hour."""
    return pd.DataFrame(
        {
            "hour": [r.hour for r in records],
            "irradiance": [r.irradiance for r in records],
            "solar_kw": [r.solar_kw for r in records],
            "load_kw": [r.load_kw for r in records],
            "soc": [r.soc for r in records],
            "prev_soc": [r.prev_soc for r in records],
            "active_appliances": [
                ", ".join(a.name for a in r.active_appliances) for r in records
            ],
        }
    )


@dataclass
class ProjectionResult:
    labels: list = field(default_factory=list)
    soc_percent: list = field(default_factory=list)
    solar_kw: list = field(default_factory=list)
    load_kw: list = field(default_factory=list)
    total_solar: float = 0.0
    total_load: float = 0.0
    hours_to_low: Optional[int] = None

    @property
    def low_battery_warning(self) -> bool:
        return self.hours_to_low is not None


def project_battery(system, load_kw, start_soc_percent, start_hour, duration_hours):
    """Project the battery SoC for a constant load on a clear day.

    The first point is the current state; each following hour applies that
    hour's net energy. ``hours_to_low`` is the first step at which the SoC
    is within 5 percentage points of the floor.
    """
    min_percent = system.soc_percent(system.min_soc_kwh)
    soc = min(100.0, max(min_percent, float(start_soc_percent)))
    result = ProjectionResult()

    for step in range(duration_hours + 1):
        hour = (start_hour + step) % 24
        solar_kw = clear_sky_irradiance(hour) * system.system_size_kw * system.efficiency
        if step > 0:
            net_kwh = solar_kw - load_kw
            soc = min(100.0, max(min_percent, soc + net_kwh / system.battery_capacity_kwh * 100.0))

        result.labels.append(f"{hour:02d}:00")
        result.soc_percent.append(soc)
        result.solar_kw.append(solar_kw)
        result.load_kw.append(load_kw)
        result.total_solar += solar_kw
        result.total_load += load_kw
        if result.hours_to_low is None and soc <= min_percent + LOW_BATTERY_MARGIN_PERCENT:
            result.hours_to_low = step

    return result
