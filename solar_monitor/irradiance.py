"""Historical irradiance dataset access.

The dataset is a JSON array with one entry per hour::

    [{"timestamp": "2024-01-01T00:00:00", "ALLSKY_SFC_SW_DWN": 0.0}, ...]

``ALLSKY_SFC_SW_DWN`` is the all-sky surface shortwave downward irradiance.
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime

import pandas as pd

from .exceptions import IrradianceDataError, NoDataForDateError

logger = logging.getLogger(__name__)

IRRADIANCE_KEY = "ALLSKY_SFC_SW_DWN"

# Clear-sky curve used for forward projections
SUNRISE_HOUR = 6
SUNSET_HOUR = 18
PEAK_IRRADIANCE = 0.8
SOLAR_NOON = 12


@dataclass(frozen=True)
class IrradianceSample:
    timestamp: datetime
    irradiance: float

    @property
    def hour(self) -> int:
        return self.timestamp.hour


def frame_from_entries(entries) -> pd.DataFrame:
    """Build a sorted ``timestamp``/``irradiance`` frame from raw entries."""
    frame = pd.DataFrame(list(entries))
    missing = {"timestamp", IRRADIANCE_KEY} - set(frame.columns)
    if missing:
        raise IrradianceDataError(
            f"Irradiance data is missing fields: {', '.join(sorted(missing))}"
        )
    try:
        frame["timestamp"] = pd.to_datetime(frame["timestamp"])
        frame["irradiance"] = pd.to_numeric(frame[IRRADIANCE_KEY])
    except (ValueError, TypeError) as e:
        raise IrradianceDataError(f"Malformed irradiance data: {e}") from e
    frame = frame[["timestamp", "irradiance"]]
    return frame.sort_values("timestamp", kind="stable").reset_index(drop=True)


def load_irradiance(path) -> pd.DataFrame:
    """Read the bundled irradiance dataset from a JSON file."""
    try:
        raw = pd.read_json(path, orient="records", convert_dates=False)
    except (ValueError, OSError) as e:
        raise IrradianceDataError(f"Could not read irradiance data from {path}: {e}") from e
    frame = frame_from_entries(raw.to_dict(orient="records"))
    logger.info(
        "Loaded %d irradiance samples (%s to %s)",
        len(frame),
        frame["timestamp"].min() if len(frame) else "-",
        frame["timestamp"].max() if len(frame) else "-",
    )
    return frame


def _to_samples(frame: pd.DataFrame) -> list:
    return [
        IrradianceSample(timestamp=ts.to_pydatetime(), irradiance=float(value))
        for ts, value in zip(frame["timestamp"], frame["irradiance"])
    ]


def _as_date(day) -> date:
    if isinstance(day, datetime):
        return day.date()
    if isinstance(day, date):
        return day
    try:
        return date.fromisoformat(str(day))
    except ValueError as e:
        raise NoDataForDateError(day, f"Invalid date {day!r}: {e}") from e


def samples_for_date(frame: pd.DataFrame, day) -> list:
    """Samples of one calendar day, raising NoDataForDateError if absent."""
    day = _as_date(day)
    selected = frame[frame["timestamp"].dt.date == day]
    if selected.empty:
        raise NoDataForDateError(day)
    return _to_samples(selected)


def samples_for_month(frame: pd.DataFrame, year: int, month: int) -> list:
    timestamps = frame["timestamp"]
    selected = frame[(timestamps.dt.year == year) & (timestamps.dt.month == month)]
    if selected.empty:
        raise NoDataForDateError(f"{year}-{month:02d}")
    return _to_samples(selected)


def samples_for_year(frame: pd.DataFrame, year: int) -> list:
    selected = frame[frame["timestamp"].dt.year == year]
    if selected.empty:
        raise NoDataForDateError(str(year))
    return _to_samples(selected)


def all_samples(frame: pd.DataFrame) -> list:
    return _to_samples(frame)


def available_dates(frame: pd.DataFrame) -> list:
    return sorted(set(frame["timestamp"].dt.date))


def clear_sky_irradiance(hour: int) -> float:
    """Synthetic irradiance for an hour of a clear day."""
    hour = hour % 24
    if hour < SUNRISE_HOUR or hour > SUNSET_HOUR:
        return 0.0
    noon_offset = abs(hour - SOLAR_NOON)
    if noon_offset <= 2:
        return PEAK_IRRADIANCE * (1 - noon_offset * 0.15)
    return PEAK_IRRADIANCE * max(0.0, 1 - (noon_offset - 2) * 0.25)
