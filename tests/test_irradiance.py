"""Test loading and slicing the irradiance dataset."""

import json
from datetime import date, datetime

import pytest

from solar_monitor.exceptions import IrradianceDataError, NoDataForDateError
from solar_monitor.irradiance import (
    all_samples,
    available_dates,
    clear_sky_irradiance,
    frame_from_entries,
    load_irradiance,
    samples_for_date,
    samples_for_month,
    samples_for_year,
)


def test_load_irradiance_sorts_samples(dataset_file):
    frame = load_irradiance(dataset_file)

    assert list(frame.columns) == ["timestamp", "irradiance"]
    assert len(frame) == 48
    assert frame["timestamp"].is_monotonic_increasing
    assert available_dates(frame) == [date(2024, 3, 1), date(2024, 3, 2)]


def test_samples_for_date(dataset_file):
    frame = load_irradiance(dataset_file)
    samples = samples_for_date(frame, "2024-03-02")

    assert len(samples) == 24
    assert samples[0].timestamp == datetime(2024, 3, 2, 0)
    assert [s.hour for s in samples] == list(range(24))
    assert samples[12].irradiance == pytest.approx(0.6)
    assert samples[20].irradiance == 0

    assert samples_for_date(frame, date(2024, 3, 2)) == samples
    assert samples_for_date(frame, datetime(2024, 3, 2, 15)) == samples


def test_missing_date_raises(dataset_file):
    frame = load_irradiance(dataset_file)

    with pytest.raises(NoDataForDateError) as exc_info:
        samples_for_date(frame, "2024-03-05")
    assert exc_info.value.date == date(2024, 3, 5)
    assert "2024-03-05" in str(exc_info.value)


def test_samples_for_month(dataset_file):
    frame = load_irradiance(dataset_file)

    assert len(samples_for_month(frame, 2024, 3)) == 48
    assert all_samples(frame) == samples_for_month(frame, 2024, 3)
    with pytest.raises(NoDataForDateError):
        samples_for_month(frame, 2024, 4)


def test_missing_field_is_rejected(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text(json.dumps([{"timestamp": "2024-01-01T00:00:00", "GHI": 0.1}]))

    with pytest.raises(IrradianceDataError, match="ALLSKY_SFC_SW_DWN"):
        load_irradiance(path)


def test_malformed_values_are_rejected():
    with pytest.raises(IrradianceDataError):
        frame_from_entries([{"timestamp": "2024-01-01T00:00:00", "ALLSKY_SFC_SW_DWN": "cloudy"}])


def test_invalid_json_is_rejected(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("[{not json")

    with pytest.raises(IrradianceDataError):
        load_irradiance(path)


def test_clear_sky_curve():
    assert clear_sky_irradiance(3) == 0
    assert clear_sky_irradiance(19) == 0
    assert clear_sky_irradiance(12) == pytest.approx(0.8)
    assert clear_sky_irradiance(10) == pytest.approx(0.8 * 0.7)
    assert clear_sky_irradiance(8) == pytest.approx(0.8 * 0.5)
    assert clear_sky_irradiance(6) == 0
    assert clear_sky_irradiance(36) == clear_sky_irradiance(12)


def test_samples_for_year(dataset_file):
    frame = load_irradiance(dataset_file)

    assert samples_for_year(frame, 2024) == all_samples(frame)
    with pytest.raises(NoDataForDateError):
        samples_for_year(frame, 2023)


def test_missing_file_is_rejected(tmp_path):
    with pytest.raises(IrradianceDataError):
        load_irradiance(tmp_path / "nope.json")


@pytest.mark.parametrize("day", ["2024-13-01", "yesterday", ""])
def test_invalid_date_string_is_rejected(dataset_file, day):
    frame = load_irradiance(dataset_file)

    with pytest.raises(NoDataForDateError, match="Invalid date"):
        samples_for_date(frame, day)
