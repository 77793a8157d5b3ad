"""Test dashboard figure construction."""

from datetime import datetime

import pytest

from conftest import always_on, make_day
from solar_monitor import charts
from solar_monitor.appliances import REFERENCE_APPLIANCES, Room
from solar_monitor.simulation import project_battery, simulate_day, simulate_period, summarize_period


def test_power_flow_figure(reference_system, no_jitter):
    records = simulate_day(make_day(0.4), REFERENCE_APPLIANCES, reference_system, rng=no_jitter)
    fig = charts.power_flow_figure(records)

    assert [trace.name for trace in fig.data] == ["Solar Generation", "Household Load"]
    assert len(fig.data[0].x) == 24
    assert fig.data[0].x[0] == "00:00"


def test_battery_status_figure_marks_low_hours(reference_system, no_jitter):
    records = simulate_day(make_day(0.0), [always_on("pump", 500)], reference_system, rng=no_jitter)
    fig = charts.battery_status_figure(records, reference_system)

    base, charge, low = (list(trace.y) for trace in fig.data)
    assert base[0] == pytest.approx(90.0)
    assert all(c == 0 for c in charge)
    # From 08:00 every hour starts at the 20 % floor
    assert low[8:] == [pytest.approx(20.0)] * 16
    assert base[8:] == [0.0] * 16


def test_daily_totals_figure(reference_system, no_jitter):
    samples = make_day(0.3, datetime(2024, 5, 1)) + make_day(0.3, datetime(2024, 5, 2))
    days = simulate_period(samples, [], reference_system, rng=no_jitter)
    fig = charts.daily_totals_figure(days)

    assert len(fig.data) == 3
    assert list(fig.data[0].y) == pytest.approx([0.3 * 2 * 0.75 * 24] * 2)


def test_room_usage_figure_only_shows_room():
    fig = charts.room_usage_figure(REFERENCE_APPLIANCES, Room.KITCHEN)

    assert [trace.name for trace in fig.data] == ["refrigerator", "microwave", "washingMachine", "bulbs"]
    assert fig.layout.title.text == "Kitchen Energy Usage"


def test_projection_figure(reference_system):
    result = project_battery(reference_system, 0.5, 60, 18, 4)
    fig = charts.projection_figure(result)

    assert len(fig.data) == 3
    assert list(fig.data[0].y) == result.soc_percent


def test_period_summary_figure(reference_system, no_jitter):
    samples = make_day(0.0, datetime(2024, 1, 31)) + make_day(0.0, datetime(2024, 2, 1))
    days = simulate_period(samples, [always_on("pump", 500)], reference_system, rng=no_jitter)
    periods, _ = summarize_period(days, reference_system, by="month")
    fig = charts.period_summary_figure(periods)

    assert [trace.name for trace in fig.data] == ["Solar Generation", "Household Load", "Max SoC (%)", "Min SoC (%)"]
    assert list(fig.data[0].x) == ["2024-01", "2024-02"]
    assert list(fig.data[3].y) == pytest.approx([20.0, 20.0])
    assert fig.layout.xaxis.title.text == "Month"
