"""Plotly figures for the dashboard views."""

import numpy as np
import plotly.graph_objects as go

from .appliances import HOURS_PER_DAY, Room

HOUR_LABELS = [f"{h:02d}:00" for h in range(HOURS_PER_DAY)]


def _hour_labels(records):
    return [f"{r.hour:02d}:00" for r in records]


def power_flow_figure(records, title="Power Flow"):
    labels = _hour_labels(records)
    fig = go.Figure()
    fig.add_trace(go.Scatter(x=labels, y=[r.solar_kw for r in records], mode='lines', name='Solar Generation', line=dict(color='gold'), fill='tozeroy'))
    fig.add_trace(go.Scatter(x=labels, y=[r.load_kw for r in records], mode='lines', name='Household Load', line=dict(color='blue')))
    fig.update_layout(
        title=title,
        xaxis_title="Time of Day",
        yaxis_title="kW",
        showlegend=True,
    )
    return fig


def battery_status_figure(records, system, title="Battery State of Charge"):
    """Stacked hourly bars: stored level, charge gained, and low-state hours."""
    labels = _hour_labels(records)
    base, charge, low = [], [], []
    for r in records:
        start = system.soc_percent(r.prev_soc)
        end = system.soc_percent(r.soc)
        is_low = r.prev_soc <= system.min_soc_kwh
        base.append(0.0 if is_low else min(start, end))
        charge.append(max(0.0, end - start))
        low.append(start if is_low else 0.0)

    fig = go.Figure()
    fig.add_trace(go.Bar(x=labels, y=base, name='Battery Level', marker_color='#3b82f6'))
    fig.add_trace(go.Bar(x=labels, y=charge, name='Charging', marker_color='#facc15'))
    fig.add_trace(go.Bar(x=labels, y=low, name='Low Battery', marker_color='#ef4444'))
    fig.update_layout(
        barmode='stack',
        title=title,
        xaxis_title="Time of Day",
        yaxis_title="State of Charge (%)",
        yaxis=dict(range=[0, 100]),
        margin=dict(l=20, r=20, t=40, b=20),
    )
    return fig


def daily_totals_figure(days, title="Daily Energy Flows"):
    """Grouped bars of solar and load energy per simulated day."""
    dates = list(days)
    solar = [sum(r.solar_kw for r in days[d]) for d in dates]
    load = [sum(r.load_kw for r in days[d]) for d in dates]
    end_soc = [days[d][-1].soc for d in dates]

    fig = go.Figure()
    fig.add_trace(go.Bar(x=dates, y=solar, name='Solar Generation', marker_color='gold'))
    fig.add_trace(go.Bar(x=dates, y=load, name='Household Load', marker_color='blue'))
    fig.add_trace(go.Scatter(x=dates, y=end_soc, mode='lines', name='End-of-day SoC (kWh)', line=dict(color='green', dash='dash'), yaxis='y2'))
    fig.update_layout(
        barmode='group',
        title=title,
        xaxis_title="Date",
        yaxis_title="kWh",
        yaxis2=dict(title="SoC (kWh)", overlaying='y', side='right'),
        xaxis=dict(tickformat='%b %d'),
    )
    return fig


def room_usage_figure(appliances, room):
    """Nominal hourly draw of each appliance in one room."""
    room = Room.parse(room)
    fig = go.Figure()
    for appliance in appliances:
        if appliance.room is not room:
            continue
        profile = np.zeros(HOURS_PER_DAY)
        for hour in appliance.active_hours:
            profile[hour] = appliance.power_watts / 1000.0
        fig.add_trace(go.Scatter(x=HOUR_LABELS, y=profile, mode='lines', name=appliance.name, line_shape='hv'))
    fig.update_layout(
        title=f"{room.value} Energy Usage",
        xaxis_title="Time of Day",
        yaxis_title="kW",
        showlegend=True,
    )
    return fig


def projection_figure(result):
    fig = go.Figure()
    fig.add_trace(go.Scatter(x=result.labels, y=result.soc_percent, mode='lines+markers', name='SoC (%)', line=dict(color='green')))
    fig.add_trace(go.Scatter(x=result.labels, y=result.solar_kw, mode='lines', name='Solar (kW)', line=dict(color='gold'), yaxis='y2'))
    fig.add_trace(go.Scatter(x=result.labels, y=result.load_kw, mode='lines', name='Load (kW)', line=dict(color='red', dash='dash'), yaxis='y2'))
    fig.update_layout(
        title="Battery SoC Projection",
        xaxis_title="Time",
        yaxis=dict(title="State of Charge (%)", range=[0, 100]),
        yaxis2=dict(title="kW", overlaying='y', side='right'),
        showlegend=True,
    )
    return fig


def period_summary_figure(periods, title="Energy and Battery by Period"):
    """Solar and load energy bars with the SoC range of each period.

    ``periods`` is the frame returned by ``summarize_period``.
    """
    labels = [str(label) for label in periods.index]
    fig = go.Figure()
    fig.add_trace(go.Bar(x=labels, y=periods["total_solar"], name='Solar Generation', marker_color='gold'))
    fig.add_trace(go.Bar(x=labels, y=periods["total_load"], name='Household Load', marker_color='blue'))
    fig.add_trace(go.Scatter(x=labels, y=periods["max_soc_percent"], mode='lines+markers', name='Max SoC (%)', line=dict(color='green'), yaxis='y2'))
    fig.add_trace(go.Scatter(x=labels, y=periods["min_soc_percent"], mode='lines+markers', name='Min SoC (%)', line=dict(color='red', dash='dash'), yaxis='y2'))
    fig.update_layout(
        barmode='group',
        title=title,
        xaxis_title=periods.index.name.title() if periods.index.name else "Period",
        yaxis_title="kWh",
        yaxis2=dict(title="State of Charge (%)", overlaying='y', side='right', range=[0, 100]),
    )
    return fig
