import os

import pandas as pd
import plotly.graph_objects as go
import streamlit as st

from solar_monitor import charts
from solar_monitor.appliances import (
    REFERENCE_APPLIANCES,
    ApplianceRecord,
    Room,
    appliances_from_records,
    daily_energy_kwh,
    room_hourly_load,
)
from solar_monitor.exceptions import SolarMonitorError
from solar_monitor.irradiance import (
    available_dates,
    load_irradiance,
    samples_for_date,
    samples_for_month,
    samples_for_year,
)
from solar_monitor.load_estimator import default_rng
from solar_monitor.settings import REFERENCE_SYSTEM, SystemConfig
from solar_monitor.simulation import (
    project_battery,
    records_to_frame,
    simulate_day,
    simulate_period,
    summarize_day,
    summarize_period,
)
from solar_monitor.tips import applicable_tips, build_tip_catalog

DEFAULT_DATA_PATH = os.environ.get("SOLAR_DATA_PATH", "data/solarData.json")

PERIOD_VIEWS = ["Daily", "Monthly", "Yearly"]

DEFAULT_APPLIANCE_TABLE = pd.DataFrame(
    [
        {"name": "Refrigerator", "room": Room.KITCHEN.value, "wattage": 150.0, "usage_hours": 12.0},
        {"name": "Bulbs", "room": Room.PARLOUR.value, "wattage": 18.0, "usage_hours": 5.0},
        {"name": "Laptop", "room": Room.BEDROOM.value, "wattage": 40.0, "usage_hours": 8.0},
    ]
)

TIP_ICONS = {
    "weather": "☀️",
    "battery": "🔋",
    "appliance": "🔌",
    "system": "📈",
}

st.set_page_config(
    page_title="Solar Monitoring Dashboard",
    layout="wide",
    initial_sidebar_state="expanded"
)
st.title("Solar Monitoring Dashboard")


@st.cache_data
def load_dataset(source):
    return load_irradiance(source)


def metric_with_emoji(label, value, emoji, unit=""):
    st.markdown(f"""
    <div style="
        padding: 0.5rem;
        border-radius: 0.5rem;
        background: #f8f9fa;
        margin-bottom: 0.5rem;
        border-left: 4px solid #e9ecef;
    ">
        <div style="font-size: 0.9rem; color: #495057;">{emoji} {label}</div>
        <div style="font-size: 1.2rem; font-weight: 600; margin-top: 0.25rem; color: #212529;">
            {value}{unit}
        </div>
    </div>
    """, unsafe_allow_html=True)


# Sidebar - dataset
st.sidebar.header("Irradiance Data")
uploaded = st.sidebar.file_uploader("Upload dataset (JSON)", type="json")
data_path = st.sidebar.text_input("Dataset path", value=DEFAULT_DATA_PATH)

try:
    frame = load_dataset(uploaded if uploaded is not None else data_path)
except (SolarMonitorError, OSError) as e:
    st.error(f"Could not load irradiance data: {e}")
    st.stop()

dates = available_dates(frame)
if not dates:
    st.error("The irradiance dataset is empty.")
    st.stop()

# Sidebar - system configuration
st.sidebar.header("Solar System")
use_reference = st.sidebar.checkbox("Use reference household", value=True)
config = SystemConfig()
if not use_reference:
    config.update(
        battery_amp_hours=st.sidebar.number_input("Battery Capacity (Ah)", min_value=1.0, value=float(config.battery_amp_hours), step=10.0),
        min_soc_percent=st.sidebar.slider("Minimum State of Charge (%)", min_value=0, max_value=95, value=int(config.min_soc_percent), step=5),
        panel_watts=st.sidebar.number_input("Panel Rating (W)", min_value=1.0, value=float(config.panel_watts), step=10.0),
        panel_count=st.sidebar.number_input("Number of Panels", min_value=1, value=config.panel_count, step=1),
        installation_year=st.sidebar.number_input("Installation Year", min_value=1990, max_value=2100, value=config.installation_year, step=1),
    )
selected_date = st.sidebar.date_input("Date", value=dates[0], min_value=dates[0], max_value=dates[-1])
seed = st.sidebar.number_input("Load jitter seed", min_value=0, value=42, step=1)

view = st.sidebar.radio("View", PERIOD_VIEWS, horizontal=True)

# Appliance editor; the returned frame holds this run's edits
with st.expander("Appliances", expanded=not use_reference):
    if use_reference:
        st.info("Untick 'Use reference household' in the sidebar to simulate your own appliances.")
    appliance_table = st.data_editor(
        DEFAULT_APPLIANCE_TABLE,
        key="appliance_editor",
        num_rows="dynamic",
        disabled=use_reference,
        column_config={
            "room": st.column_config.SelectboxColumn("Room", options=[r.value for r in Room]),
            "wattage": st.column_config.NumberColumn("Wattage (W)", min_value=1),
            "usage_hours": st.column_config.NumberColumn("Usage Hours/Day", min_value=0, max_value=24, step=0.5),
        },
        use_container_width=True,
    )

try:
    if use_reference:
        system = REFERENCE_SYSTEM
        appliances = list(REFERENCE_APPLIANCES)
    else:
        system = config.to_system_spec()
        appliances = appliances_from_records(
            ApplianceRecord(row["name"], row["room"], float(row["wattage"]), float(row["usage_hours"]))
            for row in appliance_table.dropna().to_dict(orient="records")
        )
except SolarMonitorError as e:
    st.error(f"Invalid configuration: {e}")
    st.stop()

catalog = build_tip_catalog(system, include_fallback=True)

try:
    day_samples = samples_for_date(frame, selected_date)
    if view == "Monthly":
        period_samples = samples_for_month(frame, selected_date.year, selected_date.month)
        period_label = f"{selected_date:%B %Y}"
    elif view == "Yearly":
        period_samples = samples_for_year(frame, selected_date.year)
        period_label = f"{selected_date:%Y}"
except SolarMonitorError as e:
    st.warning(str(e))
    st.stop()

records = simulate_day(day_samples, appliances, system, rng=default_rng(seed))
summary = summarize_day(records, system)

if view != "Daily":
    period_days = simulate_period(period_samples, appliances, system, rng=default_rng(seed))
    # monthly views list days, yearly views list months
    period_unit = "day" if view == "Monthly" else "month"
    periods, totals = summarize_period(period_days, system, by=period_unit)

tab_gen, tab_usage, tab_battery, tab_tips, tab_projection, tab_settings = st.tabs(
    ["Energy Generated", "Energy Usage", "Battery Status", "Optimization Tips", "Battery Projection", "Appliances"]
)

with tab_gen:
    if view == "Daily":
        st.subheader(f"Energy Generated on {selected_date:%B %d, %Y}")
        solar_total, load_total = summary["total_solar"], summary["total_load"]
    else:
        st.subheader(f"Energy Generated in {period_label}")
        solar_total, load_total = totals["total_solar"], totals["total_load"]
    col1, col2, col3 = st.columns(3)
    with col1:
        metric_with_emoji("Solar Generated", f"{solar_total:.2f}", "☀️", " kWh")
    with col2:
        metric_with_emoji("Household Load", f"{load_total:.2f}", "🏠", " kWh")
    with col3:
        metric_with_emoji("System Size", f"{system.system_size_kw:.1f}", "🔆", " kW")

    if view == "Daily":
        st.plotly_chart(charts.power_flow_figure(records, "Single Day Power Flow"), use_container_width=True)
    elif view == "Monthly":
        st.plotly_chart(
            charts.daily_totals_figure(period_days, f"{period_label} Daily Energy Flows"),
            use_container_width=True,
        )
    else:
        st.plotly_chart(
            charts.period_summary_figure(periods, f"{period_label} Monthly Energy Flows"),
            use_container_width=True,
        )

with tab_usage:
    st.subheader("Energy Usage by Room")
    metric_with_emoji("Nominal Daily Usage", f"{daily_energy_kwh(appliances):.2f}", "🔌", " kWh")
    for room in Room:
        room_profile = room_hourly_load(appliances, room)
        if not room_profile.any():
            continue
        st.markdown(f"<h4>{room.value} - {room_profile.sum():.2f} kWh/day</h4>", unsafe_allow_html=True)
        st.plotly_chart(charts.room_usage_figure(appliances, room), use_container_width=True)

with tab_battery:
    if view == "Daily":
        st.subheader("Battery Status")
        col1, col2 = st.columns(2)
        with col1:
            metric_with_emoji("Charged", f"{summary['charged']:.2f}", "⚡", " kWh")
            metric_with_emoji("Start SoC", f"{summary['start_soc_percent']:.1f}", "🔋", " %")
            metric_with_emoji("Low Battery Hours", f"{summary['low_battery_hours']}", "🪫")
        with col2:
            metric_with_emoji("Discharged", f"{summary['discharged']:.2f}", "📉", " kWh")
            metric_with_emoji("End SoC", f"{summary['end_soc_percent']:.1f}", "🔋", " %")
            peak = "-" if summary["peak_hour"] is None else f"{summary['peak_load']:.2f} kW at {summary['peak_hour']:02d}:00"
            metric_with_emoji("Peak Load", peak, "🏠")
        st.plotly_chart(charts.battery_status_figure(records, system), use_container_width=True)
        with st.expander("Hourly details"):
            st.dataframe(records_to_frame(records), use_container_width=True)
    else:
        st.subheader(f"Battery Status in {period_label}")
        col1, col2, col3 = st.columns(3)
        with col1:
            metric_with_emoji("Charged", f"{totals['charged']:.2f}", "⚡", " kWh")
            metric_with_emoji("Discharged", f"{totals['discharged']:.2f}", "📉", " kWh")
        with col2:
            metric_with_emoji("Max SoC", f"{totals['max_soc_percent']:.1f}", "🔋", " %")
            metric_with_emoji("Min SoC", f"{totals['min_soc_percent']:.1f}", "🪫", " %")
        with col3:
            metric_with_emoji(
                f"Low Battery {period_unit.title()}s",
                f"{totals['low_battery_periods']} of {len(periods)}",
                "⚠️",
            )
            metric_with_emoji("End SoC", f"{totals['end_soc_percent']:.1f}", "🔋", " %")
        st.plotly_chart(
            charts.period_summary_figure(periods, f"Battery Range per {period_unit.title()}"),
            use_container_width=True,
        )
        with st.expander(f"Per-{period_unit} details"):
            st.dataframe(periods, use_container_width=True)

with tab_tips:
    st.subheader(f"Optimization Tips for {selected_date:%B %d, %Y}")
    for tip in applicable_tips(records, catalog):
        st.markdown(f"**{TIP_ICONS[tip.category.value]} {tip.title}**")
        st.write(tip.description)

with tab_projection:
    st.subheader("Battery SoC Projection")
    st.caption("Simulate your battery on a clear day with a constant appliance load.")
    col1, col2, col3 = st.columns(3)
    with col1:
        current_soc = st.number_input("Current Battery SoC (%)", min_value=0, max_value=100, value=80)
    with col2:
        start_hour = st.selectbox("Start Time", list(range(24)), index=18, format_func=lambda h: f"{h:02d}:00")
    with col3:
        duration = st.slider("Duration (hours)", min_value=1, max_value=24, value=6)
    chosen = st.multiselect(
        "Appliances to run",
        options=list(range(len(appliances))),
        format_func=lambda i: f"{appliances[i].name} ({appliances[i].room.value}, {appliances[i].power_watts:.0f} W)",
    )
    load_kw = sum(appliances[i].power_watts for i in chosen) / 1000.0
    projection = project_battery(system, load_kw, current_soc, start_hour, duration)
    st.plotly_chart(charts.projection_figure(projection), use_container_width=True)
    if projection.low_battery_warning:
        st.warning(f"Battery reaches a low state after {projection.hours_to_low} hour(s).")
    else:
        st.success("Battery stays above the low threshold for the whole projection.")

with tab_settings:
    st.subheader("Configured Appliances")
    fig = go.Figure()
    fig.add_trace(go.Bar(x=[a.key for a in appliances], y=[a.power_watts * len(a.active_hours) / 1000.0 for a in appliances], marker_color='purple'))
    fig.update_layout(title="Nominal Daily Energy per Appliance", xaxis_title="Appliance", yaxis_title="kWh")
    st.plotly_chart(fig, use_container_width=True)


st.info("Use the sidebar to adjust your system and rerun the simulation interactively!")
