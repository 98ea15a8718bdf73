"""
Call Center KPI Dashboard — Interactive Dashboard

Run with:  streamlit run app.py
"""

import pandas as pd
import streamlit as st

from agent_kpi_dashboard.charts import (
    agent_summary_figure,
    boolean_counts_figure,
    figure_to_png,
    gauge_figure,
    handling_time_figure,
    radar_figure,
    satisfaction_doughnut_figure,
    satisfaction_histogram_figure,
    sentiment_pie_figure,
    trend_figure,
    yearly_performance_figure,
)
from agent_kpi_dashboard.config import (
    AGENT_CALLS_FILE,
    AGENT_SUMMARY_METRICS,
    DASHBOARD_TITLE,
    GROUPING_VALUE_LABELS,
    NO_DATA_TEXT,
)
from agent_kpi_dashboard.dashboard import (
    get_agent_detail_table,
    get_available_ids,
    get_gauges,
    get_parse_issue_summary,
    get_yearly_cards,
    style_detail_table,
)
from agent_kpi_dashboard.filters import GroupingLevel, TimeWindow, normalize_filters
from agent_kpi_dashboard.loaders import load_agent_calls, load_yearly_kpis
from agent_kpi_dashboard.state import DashboardState

# ---------------------------------------------------------------------------
# Page config
# ---------------------------------------------------------------------------
st.set_page_config(
    page_title=DASHBOARD_TITLE,
    page_icon="📞",
    layout="wide",
    initial_sidebar_state="expanded",
)


# ---------------------------------------------------------------------------
# Data loading (cached) and session state
# ---------------------------------------------------------------------------
@st.cache_data
def load_static_agent_calls(source: str) -> pd.DataFrame:
    return load_agent_calls(source)


def session_dashboard(key: str) -> DashboardState:
    if key not in st.session_state:
        st.session_state[key] = DashboardState()
    return st.session_state[key]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
def metric_card(label: str, value: str, color: str = "#ff6f00"):
    st.markdown(
        f"""
        <div style="background: {color}15; border-left: 4px solid {color};
                    border-radius: 8px; padding: 16px; margin-bottom: 8px;">
            <div style="font-size: 13px; color: #888; font-weight: 600; text-transform: uppercase;">{label}</div>
            <div style="font-size: 28px; font-weight: 700; color: #222; margin: 4px 0;">{value}</div>
        </div>
        """,
        unsafe_allow_html=True,
    )


def chart_with_export(fig, name: str):
    """Render a figure with a PNG export action underneath."""
    st.plotly_chart(fig, use_container_width=True)
    if st.button("Export PNG", key=f"export_{name}"):
        try:
            png = figure_to_png(fig)
        except Exception as exc:
            st.info(f"PNG export unavailable: {exc}")
        else:
            st.download_button(
                "Download PNG",
                data=png,
                file_name=f"{name}.png",
                mime="image/png",
                key=f"download_{name}",
            )


def show_parse_issues(result):
    summary = get_parse_issue_summary(result)
    if not summary.empty:
        with st.expander(f"Field parse issues ({int(summary['rows'].sum())})"):
            st.caption("Values that could not be read. Aggregates treat them as 0 or NaN.")
            st.dataframe(summary, use_container_width=True, hide_index=True)


# ---------------------------------------------------------------------------
# Sidebar
# ---------------------------------------------------------------------------
st.sidebar.title(DASHBOARD_TITLE)
page = st.sidebar.radio("Navigate", ["Agent KPI", "Yearly Performance"])
st.sidebar.divider()


# ===========================================================================
# PAGE: Agent KPI
# ===========================================================================
if page == "Agent KPI":
    st.title("Agent KPI Dashboard")

    agent_state = session_dashboard("agent_dashboard")

    source = st.sidebar.text_input("Data source (path or URL)", value=str(AGENT_CALLS_FILE))
    upload = st.sidebar.file_uploader("...or upload a file", type=["csv", "xlsx"], key="agent_upload")

    try:
        if upload is not None:
            if not agent_state.is_loaded(upload.file_id):
                agent_state.replace_dataset(load_agent_calls(upload), upload.name, upload.file_id)
        elif not agent_state.is_loaded(source):
            agent_state.replace_dataset(load_static_agent_calls(source), source)
    except Exception as exc:
        st.error(f"Could not load call records: {exc}")
        st.stop()

    st.sidebar.caption(f"{len(agent_state.dataset):,} call records loaded")

    with st.form("filters"):
        col1, col2, col3, col4 = st.columns(4)
        with col1:
            window = st.selectbox(
                "Time Filter",
                list(TimeWindow),
                format_func=lambda w: w.label,
                index=list(TimeWindow).index(agent_state.filters.time_window),
            )
        with col2:
            level = st.selectbox(
                "Level Filter",
                list(GroupingLevel),
                format_func=lambda g: g.label,
                index=list(GroupingLevel).index(agent_state.filters.level),
            )
        with col3:
            level_value = st.text_input(
                GROUPING_VALUE_LABELS[level.value],
                value=agent_state.filters.level_value,
            )
        with col4:
            st.write("")
            submitted = st.form_submit_button("Go", use_container_width=True)

    if submitted:
        filters = normalize_filters({"time_window": window, "level": level, "level_value": level_value})
        agent_state.refresh_agent(filters)
    elif agent_state.result is None:
        agent_state.refresh_agent()

    if level is not GroupingLevel.ENTERPRISE:
        ids = get_available_ids(agent_state.dataset, level)
        if ids:
            st.caption(f"Known {level.label} IDs: {', '.join(ids[:20])}")

    result = agent_state.result

    # Gauges
    cols = st.columns(3)
    for col, gauge in zip(cols, get_gauges(result)):
        with col:
            if gauge["value"] is None or pd.isna(gauge["value"]):
                st.subheader(gauge["label"])
                st.markdown(f"### {gauge['display']}")
            else:
                st.plotly_chart(
                    gauge_figure(gauge["value"], gauge["color"], gauge["label"]),
                    use_container_width=True,
                )

    if not result.has_data:
        st.warning("No data for the selected filters.")
        st.stop()

    st.divider()

    col1, col2 = st.columns([2, 1])
    with col1:
        trend = result.series["trend"]
        if len(trend):
            chart_with_export(trend_figure(trend), "kpi_trend")
        else:
            st.info(f"KPI Trend: {NO_DATA_TEXT}")
    with col2:
        chart_with_export(radar_figure(result.series["overall_kpi"], "KPI Scores"), "overall_kpi")

    col1, col2 = st.columns([2, 1])
    with col1:
        st.subheader("Agent-wise Details")
        table = get_agent_detail_table(result.filtered)
        st.dataframe(style_detail_table(table), use_container_width=True, hide_index=True, height=450)
    with col2:
        chart_with_export(boolean_counts_figure(result.series["boolean"]), "kpi_distribution")

    st.divider()

    col1, col2 = st.columns([2, 1])
    with col1:
        metric = st.selectbox("Agent metric", ["Calls", *AGENT_SUMMARY_METRICS])
        chart_with_export(agent_summary_figure(result.series["agents"], metric), "agent_summary")
    with col2:
        sentiment = result.series["sentiment"]
        if len(sentiment):
            chart_with_export(sentiment_pie_figure(sentiment), "sentiment_mix")
        else:
            st.info(f"Call Sentiment Mix: {NO_DATA_TEXT}")

    show_parse_issues(result)


# ===========================================================================
# PAGE: Yearly Performance
# ===========================================================================
elif page == "Yearly Performance":
    st.title("Yearly Call Center Performance")

    yearly_state = session_dashboard("yearly_dashboard")

    upload = st.file_uploader("Select a KPI file", type=["csv", "xlsx"], key="yearly_upload")
    if st.button("Generate Dashboard"):
        if upload is None:
            st.warning("Please select a CSV file first.")
        else:
            try:
                yearly_state.replace_dataset(load_yearly_kpis(upload), upload.name, upload.file_id)
                yearly_state.refresh_yearly()
            except Exception as exc:
                st.error(f"Could not load {upload.name}: {exc}")

    result = yearly_state.result
    if result is None:
        st.stop()

    cards = get_yearly_cards(result)
    col1, col2 = st.columns(2)
    with col1:
        metric_card("Total Calls Handled", cards["total_calls"])
    with col2:
        metric_card("Average Handling Time", cards["avg_handling_time"], "#3498db")

    if not result.has_data:
        st.warning("The selected file has no rows.")
        st.stop()

    col1, col2 = st.columns(2)
    with col1:
        chart_with_export(yearly_performance_figure(result.series["yearly"]), "yearly_performance")
    with col2:
        chart_with_export(satisfaction_doughnut_figure(result.series["satisfaction"]), "customer_satisfaction")

    col1, col2 = st.columns(2)
    with col1:
        chart_with_export(radar_figure(result.series["kpi"], "Average KPI Score", "Average KPI Score"), "kpi_radar")
    with col2:
        chart_with_export(handling_time_figure(result.series["yearly"]), "handling_time")

    chart_with_export(satisfaction_histogram_figure(result.series["satisfaction"]), "satisfaction_histogram")

    show_parse_issues(result)
