"""
Call Center KPI Dashboard

Analytics backend turning call-center KPI exports (CSV or Excel) into
chart-ready series for a Streamlit front end.

Two views are supported:
    Yearly performance: calls handled, handling time, satisfaction and
    KPI averages per year (pipeline.run_yearly_pipeline).

    Agent KPI: per-call records filtered by time window and team/agent,
    then aggregated into a daily trend, radar, true/false counts and
    gauges (pipeline.run_agent_pipeline).

To add a trend or radar metric:
    Add the label -> column entry to config.TREND_METRICS or
    config.RADAR_FIELDS; the pipeline and charts pick it up.
"""
