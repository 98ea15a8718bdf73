"""Data ingestion loaders for call-center KPI exports."""

from .call_records import check_columns, load_call_records
from .call_records import load_agent_calls, load_yearly_kpis

__all__ = [
    "check_columns",
    "load_call_records",
    "load_agent_calls",
    "load_yearly_kpis",
]
