"""
Call Center KPI Dashboard — command-line pipeline run.

Loads a KPI export, applies filters, runs the aggregation pipeline and
prints the dashboard outputs.

Usage:
    python main.py                                   # bundled agent calls file
    python main.py data/call_center_kpis.csv --variant yearly
    python main.py --window last_1_year --level team --value T1
    python main.py --simulate data/                  # write sample CSVs
"""

import argparse
import logging
import sys

from agent_kpi_dashboard.config import (
    AGENT_CALLS_FILE,
    LOG_DATE_FORMAT,
    LOG_FORMAT,
    YEARLY_KPI_FILE,
)
from agent_kpi_dashboard.dashboard import (
    get_agent_detail_table,
    get_gauges,
    get_parse_issue_summary,
    get_yearly_cards,
)
from agent_kpi_dashboard.filters import normalize_filters
from agent_kpi_dashboard.loaders import load_agent_calls, load_yearly_kpis
from agent_kpi_dashboard.simulator import write_sample_files
from agent_kpi_dashboard.state import DashboardState

# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------
logging.basicConfig(
    level=logging.INFO,
    format=LOG_FORMAT,
    datefmt=LOG_DATE_FORMAT,
)
logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the call-center KPI pipeline.")
    parser.add_argument("source", nargs="?", help="CSV/Excel path or URL")
    parser.add_argument("--variant", choices=["agent", "yearly"], default="agent")
    parser.add_argument("--window", default="all_time", help="time window, e.g. last_7_days")
    parser.add_argument("--level", default="enterprise", help="enterprise, team or agent")
    parser.add_argument("--value", default="", help="team or agent identifier")
    parser.add_argument("--simulate", metavar="DIR", help="write sample CSVs to DIR and exit")
    return parser.parse_args(argv)


def print_series(result) -> None:
    for name, series in result.series.items():
        print(f"\n{name}: {len(series)} labels")
        print(series.to_frame().to_string(index=False))


def run_yearly(source: str) -> None:
    state = DashboardState()
    state.replace_dataset(load_yearly_kpis(source), source)
    result = state.refresh_yearly()

    cards = get_yearly_cards(result)
    print(f"\nTotal calls:        {cards['total_calls']}")
    print(f"Avg handling time:  {cards['avg_handling_time']}")
    if result.has_data:
        print_series(result)
    else:
        print("\nNo data.")
    print_issues(result)


def run_agent(source: str, args: argparse.Namespace) -> None:
    state = DashboardState()
    state.replace_dataset(load_agent_calls(source), source)
    filters = normalize_filters({
        "time_window": args.window,
        "level": args.level,
        "level_value": args.value,
    })
    result = state.refresh_agent(filters)

    print(f"\nFilters: {filters.time_window.label} | {filters.level.label} {filters.level_value!r}")
    print(f"Rows: {len(result.filtered)} of {len(state.dataset)}")

    for gauge in get_gauges(result):
        print(f"  {gauge['label']:18s} | {gauge['display']:>6s} | {gauge['band']}")

    if not result.has_data:
        print("\nNo data for the selected filters.")
        return

    print_series(result)
    print("\nAgent-wise details (first 10):")
    print(get_agent_detail_table(result.filtered).head(10).to_string(index=False))
    print_issues(result)


def print_issues(result) -> None:
    summary = get_parse_issue_summary(result)
    if not summary.empty:
        print("\nField parse issues:")
        print(summary.to_string(index=False))


def main(argv: list[str] | None = None) -> int:
    """Run the pipeline for one export and print its outputs."""
    args = parse_args(argv)

    if args.simulate:
        paths = write_sample_files(args.simulate)
        for name, path in paths.items():
            print(f"Wrote {name} sample: {path}")
        return 0

    print("=" * 70)
    print("  CALL CENTER KPI DASHBOARD — Pipeline Run")
    print("=" * 70)

    try:
        if args.variant == "yearly":
            run_yearly(args.source or str(YEARLY_KPI_FILE))
        else:
            run_agent(args.source or str(AGENT_CALLS_FILE), args)
    except (OSError, ValueError) as exc:
        logger.error("Pipeline failed: %s", exc)
        return 1

    print("\n" + "=" * 70)
    print("  Pipeline complete.")
    print("=" * 70)
    return 0


if __name__ == "__main__":
    sys.exit(main())
