"""
Application state for one dashboard session.

The Streamlit app keeps one ``DashboardState`` per view in
``st.session_state``; the command-line run builds one directly.
"""

import logging
from dataclasses import dataclass, field

import pandas as pd

from .filters import FilterState
from .pipeline import PipelineResult, run_agent_pipeline, run_yearly_pipeline

logger = logging.getLogger(__name__)


@dataclass
class DashboardState:
    dataset: pd.DataFrame = field(default_factory=pd.DataFrame)
    source: str | None = None
    source_key: str | None = None
    filters: FilterState = field(default_factory=FilterState)
    result: PipelineResult | None = None

    def is_loaded(self, source_key: str | None) -> bool:
        """True when the dataset came from the source identified by ``source_key``."""
        return source_key is not None and self.source_key == source_key

    def replace_dataset(
        self,
        dataset: pd.DataFrame,
        source: str | None = None,
        source_key: str | None = None,
    ) -> None:
        """Swap in a newly loaded dataset and drop results of the old one.

        ``source_key`` identifies one load of ``source`` (an upload id, say);
        it defaults to ``source``.
        """
        self.dataset = dataset
        self.source = source
        self.source_key = source if source_key is None else source_key
        self.result = None
        logger.info("Dataset replaced: %d rows from %s", len(dataset), source or "memory")

    def refresh_yearly(self) -> PipelineResult:
        self.result = run_yearly_pipeline(self.dataset)
        return self.result

    def refresh_agent(self, filters: FilterState | None = None, now: pd.Timestamp | None = None) -> PipelineResult:
        """Recompute the agent view, optionally with new filters."""
        if filters is not None:
            self.filters = filters
        self.result = run_agent_pipeline(self.dataset, self.filters, now)
        return self.result
