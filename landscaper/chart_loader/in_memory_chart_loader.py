"""
The InMemoryChartLoader serves charts registered directly in memory
"""

# Standard
from typing import Dict, Optional, Tuple

# First Party
import alog

# Local
from ..exceptions import NotFoundError
from .base import Chart, ChartLoaderBase

log = alog.use_channel("MEMCL")


class InMemoryChartLoader(ChartLoaderBase):
    """Chart loader backed by a dict from chart reference to (chart, path)"""

    def __init__(self, charts: Optional[Dict[str, Tuple[Chart, str]]] = None):
        self._charts = dict(charts or {})
        self.loaded = []

    def add_chart(self, chart_ref: str, chart: Chart, chart_path: str = ""):
        """Register a chart under the given reference"""
        self._charts[chart_ref] = (chart, chart_path)

    def load(self, chart_ref: str) -> Tuple[Chart, str]:
        log.debug("Loading [%s] from memory", chart_ref)
        self.loaded.append(chart_ref)
        if chart_ref not in self._charts:
            raise NotFoundError(f"No chart registered for [{chart_ref}]")
        return self._charts[chart_ref]
