"""
The ChartLoader is the abstraction in charge of resolving a symbolic chart
reference into a chart materialized on local disk.
"""

# Local
from .base import Chart, ChartLoaderBase, ChartTemplate, read_chart_dir
from .helm_chart_loader import HelmChartLoader
from .in_memory_chart_loader import InMemoryChartLoader
from .local_chart_loader import LocalChartLoader
