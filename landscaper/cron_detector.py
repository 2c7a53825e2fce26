"""
Detection of components whose charts contain workload kinds which the release
backend can not update in place. Such components are deleted and recreated
instead of updated.
"""

# Standard
from typing import Callable, List, Optional

# First Party
import alog

# Local
from . import config
from .chart_loader import ChartLoaderBase
from .component import Component

log = alog.use_channel("CRONJ")

# A predicate deciding whether an update of a component must be forced
ForcedUpdatePredicate = Callable[[Component], bool]


def is_cron_job(
    component: Component,
    chart_loader: ChartLoaderBase,
    markers: Optional[List[str]] = None,
) -> bool:
    """Check whether any template of the component's chart contains one of the
    markers of a scheduled workload. This is a textual heuristic, so templates
    which spell the kind differently are not detected.

    Args:
        component:  Component
            The component to inspect
        chart_loader:  ChartLoaderBase
            Loader used to fetch the component's chart
        markers:  Optional[List[str]]
            Marker texts to search for. Defaults to the cron_job_markers
            config.

    Returns:
        is_cron_job:  bool
            True if any template body contains a marker

    Raises:
        Any error from the chart loader, unchanged
    """
    markers = markers if markers is not None else list(config.cron_job_markers)
    chart, _ = chart_loader.load(component.full_chart_ref())
    encoded_markers = [marker.encode("utf-8") for marker in markers]
    for template in chart.templates:
        if any(marker in template.data for marker in encoded_markers):
            log.debug("Found scheduled workload in [%s] of [%s]", template.name, component.name)
            return True
    return False


def make_cron_job_predicate(
    chart_loader: ChartLoaderBase,
    markers: Optional[List[str]] = None,
) -> ForcedUpdatePredicate:
    """Bind is_cron_job to a chart loader so it can be used as a forced update
    predicate
    """

    def predicate(component: Component) -> bool:
        return is_cron_job(component, chart_loader, markers)

    predicate.__name__ = "is_cron_job"
    return predicate
