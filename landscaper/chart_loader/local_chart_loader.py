"""
The LocalChartLoader resolves chart references against a directory tree of
unpacked charts laid out as <root>/<repository>/<chart>[-<version>]
"""

# Standard
from typing import Tuple
import os

# First Party
import alog

# Local
from ..exceptions import NotFoundError
from .base import Chart, ChartLoaderBase, read_chart_dir, split_chart_ref

log = alog.use_channel("LOCCL")


class LocalChartLoader(ChartLoaderBase):
    """Chart loader for charts which are already present on local disk"""

    def __init__(self, root_dir: str):
        """
        Args:
            root_dir:  str
                Directory holding one sub-directory per chart repository
        """
        self.root_dir = root_dir

    def load(self, chart_ref: str) -> Tuple[Chart, str]:
        repository, name, version = split_chart_ref(chart_ref)
        candidates = []
        if version:
            candidates.append(os.path.join(self.root_dir, repository, f"{name}-{version}"))
        candidates.append(os.path.join(self.root_dir, repository, name))

        for chart_dir in candidates:
            log.debug3("Checking [%s] for [%s]", chart_dir, chart_ref)
            if os.path.isdir(chart_dir):
                chart = read_chart_dir(chart_dir)
                if version and chart.version and chart.version != version:
                    log.debug2(
                        "Skipping [%s] with version %s != %s",
                        chart_dir,
                        chart.version,
                        version,
                    )
                    continue
                log.debug("Loaded [%s] from [%s]", chart_ref, chart_dir)
                return chart, chart_dir

        raise NotFoundError(f"Chart [{chart_ref}] not found under [{self.root_dir}]")
