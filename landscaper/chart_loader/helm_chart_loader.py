"""
The HelmChartLoader fetches charts from helm repositories with `helm pull` into
a local cache directory and parses them from there
"""

# Standard
from typing import Optional, Tuple
import os
import shutil

# First Party
import alog

# Local
from .. import config
from ..helm import run_helm
from .base import Chart, ChartLoaderBase, read_chart_dir, split_chart_ref

log = alog.use_channel("HLMCL")


class HelmChartLoader(ChartLoaderBase):
    """Chart loader which delegates fetching to the helm CLI. Charts are cached
    as <cache_dir>/<repository>/<chart>-<version>/<chart>
    """

    def __init__(
        self,
        cache_dir: Optional[str] = None,
        helm_binary: Optional[str] = None,
    ):
        self.cache_dir = cache_dir or config.helm.chart_cache_dir
        self.helm_binary = helm_binary

    def load(self, chart_ref: str) -> Tuple[Chart, str]:
        repository, name, version = split_chart_ref(chart_ref)
        untar_dir = os.path.join(
            self.cache_dir,
            repository,
            f"{name}-{version}" if version else name,
        )
        chart_dir = os.path.join(untar_dir, name)

        # Versioned charts are immutable so a cached copy can be reused
        if version and os.path.isdir(chart_dir):
            log.debug("Using cached chart [%s] at [%s]", chart_ref, chart_dir)
            return read_chart_dir(chart_dir), chart_dir

        # helm refuses to untar over an existing chart directory
        if os.path.isdir(chart_dir):
            shutil.rmtree(chart_dir)
        os.makedirs(untar_dir, exist_ok=True)
        args = ["pull", f"{repository}/{name}", "--untar", "--untardir", untar_dir]
        if version:
            args.extend(["--version", version])
        log.info("Fetching chart [%s]", chart_ref)
        run_helm(args, binary=self.helm_binary)

        return read_chart_dir(chart_dir), chart_dir
