"""
This defines the base class for all ChartLoader types along with the parsed
chart representation they return.
"""

# Standard
from typing import List, Optional, Tuple
import abc
import os

# Third Party
import yaml

# First Party
import alog

# Local
from ..exceptions import BackendError, NotFoundError

log = alog.use_channel("CHART")

CHART_FILE = "Chart.yaml"
TEMPLATES_DIR = "templates"


class ChartTemplate:
    """A single raw template file from a chart"""

    def __init__(self, name: str, data: bytes):
        self.name = name
        self.data = data

    def __repr__(self):
        return f"ChartTemplate({self.name!r})"


class Chart:
    """The parts of a chart the library inspects"""

    def __init__(
        self,
        name: str,
        version: str = "",
        templates: Optional[List[ChartTemplate]] = None,
    ):
        self.name = name
        self.version = version
        self.templates = templates or []

    def __repr__(self):
        return f"Chart({self.name!r}, {self.version!r}, {len(self.templates)} templates)"


class ChartLoaderBase(abc.ABC):
    """
    Base class for chart loaders which turn a "<repository>/<chart>" reference
    into a parsed Chart and the local path of the chart artifact.
    """

    @abc.abstractmethod
    def load(self, chart_ref: str) -> Tuple[Chart, str]:
        """Load the chart for the given reference

        Args:
            chart_ref:  str
                The "<repository>/<chart>[:<version>]" reference

        Returns:
            chart:  Chart
                The parsed chart content
            chart_path:  str
                Local path to the chart that can be handed to the release
                backend

        Raises:
            NotFoundError if the reference does not resolve to a chart
            BackendError if the chart could not be fetched or parsed
        """


def split_chart_ref(chart_ref: str) -> Tuple[str, str, Optional[str]]:
    """Split "<repository>/<chart>[:<version>]" into its parts"""
    repository, sep, chart = chart_ref.rpartition("/")
    if not sep or not repository or not chart:
        raise BackendError(f"Invalid chart reference [{chart_ref}]")
    name, _, version = chart.partition(":")
    return repository, name, version or None


def read_chart_dir(chart_dir: str) -> Chart:
    """Parse an unpacked chart directory. Every file below templates/ is read
    as a template.

    Raises:
        NotFoundError if the directory holds no Chart.yaml
        BackendError if Chart.yaml can not be parsed
    """
    chart_file = os.path.join(chart_dir, CHART_FILE)
    if not os.path.isfile(chart_file):
        raise NotFoundError(f"No {CHART_FILE} found in [{chart_dir}]")

    with open(chart_file, encoding="utf-8") as handle:
        try:
            chart_meta = yaml.safe_load(handle) or {}
        except yaml.YAMLError as err:
            raise BackendError(f"Invalid {CHART_FILE} in [{chart_dir}]") from err

    templates = []
    templates_dir = os.path.join(chart_dir, TEMPLATES_DIR)
    for root, _, files in os.walk(templates_dir):
        for file_name in sorted(files):
            path = os.path.join(root, file_name)
            with open(path, "rb") as handle:
                templates.append(
                    ChartTemplate(os.path.relpath(path, chart_dir), handle.read())
                )
    log.debug2("Read %d templates from [%s]", len(templates), chart_dir)

    return Chart(
        name=chart_meta.get("name", os.path.basename(chart_dir)),
        version=str(chart_meta.get("version", "")),
        templates=templates,
    )
