"""
The Component model represents one deployable unit: a chart release plus the
configuration and secret material needed to install it.
"""

# Standard
from typing import Any, Dict, List, Optional

# Third Party
import yaml

# Local
from . import constants
from .exceptions import ConfigError, assert_config

## Type aliases ################################################################

# Names of the secrets a component requires
Secrets = List[str]

# Resolved secret values. These must never be written anywhere persistent other
# than the secret store.
SecretValues = Dict[str, bytes]

## Release #####################################################################


class Release:
    """Reference to a packaged chart. The chart field holds both the chart
    name and chart version, e.g. "connector-hdfs:0.1.0"
    """

    def __init__(self, chart: str = "", version: str = ""):
        self.chart = chart
        self.version = version

    @property
    def chart_name(self) -> str:
        return self.chart.split(constants.CHART_VERSION_DELIM, 1)[0]

    @property
    def chart_version(self) -> Optional[str]:
        parts = self.chart.split(constants.CHART_VERSION_DELIM, 1)
        return parts[1] if len(parts) == 2 else None

    def __eq__(self, other):
        if not isinstance(other, Release):
            return NotImplemented
        return (self.chart, self.version) == (other.chart, other.version)

    def __hash__(self):
        return hash((self.chart, self.version))

    def __repr__(self):
        return f"Release(chart={self.chart!r}, version={self.version!r})"


## Configuration ###############################################################


class Metadata:
    """Landscaper bookkeeping recorded inside a component's configuration"""

    def __init__(self, chart_repository: str, release_version: str):
        self.chart_repository = chart_repository
        self.release_version = release_version

    def to_dict(self) -> dict:
        return {
            constants.METADATA_CHART_REPOSITORY_KEY: self.chart_repository,
            constants.METADATA_RELEASE_VERSION_KEY: self.release_version,
        }

    def __eq__(self, other):
        if not isinstance(other, Metadata):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self):
        return (
            f"Metadata(chart_repository={self.chart_repository!r}, "
            f"release_version={self.release_version!r})"
        )


class Configuration(dict):
    """The values handed to a chart at install time. Key order is irrelevant
    and the reserved "Landscaper" key carries the component's Metadata.
    """

    def set_metadata(self, metadata: Metadata):
        """Record the chart repository and release version"""
        self[constants.METADATA_KEY] = {
            constants.METADATA_RELEASE_KEY: metadata.to_dict()
        }

    def get_metadata(self) -> Metadata:
        """Read back the recorded Metadata

        Raises:
            ConfigError if no metadata has been recorded
        """
        release = self.get(constants.METADATA_KEY, {}).get(
            constants.METADATA_RELEASE_KEY
        )
        if not isinstance(release, dict):
            raise ConfigError("No landscaper metadata found in configuration")
        return Metadata(
            chart_repository=release.get(constants.METADATA_CHART_REPOSITORY_KEY, ""),
            release_version=release.get(constants.METADATA_RELEASE_VERSION_KEY, ""),
        )

    def to_yaml(self) -> str:
        """Render the values document passed to the release backend"""
        return yaml.safe_dump(dict(self), default_flow_style=False, sort_keys=True)


## Component ###################################################################


class Component:
    """A named deployable unit. Its identity is its name, while equality for
    diffing purposes covers every field except the resolved secret values.
    """

    def __init__(  # pylint: disable=too-many-arguments
        self,
        name: str,
        namespace: str,
        release: Optional[Release],
        configuration: Optional[Dict[str, Any]] = None,
        secrets: Optional[Secrets] = None,
        secret_values: Optional[SecretValues] = None,
    ):
        self.name = name
        self.namespace = namespace
        self.release = release
        self.configuration = Configuration(configuration or {})
        self.secrets = list(secrets or [])
        self.secret_values = dict(secret_values or {})

    ## Chart resolution ########################################################

    def full_chart_ref(self) -> str:
        """The "<repository>/<chart>" reference used to load this component's
        chart
        """
        assert_config(self.release is not None, f"No release for [{self.name}]")
        metadata = self.configuration.get_metadata()
        return constants.CHART_REF_DELIM.join(
            [metadata.chart_repository, self.release.chart]
        )

    def validate(self):
        """Make sure the component can be applied

        Raises:
            ConfigError if a required field is missing
        """
        assert_config(bool(self.name), "Component name must not be empty")
        assert_config(
            self.release is not None and bool(self.release.chart),
            f"Component [{self.name}] has no release chart",
        )
        self.configuration.get_metadata()

    ## Comparison ##############################################################

    def structural_key(self) -> tuple:
        """All fields that take part in equality"""
        return (
            self.name,
            self.namespace,
            self.release,
            dict(self.configuration),
            list(self.secrets),
        )

    def __eq__(self, other):
        if not isinstance(other, Component):
            return NotImplemented
        return self.structural_key() == other.structural_key()

    def __hash__(self):
        return hash(self.name)

    def __repr__(self):
        return (
            f"Component(name={self.name!r}, namespace={self.namespace!r}, "
            f"release={self.release!r})"
        )


# Mapping from component name to Component
Components = Dict[str, Component]
