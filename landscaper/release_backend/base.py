"""
This defines the base class for all ReleaseBackend types.
"""

# Standard
from typing import Dict, Optional
import abc


class ReleaseInfo:
    """What a backend knows about one installed release"""

    def __init__(
        self,
        name: str,
        namespace: str,
        chart: str = "",
        revision: int = 1,
        values: Optional[dict] = None,
    ):
        self.name = name
        self.namespace = namespace
        self.chart = chart
        self.revision = revision
        self.values = values or {}

    def __repr__(self):
        return (
            f"ReleaseInfo({self.name!r}, namespace={self.namespace!r}, "
            f"chart={self.chart!r}, revision={self.revision})"
        )


class ReleaseBackendBase(abc.ABC):
    """
    Base class for release backends which carry out the actual install,
    update and delete of a component's chart release. The release name is
    always the component name.
    """

    @abc.abstractmethod
    def install(  # pylint: disable=too-many-arguments
        self,
        chart_path: str,
        namespace: str,
        release_name: str,
        values: Optional[dict] = None,
        dry_run: bool = False,
    ):
        """Install a new release

        Args:
            chart_path:  str
                Local path of the chart to install
            namespace:  str
                Namespace to install the release into
            release_name:  str
                Name of the release
            values:  Optional[dict]
                Values handed to the chart
            dry_run:  bool
                Ask the backend to validate without installing

        Raises:
            AlreadyExistsError if the backend knows it already holds the release
            BackendError for any other failure
        """

    @abc.abstractmethod
    def update(  # pylint: disable=too-many-arguments
        self,
        release_name: str,
        chart_path: str,
        namespace: Optional[str] = None,
        values: Optional[dict] = None,
        dry_run: bool = False,
        force: bool = False,
    ):
        """Upgrade an existing release in place

        Args:
            release_name:  str
                Name of the release to upgrade
            chart_path:  str
                Local path of the chart to upgrade to
            namespace:  Optional[str]
                Namespace holding the release
            values:  Optional[dict]
                Values handed to the chart
            dry_run:  bool
                Ask the backend to validate without upgrading
            force:  bool
                Ask the backend to force resource updates

        Raises:
            NotFoundError if the backend knows the release does not exist
            BackendError for any other failure
        """

    @abc.abstractmethod
    def delete(self, release_name: str, namespace: Optional[str] = None):
        """Delete a release. Deleting a release that does not exist succeeds.

        Args:
            release_name:  str
                Name of the release to delete
            namespace:  Optional[str]
                Namespace holding the release

        Raises:
            BackendError for any failure other than absence
        """

    @abc.abstractmethod
    def list_releases(self) -> Dict[str, ReleaseInfo]:
        """List all releases known to the backend keyed by release name"""
