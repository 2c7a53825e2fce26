"""
The DryRunReleaseBackend implements the ReleaseBackend interface but does not
touch any environment and instead holds the installed releases in a local map.
"""

# Standard
from typing import Dict, List, Optional
import copy

# First Party
import alog

# Local
from ..exceptions import AlreadyExistsError, NotFoundError
from .base import ReleaseBackendBase, ReleaseInfo

log = alog.use_channel("DRY-RUN")


class DryRunReleaseBackend(ReleaseBackendBase):
    """
    Release backend which doesn't actually release!
    """

    def __init__(self, releases: Optional[List[ReleaseInfo]] = None):
        self._releases = {release.name: release for release in releases or []}

        # Every call made against the backend in order as (operation, name)
        self.calls = []

    ## Interface ###############################################################

    def install(
        self,
        chart_path,
        namespace,
        release_name,
        values=None,
        dry_run=False,
    ):
        log.info("DRY RUN install [%s] into [%s]", release_name, namespace)
        self.calls.append(("install", release_name))
        if release_name in self._releases:
            raise AlreadyExistsError(f"Release [{release_name}] already exists")
        if dry_run:
            return
        self._releases[release_name] = ReleaseInfo(
            name=release_name,
            namespace=namespace,
            chart=chart_path,
            values=copy.deepcopy(values),
        )

    def update(
        self,
        release_name,
        chart_path,
        namespace=None,
        values=None,
        dry_run=False,
        force=False,
    ):
        log.info("DRY RUN update [%s] (force: %s)", release_name, force)
        self.calls.append(("update", release_name))
        release = self._releases.get(release_name)
        if release is None:
            raise NotFoundError(f"Release [{release_name}] not found")
        if dry_run:
            return
        release.chart = chart_path
        release.values = copy.deepcopy(values) or {}
        release.revision += 1
        if namespace:
            release.namespace = namespace

    def delete(self, release_name, namespace=None):
        log.info("DRY RUN delete [%s]", release_name)
        self.calls.append(("delete", release_name))
        if self._releases.pop(release_name, None) is None:
            log.debug("Release [%s] not present", release_name)

    def list_releases(self) -> Dict[str, ReleaseInfo]:
        return copy.deepcopy(self._releases)
