"""
The HelmReleaseBackend delegates release operations to the helm CLI. It is the
one that will be used when making live changes to a cluster.
"""

# Standard
from typing import Dict, List, Optional
import json
import os
import tempfile

# First Party
import alog

# Local
from ..component import Configuration
from ..exceptions import (
    AlreadyExistsError,
    BackendError,
    NotFoundError,
    assert_backend,
)
from ..helm import HelmCommandError, run_helm
from .base import ReleaseBackendBase, ReleaseInfo

log = alog.use_channel("HLMRB")

# Fragments of helm's stderr that identify idempotency-class failures
RELEASE_NOT_FOUND_MARKERS = ["release: not found", "has no deployed releases"]
RELEASE_EXISTS_MARKERS = ["cannot re-use a name that is still in use"]


class HelmReleaseBackend(ReleaseBackendBase):
    """Release backend running helm install/upgrade/uninstall"""

    def __init__(
        self,
        helm_binary: Optional[str] = None,
        timeout: Optional[int] = None,
        wait: bool = False,
    ):
        """
        Args:
            helm_binary:  Optional[str]
                The helm binary to run. Defaults to the helm.binary config.
            timeout:  Optional[int]
                Seconds before a helm command is abandoned. Defaults to the
                helm.timeout config.
            wait:  bool
                If true, helm waits for the released resources to be ready
        """
        self.helm_binary = helm_binary
        self.timeout = timeout
        self.wait = wait

    ## Interface ###############################################################

    @alog.logged_function(log.debug)
    def install(
        self,
        chart_path,
        namespace,
        release_name,
        values=None,
        dry_run=False,
    ):
        args = ["install", release_name, chart_path, "--namespace", namespace]
        args.extend(self._common_flags(dry_run))
        try:
            self._run_with_values(args, values)
        except HelmCommandError as err:
            if _matches(err, RELEASE_EXISTS_MARKERS):
                raise AlreadyExistsError(str(err)) from err
            raise

    @alog.logged_function(log.debug)
    def update(
        self,
        release_name,
        chart_path,
        namespace=None,
        values=None,
        dry_run=False,
        force=False,
    ):
        args = ["upgrade", release_name, chart_path]
        if namespace:
            args.extend(["--namespace", namespace])
        if force:
            args.append("--force")
        args.extend(self._common_flags(dry_run))
        try:
            self._run_with_values(args, values)
        except HelmCommandError as err:
            if _matches(err, RELEASE_NOT_FOUND_MARKERS):
                raise NotFoundError(str(err)) from err
            raise

    @alog.logged_function(log.debug)
    def delete(self, release_name, namespace=None):
        args = ["uninstall", release_name]
        if namespace:
            args.extend(["--namespace", namespace])
        try:
            self._run(args)
        except HelmCommandError as err:
            if _matches(err, RELEASE_NOT_FOUND_MARKERS):
                log.debug2("Release [%s] already gone: %s", release_name, err)
                return
            raise

    def list_releases(self) -> Dict[str, ReleaseInfo]:
        result = self._run(["list", "--all-namespaces", "--output", "json"])
        try:
            entries = json.loads(result.stdout or "[]")
        except ValueError as err:
            raise BackendError(f"Unparsable helm list output: {err}") from err
        assert_backend(
            isinstance(entries, list), f"Unexpected helm list output: {entries!r}"
        )
        releases = {}
        for entry in entries:
            releases[entry["name"]] = ReleaseInfo(
                name=entry["name"],
                namespace=entry.get("namespace", ""),
                chart=entry.get("chart", ""),
                revision=int(entry.get("revision", 1)),
            )
        log.debug("Found %d releases", len(releases))
        return releases

    ## Implementation Helpers ##################################################

    def _common_flags(self, dry_run: bool) -> List[str]:
        flags = []
        if dry_run:
            flags.append("--dry-run")
        if self.wait:
            flags.append("--wait")
        return flags

    def _run(self, args: List[str]):
        return run_helm(args, binary=self.helm_binary, timeout=self.timeout)

    def _run_with_values(self, args: List[str], values: Optional[dict]):
        """Run helm with the values rendered into a temporary values file"""
        if not values:
            return self._run(args)
        with tempfile.NamedTemporaryFile(
            "w", suffix=".yaml", prefix="landscaper-values-", delete=False
        ) as handle:
            handle.write(Configuration(values).to_yaml())
            values_file = handle.name
        try:
            return self._run(args + ["--values", values_file])
        finally:
            os.remove(values_file)


def _matches(err: HelmCommandError, markers: List[str]) -> bool:
    stderr = err.stderr.lower()
    return any(marker in stderr for marker in markers)
