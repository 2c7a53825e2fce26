"""
The ReleaseBackend is the abstraction in charge of installing, upgrading and
uninstalling chart releases in the target environment.
"""

# Local
from .base import ReleaseBackendBase, ReleaseInfo
from .dry_run_release_backend import DryRunReleaseBackend
from .helm_release_backend import HelmReleaseBackend
