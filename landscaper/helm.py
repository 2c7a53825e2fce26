"""
Thin wrapper around the helm CLI shared by the helm chart loader and the helm
release backend
"""

# Standard
from typing import List, Optional
import subprocess

# First Party
import alog

# Local
from . import config
from .exceptions import BackendError

log = alog.use_channel("HELM")


class HelmCommandError(BackendError):
    """A helm invocation exited with a non-zero status"""

    def __init__(self, args: List[str], returncode: int, stderr: str):
        self.args_list = args
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(
            f"helm {' '.join(args)} failed with exit code {returncode}: {stderr.strip()}"
        )


def run_helm(
    args: List[str],
    binary: Optional[str] = None,
    timeout: Optional[int] = None,
) -> subprocess.CompletedProcess:
    """Run a helm command and return the completed process

    Args:
        args:  List[str]
            Arguments following the helm binary
        binary:  Optional[str]
            The helm binary to run. Defaults to the helm.binary config.
        timeout:  Optional[int]
            Seconds before the command is abandoned. Defaults to the
            helm.timeout config.

    Returns:
        result:  subprocess.CompletedProcess
            The completed process with text stdout/stderr

    Raises:
        HelmCommandError if helm exits non-zero
        BackendError if helm can not be run at all
    """
    binary = binary or config.helm.binary
    timeout = timeout or config.helm.timeout
    cmd = [binary] + args
    log.debug("helm> %s", " ".join(cmd))
    try:
        result = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            timeout=timeout,
            check=False,
        )
    except (OSError, subprocess.TimeoutExpired) as err:
        raise BackendError(f"Failed to run {' '.join(cmd)}: {err}") from err

    if result.stdout:
        log.debug3("helm stdout: %s", result.stdout)
    if result.returncode != 0:
        log.warning("helm stderr: %s", result.stderr)
        raise HelmCommandError(args, result.returncode, result.stderr or "")
    return result
