"""
Tests for the DryRunReleaseBackend
"""

# Third Party
import pytest

# Local
from landscaper.exceptions import AlreadyExistsError, NotFoundError
from landscaper.release_backend import DryRunReleaseBackend, ReleaseInfo


def test_install_update_delete():
    """Make sure a release moves through its whole lifecycle"""
    backend = DryRunReleaseBackend()
    backend.install("/charts/a", "ns", "a", values={"x": 1})
    assert backend.list_releases()["a"].values == {"x": 1}

    backend.update("a", "/charts/a2", values={"x": 2})
    release = backend.list_releases()["a"]
    assert release.chart == "/charts/a2"
    assert release.revision == 2
    assert release.namespace == "ns"

    backend.delete("a")
    assert not backend.list_releases()
    assert backend.calls == [("install", "a"), ("update", "a"), ("delete", "a")]


def test_install_existing():
    backend = DryRunReleaseBackend([ReleaseInfo("a", "ns")])
    with pytest.raises(AlreadyExistsError):
        backend.install("/charts/a", "ns", "a")


def test_update_missing():
    with pytest.raises(NotFoundError):
        DryRunReleaseBackend().update("a", "/charts/a")


def test_delete_missing_is_success():
    backend = DryRunReleaseBackend()
    backend.delete("a")
    assert backend.calls == [("delete", "a")]


def test_backend_dry_run_flag():
    """Make sure the backend's own dry_run flag leaves the state untouched"""
    backend = DryRunReleaseBackend()
    backend.install("/charts/a", "ns", "a", dry_run=True)
    assert not backend.list_releases()


def test_list_releases_is_a_copy():
    backend = DryRunReleaseBackend([ReleaseInfo("a", "ns")])
    backend.list_releases()["a"].namespace = "changed"
    assert backend.list_releases()["a"].namespace == "ns"
