"""
Test the custom exceptions and assert functions
"""

# Third Party
import pytest

# Local
from landscaper import exceptions


def test_assert_config_pass():
    exceptions.assert_config(True)


def test_assert_config_fail():
    exception_msg = "error mesage"
    with pytest.raises(exceptions.ConfigError, match=exception_msg):
        exceptions.assert_config(False, exception_msg)


def test_assert_backend_pass():
    exceptions.assert_backend(True)


def test_assert_backend_fail():
    exception_msg = "error mesage"
    with pytest.raises(exceptions.BackendError, match=exception_msg):
        exceptions.assert_backend(False, exception_msg)


def test_exception_derived_from_base():
    """Make sure all exceptions derive from the shared base"""
    for exc in [
        exceptions.ConfigError(),
        exceptions.BackendError(),
        exceptions.DetectionError("x"),
        exceptions.ReconcileError([]),
        exceptions.NotFoundError(),
        exceptions.AlreadyExistsError(),
    ]:
        assert isinstance(exc, exceptions.LandscaperError)


def test_fatal_flags():
    """Make sure idempotency-class errors are not fatal and the rest are"""
    assert exceptions.BackendError().is_fatal_error
    assert exceptions.DetectionError("x").is_fatal_error
    assert not exceptions.NotFoundError().is_fatal_error
    assert not exceptions.AlreadyExistsError().is_fatal_error


def test_detection_error_names_component():
    err = exceptions.DetectionError("cmp")
    assert err.component_name == "cmp"
    assert "cmp" in str(err)


def test_reconcile_error_message():
    """Make sure every failure is named in the message"""
    failures = [
        exceptions.ComponentFailure("a", "create", ValueError("boom")),
        exceptions.ComponentFailure("b", "delete", ValueError("bang")),
    ]
    err = exceptions.ReconcileError(failures)
    assert err.failures == failures
    assert "create [a]: boom" in str(err)
    assert "delete [b]: bang" in str(err)
