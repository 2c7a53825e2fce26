"""
Tests for the EnvironmentSecretsReader
"""

# Standard
from unittest import mock
import os

# Local
from landscaper.events import RecordingEventSink
from landscaper.secrets import EnvironmentSecretsReader


def test_read_from_environment():
    """Make sure secret names are mapped to upper case env vars with dashes
    replaced
    """
    with mock.patch.dict(os.environ, {"DB_PASSWORD": "hunter2", "TOKEN": "abc"}):
        values = EnvironmentSecretsReader().read(
            "cmp", "ns", ["db-password", "token"]
        )
    assert values == {"db-password": b"hunter2", "token": b"abc"}


def test_missing_variable_is_empty_and_flagged():
    sink = RecordingEventSink()
    with mock.patch.dict(os.environ, {}, clear=True):
        values = EnvironmentSecretsReader(event_sink=sink).read(
            "cmp", "ns", ["missing-secret"]
        )
    assert values == {"missing-secret": b""}
    (event,) = sink.find("secret_not_in_environment")
    assert event.level == "warning"
    assert event.fields["env_name"] == "MISSING_SECRET"


def test_no_names():
    assert EnvironmentSecretsReader().read("cmp", "ns", []) == {}
