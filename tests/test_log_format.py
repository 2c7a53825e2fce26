"""
Tests for the landscaper log formatting
"""

# Standard
from unittest import mock
import json
import logging

# Local
from landscaper import log_format
from landscaper.test_helpers.helpers import configure_logging


def _record(**extra):
    record = logging.LogRecord("EXCTR", logging.INFO, __file__, 1, "msg", None, None)
    for key, val in extra.items():
        setattr(record, key, val)
    return record


def test_json_formatter_adds_fields():
    """Make sure the component fields and reconciliation id are rendered"""
    formatter = log_format.LandscaperJsonFormatter(reconciliation_id="abc")
    rendered = json.loads(
        formatter.format(_record(component="cmp", namespace="ns", phase="create"))
    )
    assert rendered["component"] == "cmp"
    assert rendered["namespace"] == "ns"
    assert rendered["phase"] == "create"
    assert rendered["reconciliationId"] == "abc"


def test_json_formatter_reads_reconciliation_id_from_record():
    """Make sure the id attached to executor events is rendered when the
    formatter has none of its own
    """
    formatter = log_format.LandscaperJsonFormatter()
    rendered = json.loads(formatter.format(_record(reconciliation_id="xyz")))
    assert rendered["reconciliationId"] == "xyz"


def test_generate_reconciliation_id_unique():
    ids = {log_format.generate_reconciliation_id() for _ in range(10)}
    assert len(ids) == 10
    assert all(len(rid) == 22 for rid in ids)


def test_configure_logging_json():
    """Make sure the json formatter is installed when requested"""
    try:
        with mock.patch("alog.configure") as configure_mock:
            log_format.configure_logging("rid", default_level="debug", log_json=True)
        kwargs = configure_mock.call_args[1]
        assert kwargs["default_level"] == "debug"
        assert isinstance(kwargs["formatter"], log_format.LandscaperJsonFormatter)
        assert kwargs["formatter"].reconciliation_id == "rid"
    finally:
        configure_logging()


def test_configure_logging_pretty():
    with mock.patch("alog.configure") as configure_mock:
        log_format.configure_logging()
    assert configure_mock.call_args[1]["formatter"] == "pretty"
