"""
Custom logging formats that contain more detailed landscaper logs
"""

# Standard
from typing import Optional
import base64
import logging
import uuid

# First Party
from alog import AlogJsonFormatter
import alog

# Local
from . import config

log = alog.use_channel("LOGFM")


class LandscaperJsonFormatter(AlogJsonFormatter):
    """Custom Log Format that extends AlogJsonFormatter to add the fields that
    the event sinks attach to records: the component being applied, its
    namespace and apply phase, plus an identifier for the reconciliation pass.
    The identifier is fixed when given, otherwise taken from the
    reconciliation_id the executor attaches to its events.
    """

    _FIELDS_TO_PRINT = AlogJsonFormatter._FIELDS_TO_PRINT + [
        "component",
        "namespace",
        "phase",
        "reconciliationId",
    ]

    def __init__(self, reconciliation_id=None):
        super().__init__()
        self.reconciliation_id = reconciliation_id

    def format(self, record):
        reconciliation_id = self.reconciliation_id or getattr(
            record, "reconciliation_id", None
        )
        if reconciliation_id:
            record.reconciliationId = reconciliation_id
        return super().format(record)


def generate_reconciliation_id() -> str:
    """Generates a unique human readable id for a reconciliation pass

    Returns:
        id: str
            A unique base32 encoded id
    """
    base32_str = base64.b32encode(uuid.uuid4().bytes).decode("utf-8")
    reconciliation_id = base32_str[:22]
    log.debug("Generated reconciliation id: %s", reconciliation_id)
    return reconciliation_id


def configure_logging(
    reconciliation_id: Optional[str] = None,
    default_level: Optional[str] = None,
    filters: Optional[str] = None,
    log_json: Optional[bool] = None,
):
    """Reconfigure alog for a reconciliation pass, falling back to the library
    config for anything not given
    """
    log_json = config.log_json if log_json is None else log_json

    # Keep the existing handler so output keeps going to the same place
    handler_generator = None
    if logging.root.handlers:
        old_handler = logging.root.handlers[0]

        def handler_generator():
            return old_handler

    alog.configure(
        default_level=default_level or config.log_level,
        filters=config.log_filters if filters is None else filters,
        formatter=LandscaperJsonFormatter(reconciliation_id) if log_json else "pretty",
        thread_id=config.log_thread_id,
        handler_generator=handler_generator,
    )
