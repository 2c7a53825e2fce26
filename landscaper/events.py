"""
Structured event sinks. The Executor and the secret adapters report what they
are doing through an EventSink rather than logging directly so that callers can
route, record, or silence the events.
"""

# Standard
from typing import List, Optional
import abc
import logging

# First Party
import alog

log = alog.use_channel("EVENT")

# Levels understood by all sinks, mirroring the alog level names
EVENT_LEVELS = ["error", "warning", "info", "debug", "debug2"]

# LogRecord attributes which event fields must not overwrite
_RESERVED_RECORD_KEYS = set(
    logging.LogRecord("", logging.INFO, "", 0, "", None, None).__dict__
) | {"message", "asctime"}


class Event:
    """A single structured event"""

    def __init__(self, name: str, level: str = "info", **fields):
        if level not in EVENT_LEVELS:
            raise ValueError(f"Unknown event level: {level}")
        self.name = name
        self.level = level
        self.fields = fields

    def __repr__(self):
        return f"Event({self.name!r}, {self.level!r}, {self.fields!r})"


class EventSink(abc.ABC):
    """Base class for consumers of structured events"""

    @abc.abstractmethod
    def emit(self, event: Event):
        """Consume a single event"""

    def __call__(self, name: str, level: str = "info", **fields):
        """Shorthand for building and emitting an Event"""
        self.emit(Event(name, level, **fields))


class AlogEventSink(EventSink):
    """Sink that forwards every event to an alog channel. Event fields are
    rendered as key=value pairs and also attached to the log record so that
    the json formatter can pick them up.
    """

    def __init__(self, channel: Optional[str] = None):
        self._log = alog.use_channel(channel) if channel else log

    def emit(self, event: Event):
        log_fn = getattr(self._log, event.level)
        rendered = " ".join(
            f"{key}={value}" for key, value in sorted(event.fields.items())
        )
        log_fn(
            "%s %s",
            event.name,
            rendered,
            extra={
                key: str(value)
                for key, value in event.fields.items()
                if key not in _RESERVED_RECORD_KEYS
            },
        )


class RecordingEventSink(EventSink):
    """Sink that keeps every event in memory"""

    def __init__(self):
        self.events: List[Event] = []

    def emit(self, event: Event):
        self.events.append(event)

    def names(self) -> List[str]:
        """The names of all recorded events in order"""
        return [event.name for event in self.events]

    def find(self, name: str) -> List[Event]:
        """All recorded events with the given name"""
        return [event for event in self.events if event.name == name]
