"""Python logging handler adapter for logwire.

This adapter bridges Python's standard library logging module to an
EntrySinkPort, turning each LogRecord into a structured Entry.
"""

import logging
import traceback
from collections.abc import Callable
from typing import Any

from logwire.core.entry import Entry
from logwire.core.models import Severity
from logwire.core.ports import EntrySinkPort

# Standard LogRecord attributes that should not be treated as extra fields
_STANDARD_LOGRECORD_ATTRS = frozenset(
    {
        "args",
        "asctime",
        "created",
        "exc_info",
        "exc_text",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "message",
        "module",
        "msecs",
        "msg",
        "name",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "stack_info",
        "taskName",
        "thread",
        "threadName",
    }
)

# Returns attributes merged into every entry payload, e.g. request context
ContextProvider = Callable[[], dict[str, Any]]

# Default attributes to extract from LogRecord
DEFAULT_INCLUDE_ATTRS = ["logger", "module", "process", "thread"]

_LEVEL_SEVERITIES = {
    logging.DEBUG: Severity.DEBUG,
    logging.INFO: Severity.INFO,
    logging.WARNING: Severity.WARNING,
    logging.ERROR: Severity.ERROR,
    logging.CRITICAL: Severity.CRITICAL,
}


def severity_for_level(levelno: int) -> Severity:
    """Map a stdlib logging level number to a Severity."""
    return _LEVEL_SEVERITIES.get(levelno, Severity.DEFAULT)


class EntryHandler(logging.Handler):
    """Logging handler that writes log records to an EntrySinkPort.

    Example:
        ```python
        from logwire import EntryHandler, InMemoryEntrySink

        sink = InMemoryEntrySink()
        handler = EntryHandler(sink, labels={"env": "prod"})
        logging.getLogger().addHandler(handler)
        ```
    """

    def __init__(
        self,
        sink: EntrySinkPort,
        include_attrs: list[str] | None = None,
        labels: dict[str, str] | None = None,
        context_provider: ContextProvider | None = None,
        level: int = logging.NOTSET,
    ) -> None:
        """Initialize the handler with an entry sink.

        Args:
            sink: Sink implementing EntrySinkPort.
            include_attrs: LogRecord attributes to copy into the payload.
                Defaults to ["logger", "module", "process", "thread"].
            labels: Labels attached to every entry.
            context_provider: Called per record; its attributes are added
                to the payload. Extra attributes override them.
            level: Minimum level handled.
        """
        super().__init__(level)
        self._sink = sink
        self._include_attrs = (
            include_attrs if include_attrs is not None else DEFAULT_INCLUDE_ATTRS
        )
        self._labels = dict(labels or {})
        self._context_provider = context_provider

    def to_entry(self, record: logging.LogRecord) -> Entry:
        """Build an Entry from a log record."""
        attr_mapping: dict[str, Any] = {
            "logger": record.name,
            "module": record.module,
            "process": record.process,
            "thread": record.thread,
            "threadName": record.threadName,
            "pathname": record.pathname,
        }
        payload: dict[str, Any] = {"message": record.getMessage()}
        payload.update(
            {key: attr_mapping[key] for key in self._include_attrs if key in attr_mapping}
        )

        if self._context_provider is not None:
            payload.update(self._context_provider())

        # Add any extra attributes passed via logging call
        for key, value in record.__dict__.items():
            if key not in _STANDARD_LOGRECORD_ATTRS:
                payload[key] = value

        if record.exc_info:
            exc_type, exc_value, exc_tb = record.exc_info
            if exc_type is not None:
                payload["exc_type"] = exc_type.__name__
            if exc_value is not None:
                payload["exc_message"] = str(exc_value)
            if exc_tb is not None:
                payload["exc_traceback"] = "".join(
                    traceback.format_exception(exc_type, exc_value, exc_tb)
                )

        metadata: dict[str, Any] = {
            "timestamp": record.created,
            "severity": severity_for_level(record.levelno),
            "sourceLocation": {
                "file": record.pathname,
                "line": str(record.lineno),
                "function": record.funcName or "",
            },
        }
        if self._labels:
            metadata["labels"] = self._labels
        return Entry(metadata, payload)

    def emit(self, record: logging.LogRecord) -> None:
        """Emit a log record to the sink.

        Args:
            record: The log record to emit.
        """
        try:
            self._sink.write(self.to_entry(record))
        except Exception:
            self.handleError(record)
