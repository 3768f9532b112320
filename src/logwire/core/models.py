"""Core domain models for log entries."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, IntEnum
from typing import Any

# A wall-clock value (datetime or epoch seconds), an RFC3339 string, or a
# structured {"seconds": ..., "nanos": ...} pair.
Timestamp = datetime | int | float | str | Mapping[str, Any]


class Severity(IntEnum):
    """Severity levels understood by the ingestion API."""

    DEFAULT = 0
    DEBUG = 100
    INFO = 200
    NOTICE = 300
    WARNING = 400
    ERROR = 500
    CRITICAL = 600
    ALERT = 700
    EMERGENCY = 800

    @classmethod
    def coerce(cls, value: Any) -> Any:
        """Map an enum member, integer value or name onto a Severity.

        Values that name no known severity are returned unchanged.
        """
        if isinstance(value, cls) or isinstance(value, bool):
            return value
        if isinstance(value, int):
            try:
                return cls(value)
            except ValueError:
                return value
        if isinstance(value, str):
            return cls.__members__.get(value.upper(), value)
        return value


class PayloadKind(Enum):
    """Closed set of payload shapes an entry can carry."""

    TEXT = "textPayload"
    STRUCTURED = "jsonPayload"
    UNSUPPORTED = "unsupported"
    UNSET = "unset"


@dataclass(frozen=True)
class Payload:
    """Raw entry data tagged with the payload kind it serializes to.

    Attributes:
        kind: The inferred payload kind.
        value: The raw data, unmodified.
    """

    kind: PayloadKind
    value: Any = None

    @classmethod
    def from_data(cls, data: Any) -> "Payload":
        """Infer the payload kind from the shape of ``data``."""
        if data is None:
            return cls(PayloadKind.UNSET)
        if isinstance(data, str):
            return cls(PayloadKind.TEXT, data)
        if isinstance(data, Mapping):
            return cls(PayloadKind.STRUCTURED, data)
        return cls(PayloadKind.UNSUPPORTED, data)


@dataclass(frozen=True)
class ToJsonOptions:
    """Options for serializing an entry to the wire format.

    Attributes:
        remove_circular: Replace self-referencing containers in a structured
            payload with a marker string instead of raising.
    """

    remove_circular: bool = False


@dataclass
class LogEntryMetadata:
    """Metadata of a log entry.

    Known fields are attributes; every other wire field is kept in
    ``fields`` under its wire name.

    Attributes:
        timestamp: When the entry was produced.
        insert_id: Secondary ordering key, unique within the project.
        severity: A Severity, or a string the API is left to interpret.
        resource: Monitored resource descriptor.
        labels: User-defined key/value labels.
        fields: Pass-through wire fields (logName, httpRequest, trace, ...).
    """

    timestamp: Timestamp | None = None
    insert_id: str = ""
    severity: Severity | str | None = None
    resource: dict[str, Any] | None = None
    labels: dict[str, str] = field(default_factory=dict)
    fields: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "LogEntryMetadata":
        """Build metadata from a wire-keyed mapping.

        Keys whose value is None are treated as absent.
        """
        values = {k: v for k, v in mapping.items() if v is not None}
        return cls(
            timestamp=values.pop("timestamp", None),
            insert_id=values.pop("insertId", ""),
            severity=Severity.coerce(values.pop("severity", None)),
            resource=values.pop("resource", None),
            labels=values.pop("labels", {}),
            fields=values,
        )

    def to_mapping(self) -> dict[str, Any]:
        """Return the metadata as a wire-keyed mapping (shallow)."""
        mapping: dict[str, Any] = dict(self.fields)
        if self.timestamp is not None:
            mapping["timestamp"] = self.timestamp
        if self.insert_id:
            mapping["insertId"] = self.insert_id
        if self.severity is not None:
            mapping["severity"] = (
                self.severity.name
                if isinstance(self.severity, Severity)
                else self.severity
            )
        if self.resource is not None:
            mapping["resource"] = self.resource
        if self.labels:
            mapping["labels"] = self.labels
        return mapping
