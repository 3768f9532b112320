"""Log entries and their wire representation.

An Entry pairs metadata with raw data. ``to_json`` produces the record the
ingestion API expects and ``from_api_response`` rebuilds an Entry from a
record the API returned.
"""

import copy
import dataclasses
import logging
from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any

from logwire.core.insert_id import InsertIdGenerator, new_insert_id
from logwire.core.models import (
    LogEntryMetadata,
    Payload,
    PayloadKind,
    ToJsonOptions,
)
from logwire.core.structs import obj_to_struct, struct_to_obj
from logwire.core.timestamps import (
    from_wire_timestamp,
    is_wire_timestamp,
    normalize_wire_timestamp,
    to_wire_timestamp,
)

logger = logging.getLogger(__name__)

# Metadata fields whose mapping values are merged key by key over defaults.
KNOWN_NESTED_FIELDS = frozenset(
    {"resource", "labels", "httpRequest", "operation", "sourceLocation", "split"}
)

_PAYLOAD_FIELDS = ("textPayload", "jsonPayload", "protoPayload")


def _merge_nested(default: Any, supplied: Mapping[str, Any]) -> dict[str, Any]:
    # Only top-level None means "not supplied"; nested None values are kept.
    merged = dict(default) if isinstance(default, Mapping) else {}
    for key, value in supplied.items():
        if isinstance(value, Mapping):
            merged[key] = _merge_nested(merged.get(key), value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def _apply_defaults(supplied: Mapping[str, Any]) -> dict[str, Any]:
    """Overlay caller supplied metadata fields onto the defaults."""
    record: dict[str, Any] = {"timestamp": datetime.now(UTC)}
    for key, value in supplied.items():
        if value is None:
            continue
        if key in KNOWN_NESTED_FIELDS and isinstance(value, Mapping):
            record[key] = _merge_nested(record.get(key), value)
        else:
            record[key] = copy.deepcopy(value)
    return record


def _is_struct(value: Any) -> bool:
    return isinstance(value, Mapping) and isinstance(value.get("fields"), Mapping)


class Entry:
    """A log entry: metadata plus the data to log.

    Example:
        ```python
        entry = Entry(
            {"resource": {"type": "gce_instance"}, "severity": "INFO"},
            {"delegate": "my_username"},
        )
        record = entry.to_json()
        ```

    Args:
        metadata: Wire-keyed mapping or LogEntryMetadata. Supplied fields
            win over the defaults (timestamp = now). Top-level keys set to
            None count as absent; None values inside nested mappings such
            as ``labels`` are kept. Values are copied, so later changes to
            the caller's objects do not reach the entry.
        data: The value to log. Strings become a text payload, mappings a
            structured payload.
        id_generator: Generator for the insert id when none is supplied
            (default: the process-wide generator).
    """

    def __init__(
        self,
        metadata: Mapping[str, Any] | LogEntryMetadata | None = None,
        data: Any = None,
        *,
        id_generator: InsertIdGenerator | None = None,
    ) -> None:
        if isinstance(metadata, LogEntryMetadata):
            supplied = metadata.to_mapping()
        else:
            supplied = metadata or {}
        self.metadata = LogEntryMetadata.from_mapping(_apply_defaults(supplied))
        # Millisecond timestamps collide often; the API orders ties by
        # insertId, so every entry gets a unique, ordered one.
        if not self.metadata.insert_id:
            self.metadata.insert_id = (
                id_generator.next() if id_generator else new_insert_id()
            )
        self.data = data
        # Exact pair behind a timestamp read from the API, which a datetime
        # can only hold to the microsecond.
        self._wire_timestamp: tuple[datetime, dict[str, int]] | None = None

    def __repr__(self) -> str:
        return f"Entry(metadata={self.metadata!r}, data={self.data!r})"

    @property
    def payload(self) -> Payload:
        return Payload.from_data(self.data)

    def to_json(
        self,
        options: ToJsonOptions | None = None,
        *,
        remove_circular: bool | None = None,
    ) -> dict[str, Any]:
        """Serialize the entry to the format the API expects.

        Args:
            options: Serialization options.
            remove_circular: Shortcut overriding ``options.remove_circular``.

        Returns:
            The wire record with a ``{"seconds", "nanos"}`` timestamp and
            at most one of ``jsonPayload`` / ``textPayload``.

        Raises:
            CircularReferenceError: If the structured payload references
                itself and circular references are not removed.
        """
        options = options or ToJsonOptions()
        if remove_circular is not None:
            options = dataclasses.replace(options, remove_circular=remove_circular)

        record = copy.deepcopy(self.metadata.to_mapping())

        payload = self.payload
        if payload.kind is PayloadKind.STRUCTURED:
            record["jsonPayload"] = obj_to_struct(
                payload.value,
                remove_circular=options.remove_circular,
                stringify=True,
            )
        elif payload.kind is PayloadKind.TEXT:
            record["textPayload"] = payload.value
        elif payload.kind is PayloadKind.UNSUPPORTED:
            logger.warning(
                "Entry %s has data of unsupported type %s; no payload written",
                self.metadata.insert_id,
                type(payload.value).__name__,
            )

        if (
            self._wire_timestamp is not None
            and self._wire_timestamp[0] is self.metadata.timestamp
        ):
            record["timestamp"] = dict(self._wire_timestamp[1])
        elif "timestamp" in record:
            record["timestamp"] = to_wire_timestamp(record["timestamp"])
        return record

    @classmethod
    def from_api_response(cls, entry: Mapping[str, Any]) -> "Entry":
        """Create an Entry from an API representation of a log entry.

        The ``payload`` field names the field holding the payload. Records
        without it (REST responses) are searched for a known payload field
        instead, and a ``jsonPayload`` there may already be a plain object.
        """
        payload_field = entry.get("payload")
        if payload_field:
            data = entry.get(payload_field)
            if payload_field == PayloadKind.STRUCTURED.value and _is_struct(data):
                data = struct_to_obj(data)
        else:
            payload_field = next((f for f in _PAYLOAD_FIELDS if f in entry), None)
            data = entry.get(payload_field) if payload_field else None
            if payload_field == PayloadKind.STRUCTURED.value and _is_struct(data):
                data = struct_to_obj(data)

        serialized = cls(entry, data)
        timestamp = entry.get("timestamp")
        if is_wire_timestamp(timestamp):
            serialized.metadata.timestamp = from_wire_timestamp(timestamp)
            serialized._wire_timestamp = (
                serialized.metadata.timestamp,
                normalize_wire_timestamp(timestamp),
            )
        return serialized
