"""logwire: log entries and their structured-logging wire format."""

from logwire.adapters.logging import ContextProvider, EntryHandler
from logwire.adapters.storage.in_memory import InMemoryEntrySink
from logwire.core.encoding.ndjson import encode_entries
from logwire.core.entry import Entry
from logwire.core.insert_id import InsertIdGenerator, new_insert_id
from logwire.core.models import (
    LogEntryMetadata,
    Payload,
    PayloadKind,
    Severity,
    Timestamp,
    ToJsonOptions,
)
from logwire.core.ports import EntrySinkPort
from logwire.core.structs import (
    CIRCULAR_MARKER,
    CircularReferenceError,
    obj_to_struct,
    struct_to_obj,
)

__all__ = [
    "CIRCULAR_MARKER",
    "CircularReferenceError",
    "ContextProvider",
    "Entry",
    "EntryHandler",
    "EntrySinkPort",
    "InMemoryEntrySink",
    "InsertIdGenerator",
    "LogEntryMetadata",
    "Payload",
    "PayloadKind",
    "Severity",
    "Timestamp",
    "ToJsonOptions",
    "encode_entries",
    "new_insert_id",
    "obj_to_struct",
    "struct_to_obj",
]
