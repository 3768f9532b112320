"""In-memory entry sink."""

import threading
from collections.abc import Iterable

from logwire.core.entry import Entry


class InMemoryEntrySink:
    """In-memory implementation of EntrySinkPort.

    Stores entries in a list. Suitable for testing and for handing
    entries to a transport that drains the sink.
    """

    def __init__(self) -> None:
        self._entries: list[Entry] = []
        self._lock = threading.Lock()

    def write(self, entry: Entry) -> None:
        """Write an entry to the sink."""
        with self._lock:
            self._entries.append(entry)

    def read(self) -> Iterable[Entry]:
        """Read all entries, ordered by insert id ascending."""
        with self._lock:
            entries = list(self._entries)
        return sorted(entries, key=lambda e: e.metadata.insert_id)

    def drain(self) -> list[Entry]:
        """Remove and return all entries, ordered by insert id ascending."""
        with self._lock:
            entries, self._entries = self._entries, []
        return sorted(entries, key=lambda e: e.metadata.insert_id)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
