"""Port interfaces for entry sinks.

A sink is where serialized-ready entries are handed off, for example to a
transport that batches them to the ingestion API. The core depends only on
this interface, not on concrete implementations.
"""

from collections.abc import Iterable
from typing import Protocol, runtime_checkable

from logwire.core.entry import Entry


@runtime_checkable
class EntrySinkPort(Protocol):
    """Port for entry sinks.

    Examples: InMemoryEntrySink.
    """

    def write(self, entry: Entry) -> None:
        """Write an entry to the sink."""
        ...

    def read(self) -> Iterable[Entry]:
        """Read the entries held by the sink.

        Returns:
            Iterable of Entry objects, ordered by insert id ascending.
        """
        ...
