"""Sink adapters implementing core ports."""

from logwire.adapters.storage.in_memory import InMemoryEntrySink

__all__ = [
    "InMemoryEntrySink",
]
