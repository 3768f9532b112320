"""Encoders for wire records."""

from logwire.core.encoding.ndjson import encode_entries

__all__ = ["encode_entries"]
