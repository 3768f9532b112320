"""NDJSON encoder for log entries."""

import json
from collections.abc import Iterable

from logwire.core.entry import Entry
from logwire.core.models import ToJsonOptions


def encode_entries(
    entries: Iterable[Entry],
    options: ToJsonOptions | None = None,
) -> str:
    """Encode log entries to newline-delimited wire JSON.

    Args:
        entries: An iterable of Entry objects.
        options: Serialization options passed to ``Entry.to_json``.

    Returns:
        NDJSON string with one wire record per line.
        Empty string if no entries.
    """
    lines = [json.dumps(entry.to_json(options)) for entry in entries]

    if not lines:
        return ""

    return "\n".join(lines) + "\n"
