"""Timestamp normalisation between wall-clock values and the wire pair."""

import logging
import math
import re
from collections.abc import Mapping
from datetime import UTC, datetime, timedelta
from typing import Any

from logwire.core.models import Timestamp

logger = logging.getLogger(__name__)

EPOCH = datetime(1970, 1, 1, tzinfo=UTC)

_SECONDS_PREFIX = re.compile(r"[.,Z]")
_FRACTION = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}.(\d{0,9})Z$")


def _from_datetime(value: datetime) -> dict[str, int]:
    if value.tzinfo is None:
        # naive values are local time, as with datetime.timestamp()
        value = value.astimezone(UTC)
    delta = value - EPOCH
    return {
        "seconds": delta.days * 86400 + delta.seconds,
        "nanos": delta.microseconds * 1000,
    }


def _from_epoch_seconds(value: float) -> dict[str, int]:
    seconds = math.floor(value)
    return {"seconds": seconds, "nanos": math.floor((value - seconds) * 1e9)}


def _from_rfc3339(value: str) -> dict[str, int]:
    # The second and fraction parts are extracted separately so digits
    # beyond microseconds survive.
    prefix = _SECONDS_PREFIX.split(value, maxsplit=1)[0]
    try:
        parsed = datetime.fromisoformat(prefix + "Z")
    except ValueError:
        logger.debug("Unparseable timestamp %r, using the epoch", value)
        seconds = 0
    else:
        seconds = math.floor((parsed - EPOCH).total_seconds())

    match = _FRACTION.fullmatch(value)
    digits = match.group(1) if match else ""
    nanos = int(digits.ljust(9, "0")) if digits else 0
    return {"seconds": seconds, "nanos": nanos}


def to_wire_timestamp(value: Timestamp) -> Timestamp:
    """Normalise a timestamp into the wire ``{"seconds", "nanos"}`` pair.

    Args:
        value: A datetime, epoch seconds, an RFC3339 "Zulu" string, or an
            already structured pair (returned unchanged).

    Returns:
        The structured pair.

    Raises:
        TypeError: If the value is none of the accepted forms.
    """
    if isinstance(value, datetime):
        return _from_datetime(value)
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return _from_epoch_seconds(value)
    if isinstance(value, str):
        return _from_rfc3339(value)
    if isinstance(value, Mapping):
        return value
    raise TypeError(f"Unsupported timestamp type: {type(value).__name__}")


def is_wire_timestamp(value: Any) -> bool:
    """Return True if value is a structured ``{"seconds", "nanos"}`` pair."""
    return isinstance(value, Mapping) and ("seconds" in value or "nanos" in value)


def normalize_wire_timestamp(value: Mapping[str, Any]) -> dict[str, int]:
    """Return a structured pair with integer ``seconds`` and ``nanos``.

    ``seconds`` may be a string, as int64 values often are in JSON. Missing
    parts are zero.
    """
    return {
        "seconds": int(value.get("seconds") or 0),
        "nanos": int(value.get("nanos") or 0),
    }


def from_wire_timestamp(value: Mapping[str, Any]) -> datetime:
    """Convert a structured pair into an aware UTC datetime.

    Precision below one microsecond is truncated.
    """
    pair = normalize_wire_timestamp(value)
    return EPOCH + timedelta(
        seconds=pair["seconds"], microseconds=pair["nanos"] // 1000
    )
