"""Conversion between plain mappings and the wire structured-value form.

A structured value is ``{"fields": {name: value}}`` where each value is a
single-key mapping naming its kind, e.g. ``{"stringValue": "abc"}`` or
``{"structValue": {"fields": {...}}}``.
"""

import base64
from collections.abc import Mapping
from typing import Any

CIRCULAR_MARKER = "[Circular]"

_VALUE_KINDS = (
    "nullValue",
    "numberValue",
    "stringValue",
    "boolValue",
    "blobValue",
    "structValue",
    "listValue",
)


class CircularReferenceError(ValueError):
    """Raised when a value references one of its own containers."""


class _StructEncoder:
    def __init__(self, remove_circular: bool, stringify: bool) -> None:
        self._remove_circular = remove_circular
        self._stringify = stringify
        # ids of the containers on the current walk path
        self._seen: set[int] = set()

    def convert(self, obj: Mapping[Any, Any]) -> dict[str, Any]:
        self._seen.add(id(obj))
        try:
            fields = {str(key): self.encode_value(value) for key, value in obj.items()}
        finally:
            self._seen.discard(id(obj))
        return {"fields": fields}

    def encode_value(self, value: Any) -> dict[str, Any]:
        if value is None:
            return {"nullValue": 0}
        if isinstance(value, bool):
            return {"boolValue": value}
        if isinstance(value, (int, float)):
            return {"numberValue": value}
        if isinstance(value, str):
            return {"stringValue": value}
        if isinstance(value, (bytes, bytearray)):
            return {"blobValue": base64.b64encode(bytes(value)).decode("ascii")}
        if isinstance(value, (Mapping, list, tuple)):
            if id(value) in self._seen:
                if not self._remove_circular:
                    raise CircularReferenceError(
                        "This object contains a circular reference. To "
                        "automatically remove it, set remove_circular to True."
                    )
                return {"stringValue": CIRCULAR_MARKER}
            if isinstance(value, Mapping):
                return {"structValue": self.convert(value)}
            return {"listValue": {"values": self._encode_list(value)}}
        if not self._stringify:
            raise TypeError(f"Value of type {type(value).__name__} not recognized.")
        return {"stringValue": str(value)}

    def _encode_list(self, values: list[Any] | tuple[Any, ...]) -> list[dict[str, Any]]:
        self._seen.add(id(values))
        try:
            return [self.encode_value(v) for v in values]
        finally:
            self._seen.discard(id(values))


def obj_to_struct(
    obj: Mapping[Any, Any],
    *,
    remove_circular: bool = False,
    stringify: bool = False,
) -> dict[str, Any]:
    """Convert a mapping into a wire structured value.

    Args:
        obj: The mapping to convert.
        remove_circular: Replace circular references with ``"[Circular]"``
            instead of raising CircularReferenceError.
        stringify: Encode values of unrecognised types as ``str(value)``
            instead of raising TypeError.

    Returns:
        A ``{"fields": {...}}`` structured value.
    """
    return _StructEncoder(remove_circular, stringify).convert(obj)


def _value_kind(value: Mapping[str, Any]) -> str:
    kind = value.get("kind")
    if kind:
        return str(kind)
    for candidate in _VALUE_KINDS:
        if candidate in value:
            return candidate
    raise ValueError(f"Structured value has no recognised kind: {value!r}")


def decode_value(value: Mapping[str, Any]) -> Any:
    """Decode a single wire value into its plain Python form."""
    kind = _value_kind(value)
    if kind == "structValue":
        return struct_to_obj(value[kind])
    if kind == "nullValue":
        return None
    if kind == "listValue":
        return [decode_value(v) for v in value[kind].get("values", [])]
    if kind == "blobValue":
        return base64.b64decode(value[kind])
    return value[kind]


def struct_to_obj(struct: Mapping[str, Any]) -> dict[str, Any]:
    """Convert a wire structured value back into a plain dict."""
    return {
        name: decode_value(value) for name, value in struct.get("fields", {}).items()
    }
