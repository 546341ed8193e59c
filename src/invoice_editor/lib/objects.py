"""
Object utilities for hashing and JSON serialization.

Used to encode the pre-serialized ``itemsPayload`` string and to produce
short fingerprints of outgoing payloads for log correlation.
"""

import hashlib
import json
from dataclasses import asdict, is_dataclass
from typing import Any


def fingerprint(obj: Any, length: int = 12) -> str:
    """
    Return a stable, shortened SHA-256 hex digest of an object.

    Keys are sorted before hashing so equal payloads always produce the
    same fingerprint regardless of insertion order.

    Args:
        obj: Any JSON-serializable object.
        length: Number of hex characters to keep.

    Returns:
        Hexadecimal digest prefix.
    """
    json_str = json.dumps(obj, sort_keys=True, default=_default_serializer)
    return hashlib.sha256(json_str.encode("utf-8")).hexdigest()[:length]


def to_json(obj: Any, indent: int | None = None) -> str:
    """
    Serialize an object to JSON string.

    Handles dataclasses by converting them to dictionaries first.
    Objects exposing ``to_dict()`` are serialized through it.

    Args:
        obj: Object to serialize.
        indent: Optional indentation for pretty printing.

    Returns:
        JSON string representation.
    """
    if is_dataclass(obj) and not isinstance(obj, type):
        obj = asdict(obj)
    return json.dumps(obj, default=_default_serializer, indent=indent)


def from_json(text: str) -> Any:
    """Parse a JSON string produced by to_json()."""
    return json.loads(text)


def _default_serializer(obj: Any) -> Any:
    """Fallback encoder for values json cannot handle natively."""
    if hasattr(obj, "to_dict"):
        return obj.to_dict()
    if is_dataclass(obj) and not isinstance(obj, type):
        return asdict(obj)
    if hasattr(obj, "__dict__"):
        return obj.__dict__
    return str(obj)
