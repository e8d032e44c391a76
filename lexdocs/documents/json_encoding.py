"""Legacy and canonical encodings of the areaData/metadata JSON columns.

Older rows store a map as an array of {"key": ..., "value": ...} objects.
The canonical encoding is a plain JSON object keyed by "key". Stored values
are read once into one of three variants; only LegacyPairs is ever
converted, and nothing produces LegacyPairs again.
"""

import json
import math
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class LegacyPairs:
    pairs: tuple[tuple[str, Any], ...]


@dataclass(frozen=True)
class Canonical:
    value: dict[str, Any]


@dataclass(frozen=True)
class Opaque:
    """Null, scalars and arrays that are not key/value pairs. Left untouched."""

    value: Any


StoredJson = LegacyPairs | Canonical | Opaque


def read_stored(value: Any) -> StoredJson:
    if isinstance(value, dict):
        return Canonical(value)
    if isinstance(value, list) and all(_is_pair(item) for item in value):
        return LegacyPairs(tuple((item["key"], item["value"]) for item in value))
    return Opaque(value)


def pairs_to_object(pairs: Iterable[tuple[str, Any]]) -> dict[str, Any]:
    """Fold key/value pairs into an object; later duplicates win."""
    result: dict[str, Any] = {}
    for key, value in pairs:
        result[key] = coerce_scalar(value)
    return result


def coerce_scalar(value: Any) -> Any:
    """Turn "42", "1.5", "true", "false" and "null" into JSON scalars.

    Anything else, including strings that decode to objects or arrays, is
    returned unchanged.
    """
    if not isinstance(value, str):
        return value
    text = value.strip()
    if not text:
        return value
    try:
        parsed = json.loads(text)
    except ValueError:
        return value
    if parsed is None or isinstance(parsed, bool):
        return parsed
    if isinstance(parsed, (int, float)) and math.isfinite(parsed):
        return parsed
    return value


def _is_pair(item: Any) -> bool:
    return (
        isinstance(item, dict)
        and "key" in item
        and "value" in item
        and isinstance(item["key"], str)
    )
