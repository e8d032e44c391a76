"""JSON-string fields on the way in and out of the document store.

Input is strict: a non-blank string that is not JSON is a caller error.
Output is lenient: a value that cannot be serialized is rendered as null.
"""

import json
from typing import Any

from lexdocs.documents.exceptions import DataError

JsonValue = Any


def parse_json_field(label: str, value: str | None) -> JsonValue | None:
    """Parse a caller-supplied JSON string.

    Blank or absent input means "no value" and returns None.

    Raises:
        DataError: if a non-blank value is not valid JSON.
    """
    if value is None or not value.strip():
        return None
    try:
        return json.loads(value)
    except json.JSONDecodeError as exc:
        raise DataError(f"{label} must be valid JSON when provided.") from exc


def stringify_json(value: JsonValue | None) -> str | None:
    if value is None:
        return None
    if isinstance(value, str):
        return value
    try:
        return json.dumps(value, ensure_ascii=False)
    except (TypeError, ValueError):
        return None
