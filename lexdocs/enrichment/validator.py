"""Validates the raw AI payload against the enrichment schema and builds the result."""

from datetime import datetime
from typing import Any

from lexdocs.enrichment.exceptions import EnrichmentValidationError
from lexdocs.enrichment.models import EnrichmentResult, KeyValuePair

STRING_FIELDS = ("title", "date", "court", "caseNumber", "summary", "caseType", "area")
PAIR_FIELDS = ("areaData", "metadata")
ALLOWED_FIELDS = frozenset(STRING_FIELDS + PAIR_FIELDS)


def validate_and_build(data: dict[str, Any]) -> EnrichmentResult:
    """Validate raw parsed JSON and build an EnrichmentResult.

    The key set is closed: every field must be present and no other key
    is accepted.

    Raises:
        EnrichmentValidationError: on any validation failure.
    """
    _require_exact_fields(data)
    for name in STRING_FIELDS:
        _require_nullable_string(data[name], name)

    raw_date = _clean_string(data["date"])
    return EnrichmentResult(
        title=_clean_string(data["title"]),
        date=parse_iso_date(raw_date),
        raw_date=raw_date,
        court=_clean_string(data["court"]),
        case_number=_clean_string(data["caseNumber"]),
        summary=_clean_string(data["summary"]),
        case_type=_clean_string(data["caseType"]),
        area=_clean_string(data["area"]),
        area_data=_build_pairs(data["areaData"], "areaData"),
        metadata=_build_pairs(data["metadata"], "metadata"),
        raw_json=data,
    )


def parse_iso_date(value: str | None) -> datetime | None:
    """Parse an ISO 8601 date or datetime; None when missing or unparseable."""
    if not value:
        return None
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        return None


def _require_exact_fields(data: dict[str, Any]) -> None:
    missing = sorted(ALLOWED_FIELDS - data.keys())
    if missing:
        raise EnrichmentValidationError(f"Missing required fields: {missing}")
    unexpected = sorted(data.keys() - ALLOWED_FIELDS)
    if unexpected:
        raise EnrichmentValidationError(f"Unexpected fields: {unexpected}")


def _require_nullable_string(raw: Any, name: str) -> None:
    if raw is not None and not isinstance(raw, str):
        raise EnrichmentValidationError(f"'{name}' must be a string or null")


def _clean_string(raw: str | None) -> str | None:
    if raw is None:
        return None
    trimmed = raw.strip()
    return trimmed or None


def _build_pairs(raw: Any, name: str) -> tuple[KeyValuePair, ...] | None:
    if raw is None:
        return None
    if not isinstance(raw, list):
        raise EnrichmentValidationError(f"'{name}' must be an array or null")
    pairs: list[KeyValuePair] = []
    for i, item in enumerate(raw):
        if not isinstance(item, dict) or set(item) != {"key", "value"}:
            raise EnrichmentValidationError(
                f"'{name}' item at index {i} must be an object with exactly 'key' and 'value'"
            )
        key, value = item["key"], item["value"]
        if not isinstance(key, str) or not isinstance(value, str):
            raise EnrichmentValidationError(
                f"'{name}' item at index {i}: 'key' and 'value' must be strings"
            )
        pairs.append(KeyValuePair(key=key, value=value))
    return tuple(pairs)
