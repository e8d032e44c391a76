"""Field precedence for documents created from an upload.

Caller input always wins over AI-derived values: a field the caller
supplied, even as None, is used as is; otherwise the AI value is used;
otherwise None. The metadata column additionally carries extraction
provenance, which always overwrites matching caller keys.
"""

from dataclasses import dataclass
from typing import Any, TypeVar

from lexdocs.documents.json_encoding import pairs_to_object
from lexdocs.documents.models import UNSET, Unset
from lexdocs.enrichment.models import EnrichmentOutcome, EnrichmentResult

T = TypeVar("T")

SCALAR_FIELDS = ("title", "date", "court", "case_number", "summary", "case_type", "area")


@dataclass(frozen=True)
class Provenance:
    original_file_name: str
    mime_type: str | None
    raw_text: str | None
    ai_extraction: dict[str, Any] | None

    def to_dict(self) -> dict[str, Any]:
        return {
            "originalFileName": self.original_file_name,
            "mimeType": self.mime_type,
            "rawText": self.raw_text,
            "aiExtraction": self.ai_extraction,
        }


def merge_scalar(explicit: T | None | Unset, ai_value: T | None) -> T | None:
    if explicit is UNSET:
        return ai_value
    return explicit


def merge_metadata(caller: Any | Unset, provenance: Provenance) -> dict[str, Any]:
    extra = provenance.to_dict()
    if caller is UNSET:
        return extra
    if isinstance(caller, dict):
        return {**caller, **extra}
    return {"value": caller, **extra}


def merge_area_data(caller: Any | Unset, enrichment: EnrichmentOutcome) -> Any:
    if caller is not UNSET:
        return caller
    if isinstance(enrichment, EnrichmentResult) and enrichment.area_data is not None:
        return pairs_to_object((pair.key, pair.value) for pair in enrichment.area_data)
    return None


def merge_upload_fields(
    *,
    file_name: str,
    explicit: dict[str, Any],
    caller_metadata: Any | Unset,
    caller_area_data: Any | Unset,
    enrichment: EnrichmentOutcome,
    provenance: Provenance,
) -> dict[str, Any]:
    """Build the full field map for a document created from an upload.

    Args:
        file_name: The uploaded file's name.
        explicit: Scalar fields the caller supplied (explicit None included).
        caller_metadata: Parsed caller metadata JSON, or UNSET.
        caller_area_data: Parsed caller areaData JSON, or UNSET.
        enrichment: Outcome of the AI enrichment step.
        provenance: Extraction provenance merged into metadata.
    """
    ai = _ai_scalars(enrichment)
    merged: dict[str, Any] = {"file_name": file_name}
    for name in SCALAR_FIELDS:
        merged[name] = merge_scalar(explicit.get(name, UNSET), ai[name])
    merged["metadata"] = merge_metadata(caller_metadata, provenance)
    merged["area_data"] = merge_area_data(caller_area_data, enrichment)
    return merged


def _ai_scalars(enrichment: EnrichmentOutcome) -> dict[str, Any]:
    if not isinstance(enrichment, EnrichmentResult):
        return dict.fromkeys(SCALAR_FIELDS)
    return {name: getattr(enrichment, name) for name in SCALAR_FIELDS}
