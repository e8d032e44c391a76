from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class KeyValuePair:
    """One {key, value} entry of an AI-produced area/metadata list."""

    key: str
    value: str


@dataclass(frozen=True)
class ChatCompletion:
    """Provider response text plus token usage when the provider reports it."""

    content: str
    prompt_tokens: int | None = None
    completion_tokens: int | None = None


@dataclass(frozen=True)
class EnrichmentResult:
    """Structured metadata derived from document text by the AI provider."""

    title: str | None = None
    date: datetime | None = None
    raw_date: str | None = None
    court: str | None = None
    case_number: str | None = None
    summary: str | None = None
    case_type: str | None = None
    area: str | None = None
    area_data: tuple[KeyValuePair, ...] | None = None
    metadata: tuple[KeyValuePair, ...] | None = None
    raw_json: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class EnrichmentUnavailable:
    """Enrichment was skipped or failed; the pipeline proceeds without it."""

    reason: str


EnrichmentOutcome = EnrichmentResult | EnrichmentUnavailable
