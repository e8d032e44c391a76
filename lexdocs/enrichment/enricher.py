"""AI-powered legal metadata enricher."""

import json
import time
from pathlib import Path
from typing import Any

from lexdocs.enrichment.base import BaseEnricher
from lexdocs.enrichment.client_base import BaseEnrichmentClient
from lexdocs.enrichment.exceptions import EnrichmentError
from lexdocs.enrichment.models import ChatCompletion, EnrichmentOutcome, EnrichmentUnavailable
from lexdocs.enrichment.prompt_loader import load_json_schema, load_prompt_template
from lexdocs.enrichment.validator import validate_and_build
from lexdocs.logging.logger import Log

DEFAULT_MAX_CHARS = 6000
DEFAULT_SYSTEM_PROMPT = (
    "You extract concise metadata from legal documents. Respond with ONLY valid JSON."
)


def truncate_excerpt(text: str, limit: int = DEFAULT_MAX_CHARS) -> str:
    if len(text) <= limit:
        return text
    return f"{text[:limit]}..."


class Enricher(BaseEnricher):
    """Enriches extracted legal text with structured metadata using an AI provider.

    Every provider, parsing and validation failure is reported as
    EnrichmentUnavailable so that document creation never depends on the
    provider being reachable.
    """

    def __init__(
        self,
        *,
        client: BaseEnrichmentClient,
        model: str,
        temperature: float = 0.1,
        max_chars: int = DEFAULT_MAX_CHARS,
        prompt_template_path: Path | None = None,
        json_schema_path: Path | None = None,
        system_prompt: str = DEFAULT_SYSTEM_PROMPT,
    ) -> None:
        self._client = client
        self._model = model
        self._temperature = max(0.0, min(0.2, temperature))
        self._max_chars = max_chars
        self._system_prompt = system_prompt
        self._prompt_template = load_prompt_template(prompt_template_path)
        self._json_schema = load_json_schema(json_schema_path)

    def enrich(self, text: str) -> EnrichmentOutcome:
        if not text.strip():
            return EnrichmentUnavailable("no text to enrich")

        prompt = self._build_prompt(text)
        started = time.perf_counter()
        try:
            completion = self._call_ai(prompt)
            result = validate_and_build(self._parse_json(completion.content))
        except EnrichmentError as exc:
            elapsed_ms = (time.perf_counter() - started) * 1000
            Log.warning(
                f"AI metadata enrichment failed after {elapsed_ms:.0f} ms; "
                f"continuing without it: {exc}"
            )
            return EnrichmentUnavailable(str(exc))

        elapsed_ms = (time.perf_counter() - started) * 1000
        Log.info(
            f"AI metadata enrichment completed in {elapsed_ms:.0f} ms "
            f"(model={self._model}, prompt_tokens={completion.prompt_tokens}, "
            f"completion_tokens={completion.completion_tokens})"
        )
        if result.raw_date and result.date is None:
            Log.warning(f"AI returned an unparseable date {result.raw_date!r}; ignoring it")
        return result

    def _build_prompt(self, text: str) -> str:
        return self._prompt_template.format(
            document_excerpt=truncate_excerpt(text, self._max_chars),
        )

    def _call_ai(self, prompt: str) -> ChatCompletion:
        Log.debug(f"Enrichment prompt:\n{prompt}")
        completion = self._client.create_chat_completion(
            model=self._model,
            temperature=self._temperature,
            system_prompt=self._system_prompt,
            user_prompt=prompt,
            json_schema=self._json_schema,
        )
        Log.debug(f"AI raw response:\n{completion.content}")
        return completion

    @staticmethod
    def _parse_json(raw: str) -> dict[str, Any]:
        cleaned = raw.strip()
        if cleaned.startswith("```"):
            lines = cleaned.splitlines()
            if lines and lines[0].startswith("```"):
                lines = lines[1:]
            if lines and lines[-1].strip() == "```":
                lines = lines[:-1]
            cleaned = "\n".join(lines)

        if not cleaned:
            raise EnrichmentError("AI returned empty response")
        try:
            parsed = json.loads(cleaned)
        except json.JSONDecodeError as exc:
            raise EnrichmentError(f"Invalid JSON response: {exc}") from exc

        if not isinstance(parsed, dict):
            raise EnrichmentError("JSON response must be an object")
        return parsed


class DisabledEnricher(BaseEnricher):
    """Used when no API key is configured: every call is a deliberate skip."""

    def __init__(self, reason: str = "OPENAI_API_KEY is not configured") -> None:
        self._reason = reason
        self._logged = False

    def enrich(self, text: str) -> EnrichmentOutcome:
        _ = text
        if not self._logged:
            Log.warning(f"{self._reason}; continuing without AI metadata enrichment.")
            self._logged = True
        return EnrichmentUnavailable(self._reason)
