import json
from pathlib import Path
from typing import Any

from lexdocs.enrichment.exceptions import EnrichmentError

_DEFAULT_PROMPT_DIR = Path(__file__).parent / "prompts"


def load_prompt_template(path: Path | None = None) -> str:
    """Load the enrichment prompt template from a file.

    Args:
        path: Path to the prompt template file.
              Defaults to the bundled enrichment_prompt.txt.

    Returns:
        The raw template string with a {document_excerpt} placeholder.

    Raises:
        EnrichmentError: if the file cannot be read.
    """
    if path is None:
        path = _DEFAULT_PROMPT_DIR / "enrichment_prompt.txt"
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise EnrichmentError(f"Failed to load prompt template: {exc}") from exc


def load_json_schema(path: Path | None = None) -> dict[str, Any]:
    """Load and parse the enrichment JSON schema.

    Raises:
        EnrichmentError: if the file cannot be read or is not a JSON object.
    """
    if path is None:
        path = _DEFAULT_PROMPT_DIR / "enrichment_schema.json"
    try:
        schema = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise EnrichmentError(f"Failed to load JSON schema: {exc}") from exc
    if not isinstance(schema, dict):
        raise EnrichmentError("JSON schema must be an object")
    return schema
