from typing import ClassVar

from lexdocs.config.settings import Settings
from lexdocs.enrichment.base import BaseEnricher
from lexdocs.enrichment.enricher import DisabledEnricher, Enricher
from lexdocs.enrichment.example_client_adapter import ExampleClientAdapter
from lexdocs.enrichment.openai_client_adapter import OpenAIClientAdapter

DEFAULT_MODEL_NAME = "gpt-4o-mini"


class EnricherFactory:
    """Creates the configured enricher."""

    OPENAI_COMPATIBLE_BASE_URLS: ClassVar[dict[str, str]] = {
        "openrouter": "https://openrouter.ai/api/v1",
        "groq": "https://api.groq.com/openai/v1",
        "together": "https://api.together.xyz/v1",
        "deepseek": "https://api.deepseek.com/v1",
        "ollama": "http://localhost:11434/v1",
    }

    @classmethod
    def create(cls, settings: Settings) -> BaseEnricher:
        """Create an enricher from application settings.

        A missing API key is not an error: it yields a DisabledEnricher.
        """
        provider = settings.enrichment_provider.lower()
        if provider == "example":
            return Enricher(
                client=ExampleClientAdapter(),
                model="example",
                temperature=0.0,
                max_chars=settings.enrichment_max_chars,
            )

        base_url = cls._resolve_base_url(provider, settings)
        api_key = settings.openai_api_key.strip()
        if not api_key and provider != "ollama":
            return DisabledEnricher()

        client = OpenAIClientAdapter(
            api_key=api_key or "ollama",
            timeout_seconds=settings.openai_timeout_seconds,
            base_url=base_url,
        )
        return Enricher(
            client=client,
            model=settings.openai_model_name.strip() or DEFAULT_MODEL_NAME,
            temperature=settings.openai_temperature,
            max_chars=settings.enrichment_max_chars,
        )

    @classmethod
    def _resolve_base_url(cls, provider: str, settings: Settings) -> str | None:
        if provider == "openai":
            return None
        if provider == "openai_compatible":
            url = settings.openai_base_url.strip()
            if not url:
                raise ValueError(
                    "openai_base_url is required for enrichment_provider=openai_compatible"
                )
            return url
        default_base_url = cls.OPENAI_COMPATIBLE_BASE_URLS.get(provider)
        if default_base_url is not None:
            return settings.openai_base_url.strip() or default_base_url
        supported = [
            "example",
            "openai",
            "openai_compatible",
            *sorted(cls.OPENAI_COMPATIBLE_BASE_URLS),
        ]
        raise ValueError(
            f"Unknown enrichment provider '{provider}'. Choose from: {supported}"
        )
