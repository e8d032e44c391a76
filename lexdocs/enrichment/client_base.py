from abc import ABC, abstractmethod

from lexdocs.enrichment.models import ChatCompletion


class BaseEnrichmentClient(ABC):
    """Contract for provider-specific enrichment AI clients."""

    @abstractmethod
    def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        user_prompt: str,
        json_schema: dict[str, object],
    ) -> ChatCompletion:
        """Return the provider response text and token usage."""
