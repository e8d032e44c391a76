from abc import ABC, abstractmethod

from lexdocs.enrichment.models import EnrichmentOutcome


class BaseEnricher(ABC):
    """Contract for all metadata enrichment adapters."""

    @abstractmethod
    def enrich(self, text: str) -> EnrichmentOutcome:
        """Derive structured legal metadata from extracted document text.

        Args:
            text: Plain text from the extraction step.

        Returns:
            EnrichmentResult on success, EnrichmentUnavailable when the
            provider is not configured or its output cannot be used.
            Implementations never raise for provider failures.
        """
