from lexdocs.enrichment.base import BaseEnricher
from lexdocs.enrichment.enricher import DisabledEnricher, Enricher
from lexdocs.enrichment.factory import EnricherFactory
from lexdocs.enrichment.models import EnrichmentOutcome, EnrichmentResult, EnrichmentUnavailable

__all__ = [
    "BaseEnricher",
    "DisabledEnricher",
    "Enricher",
    "EnricherFactory",
    "EnrichmentOutcome",
    "EnrichmentResult",
    "EnrichmentUnavailable",
]
