class EnrichmentError(Exception):
    """Raised when AI metadata enrichment fails."""


class EnrichmentValidationError(EnrichmentError):
    """Raised when the AI payload does not match the enrichment schema."""


class EnrichmentNetworkError(EnrichmentError):
    """Raised when the AI provider call fails due to network/infrastructure issues."""
