from abc import ABC, abstractmethod
from dataclasses import dataclass

from lexdocs.extraction.file_kind import FileKind
from lexdocs.extraction.stream import ByteSource, read_bytes


@dataclass(frozen=True)
class ExtractionResult:
    """Plain text pulled from one upload, tagged with the detected file kind."""

    text: str
    kind: FileKind


class BaseTextExtractor(ABC):
    """Contract for all text extraction adapters."""

    @abstractmethod
    def extract(self, data: bytes) -> str:
        """Extract plain text from a materialized upload.

        Args:
            data: Raw file content.

        Returns:
            Extracted text as a single trimmed string.

        Raises:
            ExtractionError: if extraction fails for any reason.
        """

    def extract_stream(self, stream: ByteSource) -> str:
        """Materialize the whole stream, then extract."""
        return self.extract(read_bytes(stream))
