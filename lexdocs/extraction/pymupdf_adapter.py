import pymupdf

from lexdocs.documents.exceptions import ExtractionError
from lexdocs.extraction.base import BaseTextExtractor


class PyMuPdfAdapter(BaseTextExtractor):
    """Extracts text from PDF using PyMuPDF."""

    def extract(self, data: bytes) -> str:
        if not data:
            raise ExtractionError("Uploaded PDF file is empty.")
        try:
            with pymupdf.open(stream=data, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                pages = [page.get_text() for page in doc]
            return "\n".join(pages).strip()
        except Exception as exc:
            raise ExtractionError(f"Failed to parse PDF (pymupdf): {exc}") from exc
