import io

import pdfplumber

from lexdocs.documents.exceptions import ExtractionError
from lexdocs.extraction.base import BaseTextExtractor


class PdfPlumberAdapter(BaseTextExtractor):
    """Extracts text from PDF using pdfplumber."""

    def extract(self, data: bytes) -> str:
        if not data:
            raise ExtractionError("Uploaded PDF file is empty.")
        try:
            with pdfplumber.open(io.BytesIO(data)) as pdf:
                pages = [page.extract_text() or "" for page in pdf.pages]
            return "\n".join(pages).strip()
        except Exception as exc:
            raise ExtractionError(f"Failed to parse PDF (pdfplumber): {exc}") from exc
