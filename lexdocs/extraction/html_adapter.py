import re

from bs4 import BeautifulSoup

from lexdocs.documents.exceptions import ExtractionError
from lexdocs.extraction.base import BaseTextExtractor
from lexdocs.extraction.stream import ByteSource, read_text

_WHITESPACE = re.compile(r"\s+")


class HtmlAdapter(BaseTextExtractor):
    """Extracts visible text from an HTML document using BeautifulSoup."""

    def __init__(self, parser: str = "lxml", encoding: str = "utf-8") -> None:
        self._parser = parser
        self._encoding = encoding

    def extract(self, data: bytes) -> str:
        return self.extract_markup(data.decode(self._encoding, errors="replace"))

    def extract_stream(self, stream: ByteSource) -> str:
        return self.extract_markup(read_text(stream, self._encoding))

    def extract_markup(self, html: str) -> str:
        """Return the <body> text (or the whole document's text) with whitespace collapsed."""
        try:
            soup = BeautifulSoup(html, self._parser)
            root = soup.body if soup.body is not None else soup
            text = root.get_text()
        except Exception as exc:
            raise ExtractionError(f"Failed to parse HTML: {exc}") from exc
        return _WHITESPACE.sub(" ", text).strip()
