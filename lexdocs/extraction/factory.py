from lexdocs.config.settings import Settings
from lexdocs.documents.exceptions import UnsupportedInputError
from lexdocs.extraction.base import BaseTextExtractor
from lexdocs.extraction.file_kind import FileKind
from lexdocs.extraction.html_adapter import HtmlAdapter
from lexdocs.extraction.pdfplumber_adapter import PdfPlumberAdapter
from lexdocs.extraction.pymupdf_adapter import PyMuPdfAdapter


class ExtractorFactory:
    """Creates the text extractor for a file kind based on settings."""

    PDF_ADAPTERS: dict[str, type[BaseTextExtractor]] = {
        "pdfplumber": PdfPlumberAdapter,
        "pymupdf": PyMuPdfAdapter,
    }

    def __init__(self, settings: Settings) -> None:
        self._pdf_extractor = self.create_pdf_extractor(settings)
        self._html_extractor = HtmlAdapter(parser=settings.html_parser)

    def for_kind(self, kind: FileKind) -> BaseTextExtractor:
        """Return the extractor for a classified upload.

        Raises:
            UnsupportedInputError: for FileKind.UNKNOWN.
        """
        if kind is FileKind.PDF:
            return self._pdf_extractor
        if kind is FileKind.HTML:
            return self._html_extractor
        raise UnsupportedInputError("Only PDF or HTML files are supported.")

    @classmethod
    def create_pdf_extractor(cls, settings: Settings) -> BaseTextExtractor:
        engine = settings.pdf_engine.lower()
        adapter_cls = cls.PDF_ADAPTERS.get(engine)
        if adapter_cls is None:
            raise ValueError(
                f"Unknown PDF engine '{engine}'. Choose from: {list(cls.PDF_ADAPTERS)}"
            )
        return adapter_cls()
