from enum import Enum
from pathlib import PurePath

from lexdocs.documents.exceptions import UsageError


class FileKind(str, Enum):
    PDF = "pdf"
    HTML = "html"
    UNKNOWN = "unknown"


_HTML_EXTENSIONS = frozenset({".html", ".htm"})


def detect_file_kind(filename: str, mimetype: str | None = None) -> FileKind:
    """Classify an upload from its filename extension and declared MIME type.

    Raises:
        UsageError: if the filename is blank.
    """
    if not filename or not filename.strip():
        raise UsageError("filename must be provided to detect the file kind.")

    mime = (mimetype or "").lower()
    extension = PurePath(filename.strip()).suffix.lower()

    if "pdf" in mime or extension == ".pdf":
        return FileKind.PDF
    if "html" in mime or extension in _HTML_EXTENSIONS:
        return FileKind.HTML
    return FileKind.UNKNOWN
