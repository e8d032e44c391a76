class DocumentError(Exception):
    """Base exception for all document pipeline errors."""


class UsageError(DocumentError):
    """Raised when a caller supplies a blank required value or an empty update."""


class UnsupportedInputError(DocumentError):
    """Raised when an upload is neither a PDF nor an HTML document."""


class DataError(DocumentError):
    """Raised when caller data or file content cannot be parsed."""


class ExtractionError(DataError):
    """Raised when text cannot be extracted from an uploaded file."""


class DocumentNotFoundError(DocumentError):
    """Raised when a document cannot be found in the database."""
