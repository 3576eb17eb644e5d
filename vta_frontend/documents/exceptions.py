"""Document dashboard exceptions."""
from __future__ import annotations

from ..exceptions import FrontendError, ValidationError


class DocumentError(FrontendError):
    """Base class for document dashboard failures."""


class DocumentListError(DocumentError):
    """Raised when the document listing could not be fetched."""


class DocumentAccessError(DocumentListError):
    """Raised when the listing is rejected with 401/403."""


class DocumentUploadError(DocumentError):
    """Raised when the backend rejects an upload."""


class UnsupportedFileTypeError(ValidationError):
    """Raised for non-PDF files before any upload is attempted."""


__all__ = [
    "DocumentError",
    "DocumentListError",
    "DocumentAccessError",
    "DocumentUploadError",
    "UnsupportedFileTypeError",
]
