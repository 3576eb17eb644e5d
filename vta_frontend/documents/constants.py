"""Constants for the admin document dashboard."""

LIST_PATH = "/documents/list"
UPLOAD_PATH = "/documents/upload"

PDF_CONTENT_TYPE = "application/pdf"
PDF_SUFFIX = ".pdf"

PDF_ONLY_MESSAGE = "Only PDF files are accepted."
LIST_FAILED_MESSAGE = "Failed to fetch files"
LIST_UNAUTHORIZED_MESSAGE = "Your admin session has expired or is not authorized. Please log in again."
UPLOAD_FAILED_MESSAGE = "Upload failed"
UPLOAD_SUCCESS_MESSAGE = "File uploaded successfully to vector database."

__all__ = [
    "LIST_PATH",
    "UPLOAD_PATH",
    "PDF_CONTENT_TYPE",
    "PDF_SUFFIX",
    "PDF_ONLY_MESSAGE",
    "LIST_FAILED_MESSAGE",
    "LIST_UNAUTHORIZED_MESSAGE",
    "UPLOAD_FAILED_MESSAGE",
    "UPLOAD_SUCCESS_MESSAGE",
]
