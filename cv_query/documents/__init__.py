"""CV document utilities for the in-page PDF viewer.

Responsibilities:
    - Locating the CV PDF (packaged asset or CV_PDF_PATH)
    - Validating the file with pypdf
    - Extracting page count, title, and author
"""

from cv_query.documents.cv_document import (
    CVDocumentError,
    CVDocumentNotFoundError,
    get_cv_pdf_path,
    load_cv_document,
    read_cv_document,
)

__all__ = [
    "CVDocumentError",
    "CVDocumentNotFoundError",
    "get_cv_pdf_path",
    "load_cv_document",
    "read_cv_document",
]
