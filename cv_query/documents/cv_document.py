"""CV document loading using pypdf.

Reads the CV PDF served to the viewer panel, validates it, and extracts
page count and metadata for the viewer header.
"""

import io
import logging
import os
from pathlib import Path

from pypdf import PdfReader
from pypdf.errors import PdfReadError

from cv_query.models.schemas import CVDocumentInfo

logger = logging.getLogger(__name__)

# Constants
MAX_FILE_SIZE = 10 * 1024 * 1024  # 10MB
PDF_MAGIC_BYTES = b"%PDF"
DEFAULT_CV_PDF_PATH = Path(__file__).parent.parent / "static" / "cv.pdf"


class CVDocumentError(Exception):
    """Raised when the CV document is missing or unreadable."""

    pass


class CVDocumentNotFoundError(CVDocumentError):
    """Raised when the CV document does not exist."""

    pass


def get_cv_pdf_path() -> Path:
    """Resolve the CV PDF location.

    Returns:
        CV_PDF_PATH from the environment, or the packaged static/cv.pdf.
    """
    configured = os.getenv("CV_PDF_PATH")
    return Path(configured) if configured else DEFAULT_CV_PDF_PATH


def _validate_pdf_bytes(file_content: bytes) -> None:
    """Validate PDF file content before parsing.

    Args:
        file_content: Raw bytes of the PDF file.

    Raises:
        CVDocumentError: If validation fails.
    """
    if not file_content:
        raise CVDocumentError("Empty file provided")

    if len(file_content) > MAX_FILE_SIZE:
        size_mb = len(file_content) / (1024 * 1024)
        raise CVDocumentError(f"File size ({size_mb:.1f}MB) exceeds maximum allowed (10MB)")

    if not file_content.lstrip()[:10].startswith(PDF_MAGIC_BYTES):
        raise CVDocumentError("Invalid PDF: file does not start with PDF header")


def _metadata_field(reader: PdfReader, key: str) -> str | None:
    try:
        if reader.metadata:
            value = reader.metadata.get(key)
            return str(value) if value else None
    except Exception as e:
        logger.warning(f"Failed to read PDF metadata {key}: {e}")
    return None


def read_cv_document(file_content: bytes, filename: str = "cv.pdf") -> CVDocumentInfo:
    """Parse CV PDF bytes and extract its metadata.

    Args:
        file_content: Raw bytes of the PDF file.
        filename: Name reported in the returned info.

    Returns:
        CVDocumentInfo with page count, title, and author.

    Raises:
        CVDocumentError: If the file is invalid, too large, empty, or corrupt.
    """
    _validate_pdf_bytes(file_content)

    try:
        reader = PdfReader(io.BytesIO(file_content))
        pages = len(reader.pages)
    except PdfReadError as e:
        raise CVDocumentError(f"Corrupt or invalid PDF: {e}") from e
    except Exception as e:
        raise CVDocumentError(f"Failed to read PDF: {e}") from e

    if pages == 0:
        raise CVDocumentError("PDF contains no pages")

    return CVDocumentInfo(
        filename=filename,
        pages=pages,
        title=_metadata_field(reader, "/Title"),
        author=_metadata_field(reader, "/Author"),
    )


def load_cv_document(path: Path) -> CVDocumentInfo:
    """Load the CV PDF from disk.

    Args:
        path: Location of the PDF file.

    Returns:
        CVDocumentInfo for the file.

    Raises:
        CVDocumentNotFoundError: If the file does not exist.
        CVDocumentError: If the file cannot be parsed.
    """
    if not path.is_file():
        raise CVDocumentNotFoundError(f"CV document not found: {path}")

    return read_cv_document(path.read_bytes(), filename=path.name)
