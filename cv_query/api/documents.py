"""CV document endpoints for the in-page PDF viewer."""

import logging
from pathlib import Path

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import FileResponse

from cv_query.documents.cv_document import (
    CVDocumentError,
    CVDocumentNotFoundError,
    get_cv_pdf_path,
    load_cv_document,
)
from cv_query.models.schemas import CVDocumentInfo

logger = logging.getLogger(__name__)

router = APIRouter(tags=["documents"])


@router.get("/cv.pdf", response_class=FileResponse)
async def cv_pdf(path: Path = Depends(get_cv_pdf_path)) -> FileResponse:
    """Serve the CV PDF for the viewer panel.

    Raises:
        404: The CV document is not present.
    """
    if not path.is_file():
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="CV document not found",
        )
    return FileResponse(path, media_type="application/pdf")


@router.get("/api/cv", response_model=CVDocumentInfo)
async def cv_info(path: Path = Depends(get_cv_pdf_path)) -> CVDocumentInfo:
    """Return page count and metadata of the CV PDF.

    Raises:
        404: The CV document is not present.
        500: The CV document cannot be parsed.
    """
    try:
        return load_cv_document(path)
    except CVDocumentNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="CV document not found",
        ) from e
    except CVDocumentError as e:
        logger.error(f"Failed to read CV document {path}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="CV document could not be read",
        ) from e
