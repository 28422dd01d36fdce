"""FastAPI application factory and configuration.

Main application entry point with lifespan management, middleware,
and router registration.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from cv_query.api.documents import router as documents_router
from cv_query.api.query import router as query_router
from cv_query.documents.cv_document import CVDocumentError, get_cv_pdf_path, load_cv_document
from cv_query.proxy.config import get_proxy_config

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Manage application startup and shutdown lifecycle.

    Reports the upstream endpoint and checks that the CV document is readable.
    A missing or broken CV only disables the viewer, so startup continues.

    Args:
        app: The FastAPI application instance.

    Yields:
        Control to the application while it runs.
    """
    # Startup
    logger.info("Starting CV Query API...")
    logger.info(f"Forwarding queries to {get_proxy_config().upstream_url}")

    cv_path = get_cv_pdf_path()
    try:
        cv_info = load_cv_document(cv_path)
        logger.info(f"Serving CV document {cv_info.filename} ({cv_info.pages} pages)")
    except CVDocumentError as e:
        logger.warning(f"CV viewer unavailable: {e}")

    yield
    # Shutdown
    logger.info("Shutting down CV Query API...")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance.
    """
    application = FastAPI(
        title="CV Query API",
        description=(
            "Proxy for a hosted CV question-answering service. "
            "Validates chat questions, relays them to the upstream LLM API, and "
            "normalizes every failure into a uniform error envelope. "
            "Also serves the CV document shown in the chat UI."
        ),
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["*"],
    )

    application.include_router(query_router)
    application.include_router(documents_router)

    @application.get("/health")
    async def health_check() -> dict[str, str]:
        """Check service health status."""
        return {"status": "healthy", "service": "cv-query"}

    return application


app = create_app()
