"""FastAPI endpoints for the CV Query Assistant.

Endpoints:
    - GET /health: Service health status
    - POST /api/query: Relay a CV question to the upstream service
    - GET /api/cv: CV document metadata
    - GET /cv.pdf: CV document for the in-page viewer
"""

from cv_query.api.app import app, create_app

__all__ = ["app", "create_app"]
