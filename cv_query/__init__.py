"""CV Query Assistant - chat front end and query proxy for a hosted CV Q&A service.

Combines FastAPI for the proxy endpoint, httpx for outbound calls,
NiceGUI for the chat interface, and Pydantic for data validation.

Components:
    - api: HTTP endpoints (query proxy, CV document, health)
    - proxy: Upstream forwarding and error normalization
    - documents: CV PDF loading and metadata extraction
    - ui: Chat session state and web interface
    - models: Request/response schemas
"""

__version__ = "0.1.0"
