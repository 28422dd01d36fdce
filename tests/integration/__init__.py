"""Integration tests for components working together as a system.

Coverage:
    - POST /api/query with real HTTP requests through ASGITransport
    - CV document and health endpoints
    - Full chat turns from ChatSession through the proxy

Only the upstream CV service is stubbed, at the httpx transport level.
"""
