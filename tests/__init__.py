"""Test package for the CV Query Assistant.

Unit tests cover isolated logic; integration tests drive the FastAPI app
in-process with httpx.

Structure:
    - unit/: Individual function and class tests
    - integration/: Proxy, CV routes, and full chat turns

The upstream CV service is always replaced by an httpx MockTransport.
Leverages pytest with pytest-check for soft assertions.
"""
