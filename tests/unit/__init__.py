"""Unit tests for individual components in isolation.

Coverage:
    - models/: Pydantic validation and serialization
    - proxy/: Configuration, validation, and upstream error mapping
    - documents/: CV PDF loading
    - ui/: Chat session state and message formatting

Follows single responsibility per test function. Leverages pytest-check
for multiple assertions per test.
"""
