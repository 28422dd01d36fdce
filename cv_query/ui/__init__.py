"""NiceGUI interface - thin visualization layer for the CV chat.

Responsibilities:
    - Chat message display with a typing indicator
    - Session state: ordered history and one request in flight at a time
    - New chat with confirmation
    - In-page CV (PDF) viewer

Contains minimal business logic. Talks to the proxy over HTTP only.
"""
