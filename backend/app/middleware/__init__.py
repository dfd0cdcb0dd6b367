"""
Bookmarks Service: Middleware Package
========================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (outermost first):
    Request → [CORS] → [Request ID] → [Logging] → [Bearer Auth] → Route Handler

    - CORS answers preflight OPTIONS requests before authentication.
    - Request ID is set before anything logs.
    - Logging wraps the auth gate, so 401 responses are logged with the ID.
    - Bearer Auth is last: nothing below it runs for an unauthorized request.
"""
