"""
Bookmarks Service: Custom Exception Hierarchy
================================================

What:  Application-specific exceptions for the bookmark error taxonomy.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return `{"error": {"message": ...}}` bodies with the right status code.
Who:   Raised by services; caught by global handlers.

Exception Hierarchy:
    BookmarksError (base)       → 500 Internal Server Error
    ├── ValidationError         → 400 Bad Request
    ├── NotFoundError           → 404 Not Found
    └── DatabaseError           → 500 Internal Server Error

Unauthorized requests never reach this layer: the bearer auth middleware
answers them with 401 `{"error": "Unauthorized request"}` before routing.
"""

from typing import Any, Dict, Optional


class BookmarksError(Exception):
    """
    Base exception for all bookmarks service errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    status_code: int = 500

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(BookmarksError):
    """
    Raised when a create request is missing a required field.

    HTTP:    400 Bad Request
    Body:    {"error": {"message": "Missing 'title' in request body"}}

    Only the first missing field (in the fixed check order) is reported.
    """

    status_code = 400

    def __init__(
        self,
        field: str,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["field"] = field
        super().__init__(message=f"Missing '{field}' in request body", context=ctx)
        self.field = field


class NotFoundError(BookmarksError):
    """
    Raised when an addressed bookmark id has no row.

    HTTP:    404 Not Found
    When:    GET or DELETE /bookmarks/{id} with an unknown or malformed id.
    """

    status_code = 404

    def __init__(
        self,
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message="Bookmark doesn't exist", context=ctx)


class DatabaseError(BookmarksError):
    """
    Raised when database operations fail unexpectedly.

    HTTP:    500 Internal Server Error
    When:    Connection lost mid-query, constraint violation, bad column value.

    The SQL and driver error go to the server log only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
