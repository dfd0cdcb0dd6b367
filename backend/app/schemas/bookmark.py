"""
Bookmarks Service: Pydantic Response Schemas
===============================================

What:  Pydantic models defining what the API returns and documents.
How:   Route handlers return these models; FastAPI serializes them and
       generates the OpenAPI docs from them.

Create requests are NOT modeled here: the body is read as a raw JSON object
so that a missing field yields `Missing '<field>' in request body` (400)
instead of FastAPI's automatic 422 response.
"""

from pydantic import BaseModel, Field


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class BookmarkResponse(BaseModel):
    """
    What:  Full representation of a bookmark.
    Who:   Returned by list (as array items), get-by-id and create.

    title and description are always sanitized before a response is built.
    """
    id: int = Field(description="Server-assigned bookmark identifier")
    title: str = Field(description="Bookmark title (markup neutralized)")
    bookmarkurl: str = Field(description="Bookmarked URL")
    description: str = Field(description="Free-text description (markup neutralized)")
    rating: int = Field(description="Rating, typically 1-5")

    model_config = {"from_attributes": True}


# ══════════════════════════════════════════════════════════════════════════
# Error Response Models
# ══════════════════════════════════════════════════════════════════════════


class ErrorMessage(BaseModel):
    message: str = Field(description="Human-readable error description")


class ErrorResponse(BaseModel):
    """
    What:  Error body for 400, 404 and 500 responses.

    Example:
        {"error": {"message": "Bookmark doesn't exist"}}
    """
    error: ErrorMessage


class UnauthorizedResponse(BaseModel):
    """
    What:  Error body for 401 responses. Note `error` is a plain string here.

    Example:
        {"error": "Unauthorized request"}
    """
    error: str = Field(default="Unauthorized request")


class HealthResponse(BaseModel):
    """Health check response showing service and database status."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
