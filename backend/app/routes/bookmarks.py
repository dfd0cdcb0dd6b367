"""
Bookmarks Service: Bookmark Route Handlers
=============================================

What:  HTTP surface for the bookmarks resource.
How:   Extracts path/body data, delegates to BookmarkService, sets status
       codes and headers. Errors raised by the service are turned into
       responses by the handlers registered in app.main.

Routes:
    GET    /bookmarks        → 200 [bookmark, ...]
    POST   /bookmarks        → 201 bookmark + Location: /bookmarks/<id>
    GET    /bookmarks/{id}   → 200 bookmark | 404
    DELETE /bookmarks/{id}   → 204 | 404

All routes sit behind BearerAuthMiddleware (401 before any handler runs).
"""

import json
import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.schemas.bookmark import BookmarkResponse, ErrorResponse, UnauthorizedResponse
from app.services.bookmark_service import bookmark_service

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/bookmarks",
    tags=["Bookmarks"],
    responses={401: {"description": "Missing or invalid bearer token", "model": UnauthorizedResponse}},
)


async def _read_json_object(request: Request) -> Dict[str, Any]:
    """
    Request body as a dict; anything that is not a JSON object reads as {}.

    An unreadable body then fails validation on the first required field.
    """
    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        logger.debug("Request body is not valid JSON")
        return {}
    return body if isinstance(body, dict) else {}


@router.get(
    "",
    response_model=List[BookmarkResponse],
    summary="List all bookmarks",
)
async def list_bookmarks(
    db: AsyncSession = Depends(get_db_session),
) -> List[BookmarkResponse]:
    """Every bookmark in insertion order; `[]` when there are none."""
    return await bookmark_service.list_bookmarks(db)


@router.post(
    "",
    status_code=201,
    response_model=BookmarkResponse,
    responses={400: {"description": "Required field missing", "model": ErrorResponse}},
    summary="Create a bookmark",
    description=(
        "Requires non-empty `title`, `bookmarkurl`, `description` and `rating`. "
        "The first missing field (in that order) is reported."
    ),
)
async def create_bookmark(
    request: Request,
    response: Response,
    db: AsyncSession = Depends(get_db_session),
) -> BookmarkResponse:
    payload = await _read_json_object(request)
    bookmark = await bookmark_service.create_bookmark(db, payload)
    response.headers["Location"] = f"/bookmarks/{bookmark.id}"
    return bookmark


@router.get(
    "/{bookmark_id}",
    response_model=BookmarkResponse,
    responses={404: {"description": "Bookmark not found", "model": ErrorResponse}},
    summary="Get a single bookmark by id",
)
async def get_bookmark(
    bookmark_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> BookmarkResponse:
    """
    Args:
        bookmark_id: taken as a string so malformed ids answer 404
                     rather than FastAPI's 422.
    """
    return await bookmark_service.get_bookmark(db, bookmark_id)


@router.delete(
    "/{bookmark_id}",
    status_code=204,
    response_class=Response,
    responses={404: {"description": "Bookmark not found", "model": ErrorResponse}},
    summary="Delete a bookmark",
)
async def delete_bookmark(
    bookmark_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    await bookmark_service.delete_bookmark(db, bookmark_id)
    return Response(status_code=204)
