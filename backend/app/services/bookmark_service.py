"""
Bookmarks Service: Bookmark Service (Business Logic)
=======================================================

What:  List, get, create and delete bookmarks, with create-time validation
       and output sanitization.
How:   Plain SQLAlchemy queries on the session it is handed; every bookmark
       that leaves this module goes through sanitize_bookmark().
Who:   Called by route handlers in app.routes.bookmarks.

Error Handling Strategy:
    Missing field on create  → ValidationError (400)
    Unknown/malformed id     → NotFoundError (404)
    SQLAlchemy failure       → DatabaseError (500), details logged only
"""

import logging
from typing import Any, Dict, List, Mapping, Optional

from pydantic import ValidationError as SchemaValidationError
from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import DatabaseError, NotFoundError, ValidationError
from app.models.bookmark import Bookmark
from app.schemas.bookmark import BookmarkResponse
from app.services.sanitizer import sanitize_bookmark

logger = logging.getLogger(__name__)

# Check order matters: only the first missing field is reported
REQUIRED_FIELDS = ("title", "bookmarkurl", "description", "rating")
TEXT_FIELDS = ("title", "bookmarkurl", "description")

# Largest value a PostgreSQL INTEGER primary key can hold
_MAX_ID = 2**31 - 1


def parse_bookmark_id(raw_id: str) -> Optional[int]:
    """
    Convert a path segment into a bookmark id.

    Returns None for anything that cannot name a row (non-numeric,
    negative, or out of INTEGER range); callers treat that as not-found.
    """
    value = raw_id.strip()
    if not (value.isascii() and value.isdigit()):
        return None
    bookmark_id = int(value)
    if bookmark_id > _MAX_ID:
        return None
    return bookmark_id


def validate_new_bookmark(payload: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Check that every required field is present and non-empty.

    A field is missing when it is absent, null, or an empty string.
    Fields are checked in REQUIRED_FIELDS order and validation stops at the
    first missing one.

    Returns:
        Dict with exactly the required fields. Text fields are stored as
        strings (123 becomes "123"). A numeric-string rating ("3") is
        converted to int; any other rating value is passed through.

    Raises:
        ValidationError: naming the first missing field.
    """
    for field in REQUIRED_FIELDS:
        value = payload.get(field)
        if value is None or value == "":
            raise ValidationError(field=field)

    data = {field: payload[field] for field in REQUIRED_FIELDS}
    for field in TEXT_FIELDS:
        if not isinstance(data[field], str):
            data[field] = str(data[field])
    if isinstance(data["rating"], str):
        try:
            data["rating"] = int(data["rating"])
        except ValueError:
            pass  # left for the store to reject
    return data


def _to_response(bookmark: Bookmark) -> BookmarkResponse:
    return sanitize_bookmark(BookmarkResponse.model_validate(bookmark))


class BookmarkService:
    """
    Business logic layer for bookmark operations.

    Stateless: each call receives the request's AsyncSession.
    """

    async def list_bookmarks(self, db: AsyncSession) -> List[BookmarkResponse]:
        """
        Return every bookmark in insertion order (ascending id), sanitized.

        An empty table yields an empty list.
        """
        try:
            result = await db.execute(select(Bookmark).order_by(Bookmark.id))
            bookmarks = list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error("Database error listing bookmarks: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve bookmarks.",
                context={"error_type": type(e).__name__},
            )

        logger.debug("Listed %d bookmarks", len(bookmarks))
        return [_to_response(bookmark) for bookmark in bookmarks]

    async def get_bookmark(self, db: AsyncSession, raw_id: str) -> BookmarkResponse:
        """
        Return one sanitized bookmark.

        Raises:
            NotFoundError: no row with that id, or the id is malformed (→ 404)
            DatabaseError: query execution failed (→ 500)
        """
        bookmark_id = parse_bookmark_id(raw_id)
        if bookmark_id is None:
            raise NotFoundError(resource_id=raw_id)

        try:
            result = await db.execute(select(Bookmark).where(Bookmark.id == bookmark_id))
            bookmark = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error fetching bookmark %s: %s", bookmark_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the bookmark.",
                context={"bookmark_id": bookmark_id},
            )

        if bookmark is None:
            raise NotFoundError(resource_id=raw_id)

        return _to_response(bookmark)

    async def create_bookmark(
        self, db: AsyncSession, payload: Mapping[str, Any]
    ) -> BookmarkResponse:
        """
        Validate and insert a new bookmark.

        The submitted text is stored as-is; the returned representation is
        sanitized exactly like a later GET of the same id.

        Raises:
            ValidationError: a required field is missing (→ 400)
            DatabaseError: insert failed, or the stored row cannot be
                           returned as a bookmark (→ 500)
        """
        data = validate_new_bookmark(payload)
        bookmark = Bookmark(**data)

        try:
            db.add(bookmark)
            # flush so the database assigns the id
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error creating bookmark: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not create the bookmark.",
                context={"error_type": type(e).__name__},
            )

        try:
            created = _to_response(bookmark)
        except SchemaValidationError as e:
            # e.g. a rating of 4.5 or "four" that the column accepted as-is
            logger.error("Stored bookmark %s is not representable: %s", bookmark.id, str(e))
            raise DatabaseError(
                message="Could not create the bookmark.",
                context={"error_type": type(e).__name__},
            )

        logger.info("Bookmark with id %s created", bookmark.id)
        return created

    async def delete_bookmark(self, db: AsyncSession, raw_id: str) -> None:
        """
        Permanently remove a bookmark.

        Uses a single DELETE ... WHERE id = :id; a zero row count means the
        bookmark did not exist (or a concurrent delete won).

        Raises:
            NotFoundError: no row with that id, or the id is malformed (→ 404)
            DatabaseError: delete failed (→ 500)
        """
        bookmark_id = parse_bookmark_id(raw_id)
        if bookmark_id is None:
            raise NotFoundError(resource_id=raw_id)

        try:
            result = await db.execute(delete(Bookmark).where(Bookmark.id == bookmark_id))
        except SQLAlchemyError as e:
            logger.error("Database error deleting bookmark %s: %s", bookmark_id, str(e))
            raise DatabaseError(
                message="Could not delete the bookmark.",
                context={"bookmark_id": bookmark_id},
            )

        if result.rowcount == 0:
            raise NotFoundError(resource_id=raw_id)

        logger.info("Bookmark with id %s deleted", bookmark_id)


bookmark_service = BookmarkService()
