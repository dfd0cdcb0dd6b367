"""
Bookmarks Service: Bookmark SQLAlchemy Model
===============================================

What:  ORM model representing the `bookmarks` table.
Who:   Used by BookmarkService for CRUD operations.
When:  Instantiated when creating bookmarks; queried when listing/fetching.

Table layout:
    id           generated integer primary key (addressing key for /bookmarks/{id})
    title        TEXT NOT NULL
    bookmarkurl  TEXT NOT NULL
    description  TEXT NOT NULL
    rating       INTEGER NOT NULL

Stored text is kept exactly as submitted; markup is neutralized on output
by app.services.sanitizer.
"""

from sqlalchemy import Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class Bookmark(Base):
    """
    A saved link with a title, description and rating.

    Lifecycle:
        1. Created by POST /bookmarks (id assigned by the database)
        2. Read by GET /bookmarks and GET /bookmarks/{id}
        3. Removed permanently by DELETE /bookmarks/{id}
    """

    __tablename__ = "bookmarks"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    title: Mapped[str] = mapped_column(Text, nullable=False)

    # Presence is the only check; the value is not parsed as a URL
    bookmarkurl: Mapped[str] = mapped_column(Text, nullable=False)

    description: Mapped[str] = mapped_column(Text, nullable=False)

    rating: Mapped[int] = mapped_column(Integer, nullable=False)

    def __repr__(self) -> str:
        return f"<Bookmark(id={self.id}, title='{self.title}')>"
