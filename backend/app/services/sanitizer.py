"""
Bookmarks Service: Output Sanitization
=========================================

What:  Neutralizes HTML/script markup in bookmark text fields before they
       leave the service.
How:   A bleach Cleaner with a small formatting allow-list. Tags outside the
       list are HTML-escaped (kept visible as text, never executable);
       attributes outside the per-tag list (onerror, onclick, style...) are
       dropped from the tags that are allowed.
When:  On every response that carries bookmark content: list, get, create.

Example:
    'Naughty <script>alert("xss");</script>'
        → 'Naughty &lt;script&gt;alert("xss");&lt;/script&gt;'
    'Bad image <img src="https://x.test/a.png" onerror="alert(1);">'
        → 'Bad image <img src="https://x.test/a.png">'

Only `title` and `description` are cleaned. `bookmarkurl` is returned as
stored and must be treated as untrusted by any client that renders it.
"""

from bleach.sanitizer import ALLOWED_ATTRIBUTES, ALLOWED_TAGS, Cleaner

from app.schemas.bookmark import BookmarkResponse

SANITIZED_FIELDS = ("title", "description")

_ALLOWED_TAGS = set(ALLOWED_TAGS) | {"img", "p", "br", "span"}

_ALLOWED_ATTRIBUTES = {
    **ALLOWED_ATTRIBUTES,
    "img": ["src", "alt", "title"],
}

_CLEANER = Cleaner(
    tags=_ALLOWED_TAGS,
    attributes=_ALLOWED_ATTRIBUTES,
    protocols={"http", "https", "mailto"},
    strip=False,
    strip_comments=True,
)


def sanitize_text(value: str) -> str:
    """Return `value` with executable markup escaped or removed."""
    return _CLEANER.clean(value)


def sanitize_bookmark(bookmark: BookmarkResponse) -> BookmarkResponse:
    """
    Return a copy of `bookmark` with its text fields sanitized.

    Pure: the input model is not modified, and the same input always
    produces the same output.
    """
    return bookmark.model_copy(
        update={field: sanitize_text(getattr(bookmark, field)) for field in SANITIZED_FIELDS}
    )
