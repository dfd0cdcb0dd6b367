"""
Bookmarks Service: Bearer Token Auth Middleware
==================================================

What:  Rejects requests that do not carry the configured API token.
How:   Reads `Authorization: Bearer <token>` and compares <token> against the
       token the middleware was constructed with. Mismatch → 401 with body
       {"error": "Unauthorized request"} and the route is never called.
Who:   Applied to every request via Starlette middleware.
When:  Innermost middleware, right before routing; runs for every path
       (including unknown ones) except the operational endpoints below.
"""

import logging
import secrets
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.types import ASGIApp

logger = logging.getLogger(__name__)

UNAUTHORIZED_BODY = {"error": "Unauthorized request"}


def authenticate(header: Optional[str], expected_token: str) -> bool:
    """
    Decide whether an Authorization header value grants access.

    Args:
        header: Raw header value, or None when the header is absent.
        expected_token: The configured shared secret.

    Returns:
        True only for `Bearer <token>` where <token> equals expected_token.
        An empty expected_token never matches.
    """
    if not header or not expected_token:
        return False
    scheme, _, token = header.partition(" ")
    if scheme != "Bearer" or not token:
        return False
    return secrets.compare_digest(token.encode("utf-8"), expected_token.encode("utf-8"))


class BearerAuthMiddleware(BaseHTTPMiddleware):
    """
    Auth gate in front of every bookmark route.

    Excluded paths:
        - /health: probes carry no credentials
        - /docs, /redoc, /openapi.json: API documentation
    """

    EXCLUDED_PATHS = {"/health", "/docs", "/openapi.json", "/redoc"}

    def __init__(self, app: ASGIApp, api_token: str):
        super().__init__(app)
        self._api_token = api_token

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in self.EXCLUDED_PATHS:
            return await call_next(request)

        if not authenticate(request.headers.get("Authorization"), self._api_token):
            logger.warning("Unauthorized request to path: %s", request.url.path)
            return JSONResponse(status_code=401, content=UNAUTHORIZED_BODY)

        return await call_next(request)
