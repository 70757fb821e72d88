"""Browser session middleware."""

import logging
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from recipe_creator.core.session_store import SessionStore

logger = logging.getLogger(__name__)


class BrowserSessionMiddleware(BaseHTTPMiddleware):
    """Attaches the caller's SessionState to request.state, keyed by a cookie."""

    def __init__(self, app: ASGIApp, store: SessionStore, cookie_name: str = "recipe_session"):
        super().__init__(app)
        self.store = store
        self.cookie_name = cookie_name

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if request.url.path.startswith("/health"):
            return await call_next(request)

        cookie_value = request.cookies.get(self.cookie_name)
        session_id, state, created = self.store.get_or_create(cookie_value)

        request.state.session_id = session_id
        request.state.session = state

        if created:
            logger.info("Started new session", extra={"session_id": session_id[:8]})

        response = await call_next(request)

        if created:
            response.set_cookie(
                self.cookie_name,
                session_id,
                httponly=True,
                samesite="lax",
            )
        return response
