"""ASGI middlewares wired around the resource router by create_app()."""

from __future__ import annotations

import logging
import time

from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from api.domain.rewrite import RewriteRule, rewrite_path

logger = logging.getLogger(__name__)

SAFE_METHODS = {"GET", "HEAD", "OPTIONS"}


class RewriteMiddleware:
    """Rewrite scope["path"] with the rule table before routing."""

    def __init__(self, app, *, rules: list[RewriteRule]) -> None:
        self.app = app
        self.rules = rules

    async def __call__(self, scope, receive, send):
        if scope["type"] == "http" and self.rules:
            original = scope["path"]
            path = rewrite_path(self.rules, original)
            if path != original:
                logger.debug("Rewrote %s -> %s", original, path)
                scope = dict(scope)
                scope["path"] = path
                scope["raw_path"] = path.encode("utf-8")
        await self.app(scope, receive, send)


class NoCacheMiddleware(BaseHTTPMiddleware):
    """Mark every response as not cacheable so clients always see the store."""

    async def dispatch(self, request, call_next):
        response = await call_next(request)
        response.headers.setdefault("Cache-Control", "no-cache")
        response.headers.setdefault("Pragma", "no-cache")
        response.headers.setdefault("Expires", "-1")
        return response


class ReadOnlyMiddleware(BaseHTTPMiddleware):
    """Refuse every mutating request."""

    async def dispatch(self, request, call_next):
        if request.method.upper() not in SAFE_METHODS:
            return JSONResponse(
                {"error": "read_only", "message": "Server is running in read-only mode."},
                status_code=403,
            )
        return await call_next(request)


class RequestLogMiddleware(BaseHTTPMiddleware):
    """One log line per request: method, url as received, status, elapsed ms."""

    async def dispatch(self, request, call_next):
        started = time.perf_counter()
        url = request.url.path
        if request.url.query:
            url = f"{url}?{request.url.query}"
        response = await call_next(request)
        elapsed = (time.perf_counter() - started) * 1000
        logger.info("%s %s %d %.3f ms", request.method, url, response.status_code, elapsed)
        return response
