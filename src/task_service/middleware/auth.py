"""Shared-secret authentication for the /api routes."""

import logging
import secrets
from collections.abc import Awaitable, Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from task_service.errors import AuthError, record_error_on_span
from task_service.metrics import record_auth_failure
from task_service.responses import ApiJSONResponse


logger = logging.getLogger(__name__)

API_KEY_HEADER = "x-api-key"


class ApiKeyMiddleware(BaseHTTPMiddleware):
    """Reject requests under ``prefix`` unless X-API-KEY matches the configured key.

    Runs before routing, so unknown paths under the prefix are rejected with
    401 rather than 404 when the key is wrong.
    """

    def __init__(self, app: ASGIApp, api_key: str, prefix: str = "/api") -> None:
        super().__init__(app)
        self._api_key = api_key.encode("utf-8")
        self._prefix = prefix.rstrip("/")

    def protects(self, path: str) -> bool:
        return path == self._prefix or path.startswith(self._prefix + "/")

    def is_authorized(self, request: Request) -> bool:
        supplied = request.headers.get(API_KEY_HEADER)
        if supplied is None:
            return False
        return secrets.compare_digest(supplied.encode("utf-8"), self._api_key)

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        if self.protects(request.url.path) and not self.is_authorized(request):
            exc = AuthError()
            record_error_on_span(exc)
            record_auth_failure(request.method)
            logger.warning(
                "Rejected %s %s: missing or wrong API key", request.method, request.url.path
            )
            return ApiJSONResponse(exc.body(), status_code=exc.status_code)
        return await call_next(request)
