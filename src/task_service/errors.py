"""Error types and the handlers that turn them into JSON responses."""

import logging
from typing import Any

from fastapi import FastAPI, Request
from opentelemetry import trace
from opentelemetry.trace import StatusCode
from starlette.exceptions import HTTPException as StarletteHTTPException

from task_service.models.responses import ErrorResponse, ValidationErrorResponse
from task_service.responses import ApiJSONResponse, error_response


logger = logging.getLogger(__name__)

ROUTE_NOT_FOUND = "route not found"


class TaskServiceError(Exception):
    status_code = 500
    message = "internal error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)

    def body(self) -> dict[str, Any]:
        return ErrorResponse(error=str(self)).model_dump(exclude_none=True)


class AuthError(TaskServiceError):
    status_code = 401
    message = "unauthorized"


class TaskValidationError(TaskServiceError):
    status_code = 400
    message = "invalid task"

    def __init__(self, errors: list[str]) -> None:
        super().__init__("; ".join(errors))
        self.errors = list(errors)

    def body(self) -> dict[str, Any]:
        return ValidationErrorResponse(errors=self.errors).model_dump()


class MalformedBodyError(TaskServiceError):
    status_code = 400
    message = "malformed request body"

    def __init__(self, detail: str) -> None:
        super().__init__(self.message)
        self.detail = detail

    def body(self) -> dict[str, Any]:
        return ErrorResponse(error=self.message, detail=self.detail).model_dump()


class NotFoundError(TaskServiceError):
    status_code = 404
    message = ROUTE_NOT_FOUND


def record_error_on_span(exc: Exception) -> None:
    span = trace.get_current_span()
    if span.is_recording():
        span.record_exception(exc)
        span.set_attribute("error.type", type(exc).__name__)
        span.set_status(StatusCode.ERROR, str(exc))


async def task_service_error_handler(request: Request, exc: TaskServiceError) -> ApiJSONResponse:
    record_error_on_span(exc)
    logger.warning(
        "%s on %s %s: %s", type(exc).__name__, request.method, request.url.path, exc
    )
    return ApiJSONResponse(exc.body(), status_code=exc.status_code)


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> ApiJSONResponse:
    # Unknown paths and known paths with the wrong method are both "not found".
    if exc.status_code in (404, 405):
        not_found = NotFoundError()
        return ApiJSONResponse(not_found.body(), status_code=not_found.status_code)
    return error_response(str(exc.detail), exc.status_code)


async def unhandled_exception_handler(request: Request, exc: Exception) -> ApiJSONResponse:
    record_error_on_span(exc)
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return error_response(str(exc), 500)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(TaskServiceError, task_service_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, unhandled_exception_handler)
