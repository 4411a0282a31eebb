import json
from typing import Any

from fastapi.responses import JSONResponse

from task_service.models.responses import ErrorResponse


CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "Content-Type, X-API-KEY",
}


class ApiJSONResponse(JSONResponse):
    """JSON response pretty-printed with two-space indentation and permissive CORS headers."""

    def __init__(
        self,
        content: Any,
        status_code: int = 200,
        headers: dict[str, str] | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(
            content, status_code=status_code, headers={**CORS_HEADERS, **(headers or {})}, **kwargs
        )

    def render(self, content: Any) -> bytes:
        return json.dumps(content, ensure_ascii=False, indent=2).encode("utf-8")


def error_response(message: str, status_code: int) -> ApiJSONResponse:
    return ApiJSONResponse(
        ErrorResponse(error=message).model_dump(exclude_none=True), status_code=status_code
    )
