from __future__ import annotations

from fastapi.responses import JSONResponse, Response

from llmproxy.core.errors import ProxyError
from llmproxy.models.schemas import ChatResponse, ErrorResponse


ALLOW_ORIGIN = {"Access-Control-Allow-Origin": "*"}

PREFLIGHT_HEADERS: dict[str, str] = {
    **ALLOW_ORIGIN,
    "Access-Control-Allow-Headers": "Content-Type",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
}

SUCCESS_HEADERS: dict[str, str] = {
    **ALLOW_ORIGIN,
    "Access-Control-Allow-Headers": "Content-Type",
}

METHOD_NOT_ALLOWED = "Method not allowed"


def preflight_response() -> Response:
    return Response(status_code=200, headers=PREFLIGHT_HEADERS)


def success_response(content: str) -> JSONResponse:
    return JSONResponse(
        status_code=200,
        content=ChatResponse(content=content).model_dump(),
        headers=SUCCESS_HEADERS,
    )


def error_response(status_code: int, message: str, *, debug: str | None = None) -> JSONResponse:
    body = ErrorResponse(error=message, debug=debug).model_dump(exclude_none=True)
    return JSONResponse(status_code=status_code, content=body, headers=ALLOW_ORIGIN)


def proxy_error_response(exc: ProxyError, *, include_debug: bool = False) -> JSONResponse:
    return error_response(
        exc.status_code,
        exc.message,
        debug=exc.debug if include_debug else None,
    )
