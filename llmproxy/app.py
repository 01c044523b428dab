from __future__ import annotations

from fastapi import FastAPI, Request
from starlette.exceptions import HTTPException as StarletteHTTPException

from llmproxy.config import Settings, load_settings
from llmproxy.core.cors import METHOD_NOT_ALLOWED, error_response, proxy_error_response
from llmproxy.core.errors import MethodNotAllowedError
from llmproxy.core.upstream import UpstreamClient
from llmproxy.services import proxy, status
from llmproxy.utils.logger import configure_logging, get_logger


def create_app(
    settings: Settings | None = None,
    upstream: UpstreamClient | None = None,
) -> FastAPI:
    configure_logging()
    logger = get_logger("llmproxy")

    settings = settings or load_settings()

    app = FastAPI(title="llmproxy")

    app.state.settings = settings
    app.state.upstream = upstream or UpstreamClient(timeout=settings.upstream_timeout)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 405:
            return proxy_error_response(MethodNotAllowedError(METHOD_NOT_ALLOWED))
        return error_response(exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception(f"[unhandled_exception] {request.method} {request.url.path}: {exc}")
        return error_response(500, "Internal server error")

    app.include_router(status.router)
    app.include_router(proxy.router)

    return app


app = create_app()


def main() -> None:
    import os

    import uvicorn

    port = int(os.getenv("PORT", "5001"))
    uvicorn.run(app, host="0.0.0.0", port=port, log_config=None)
