import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from starlette.datastructures import Headers
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.api.deps import get_rules, get_settings
from src.app_shell.config import ConfigurationError, configure_logging, validate_storage_dirs
from src.rules.models import Rules

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    settings = get_settings()
    configure_logging(settings.log_level)

    # Validate storage on startup (fail-fast)
    try:
        validate_storage_dirs(settings.data_dir, settings.images_dir)
    except ConfigurationError as e:
        logger.critical("Startup aborted: %s", e)
        raise SystemExit(1) from e

    logger.info("Serving catalog from %s", settings.data_dir.absolute())
    yield


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Every HTTP error is reported as {"error": <reason>}."""
    detail = "Method not allowed" if exc.status_code == 405 else exc.detail
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": detail},
        headers=getattr(exc, "headers", None),
    )


class NoContentCORSMiddleware(CORSMiddleware):
    """CORS middleware whose accepted preflights are answered with 204 and no body."""

    def preflight_response(self, request_headers: Headers) -> Response:
        response = super().preflight_response(request_headers)
        if response.status_code != 200:
            return response

        headers = {
            key: value
            for key, value in response.headers.items()
            if key not in ("content-length", "content-type")
        }
        return Response(status_code=204, headers=headers)


def create_app(rules: Rules | None = None) -> FastAPI:
    if rules is None:
        rules = get_rules()

    app = FastAPI(
        title="Tetromino Catalog API",
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.add_exception_handler(StarletteHTTPException, http_error_handler)  # type: ignore[arg-type]

    # --- Routers ---
    from src.api.routes import blocks

    app.include_router(blocks.router, tags=["Blocks"])

    # CORS (Allow browser client)
    app.add_middleware(
        NoContentCORSMiddleware,
        allow_origins=rules.cors.allow_origins,
        allow_methods=rules.cors.allow_methods,
        allow_headers=rules.cors.allow_headers,
    )

    @app.get("/health")
    def health_check() -> dict[str, Any]:
        """Health check endpoint."""
        return {"status": "ok", "service": "api"}

    return app


app = create_app()
