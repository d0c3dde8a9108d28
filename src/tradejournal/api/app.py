"""FastAPI application serving the trade journal."""

from __future__ import annotations

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException

from tradejournal import __version__
from tradejournal.api.routes import router
from tradejournal.config.settings import Settings, get_settings
from tradejournal.core.errors import TradeJournalError
from tradejournal.storage.store import TradeStore


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


async def handle_journal_error(request: Request, exc: TradeJournalError) -> JSONResponse:
    """Render domain errors as ``{"error": ...}`` with their status code."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc}")
    else:
        logger.warning(f"{request.method} {request.url.path} rejected: {exc}")
    return _error(exc.status_code, exc.public_message)


async def handle_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Malformed or wrongly shaped request bodies are client errors."""
    logger.warning(f"{request.method} {request.url.path} invalid body: {exc.errors()}")
    return _error(400, "Request body must be valid JSON of the expected shape")


async def handle_http_error(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    return _error(exc.status_code, str(exc.detail))


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"{request.method} {request.url.path} crashed: {exc}")
    return _error(500, "Internal server error")


def create_app(
    store: TradeStore | None = None,
    settings: Settings | None = None,
) -> FastAPI:
    """Build the API application.

    Args:
        store: Trade store to serve. Created from settings if not provided,
            which also creates an empty document on first start.
        settings: Optional settings instance. Uses default if not provided.

    Returns:
        Configured FastAPI app
    """
    if settings is None:
        settings = get_settings()
    if store is None:
        store = TradeStore(settings.trades_path)

    app = FastAPI(
        title="Trade Journal API",
        description="Stores journal trades and computes summary metrics.",
        version=__version__,
    )
    app.state.store = store
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(TradeJournalError, handle_journal_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_error)
    app.add_exception_handler(Exception, handle_unexpected_error)

    app.include_router(router)

    index_path = settings.index_path

    # Registered last so every API route matches first
    @app.get("/{full_path:path}", include_in_schema=False)
    def serve_frontend(full_path: str) -> Response:
        if full_path.startswith("api/") or full_path == "api":
            return _error(404, "Not found")
        if index_path is None or not index_path.is_file():
            return _error(404, "Front-end not configured")
        return FileResponse(index_path)

    logger.debug(f"API ready, serving trades from {store.path}")
    return app
