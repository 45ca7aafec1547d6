from contextlib import asynccontextmanager
from pathlib import Path
import logging

import httpx
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import settings, setup_logging
from app.dependencies import create_playlist_cache

from app.routers import main_router


setup_logging()
logger = logging.getLogger(__name__)

MISSING_PARAMETER_MESSAGES = {
    "/catalog": 'Missing "url" parameter',
    "/stream": "Missing parameters",
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown events"""
    logger.info("Starting M3U Catalog Service...")
    settings.log_configuration()

    http_client = httpx.AsyncClient(
        timeout=settings.playlist_fetch_timeout_sec,
        follow_redirects=True,
    )
    app.state.playlist_cache = create_playlist_cache(http_client)
    logger.info("M3U Catalog Service started successfully")

    yield

    logger.info("Shutting down M3U Catalog Service...")

    try:
        await http_client.aclose()
        logger.info("HTTP client closed")
    except Exception as e:
        logger.error(f"Error during HTTP client shutdown: {e}", exc_info=True)

    logger.info("M3U Catalog Service stopped")


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Report missing or empty query parameters as 400 with a plain message"""
    logger.warning(f"Validation error for {request.method} {request.url.path}")
    logger.warning(f"Validation details: {exc.errors()}")

    message = MISSING_PARAMETER_MESSAGES.get(request.url.path, "Invalid request parameters")
    return PlainTextResponse(message, status_code=400)


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Render HTTP errors as plain text bodies"""
    return PlainTextResponse(str(exc.detail), status_code=exc.status_code, headers=exc.headers)


def mount_frontend(app: FastAPI, frontend_dir: str | Path) -> bool:
    """
    Serve a static frontend directory at /.

    Must be called after the API routers are included so routes take precedence.

    Returns:
        True if mounted, False if the directory does not exist
    """
    frontend_path = Path(frontend_dir)
    if not frontend_path.is_dir():
        logger.warning(f"Frontend directory not found, skipping: {frontend_path}")
        return False

    app.mount("/", StaticFiles(directory=frontend_path, html=True), name="frontend")
    logger.info(f"Serving frontend from {frontend_path}")
    return True


def create_app(frontend_dir: str | Path | None = None) -> FastAPI:
    """Build the FastAPI application"""
    app = FastAPI(
        title="M3U Catalog Service",
        version="1.0.0",
        lifespan=lifespan
    )

    app.include_router(main_router)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)

    if frontend_dir:
        mount_frontend(app, frontend_dir)

    return app


app = create_app(settings.frontend_dir)
