"""Main FastAPI application entry point."""

import os
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

import httpx
from fastapi import FastAPI, Request
from fastapi.responses import FileResponse, JSONResponse

from . import __version__
from .api import health, studio
from .core.session import StudioSession
from .providers import GeminiClient
from .utils.config import Config, load_config
from .utils.logger import get_logger
from .utils.session_store import SessionStore
from .utils.errors import (
    ArchiGenError,
    InputValidationError,
    UnsupportedMediaTypeError,
    UploadTooLargeError,
    SessionNotFound,
    ConfigurationError,
)

logger = get_logger(__name__)

STATIC_DIR = Path(__file__).resolve().parent / "static"

ERROR_STATUS = (
    (SessionNotFound, 404),
    (InputValidationError, 400),
    (UnsupportedMediaTypeError, 415),
    (UploadTooLargeError, 413),
    (ConfigurationError, 503),
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup and shutdown.

    Builds the Gemini client and the session store on startup and closes
    the client on shutdown.
    """
    logger.info("Application starting up...")

    config: Optional[Config] = getattr(app.state, "config", None)
    if config is None:
        config = load_config()
        app.state.config = config

    if not config.has_credential:
        logger.warning("GEMINI_API_KEY is not set; generation requests will fail")

    gemini = GeminiClient(
        api_key=config.gemini_api_key,
        base_url=config.gemini_base_url,
        enhancement_model=config.models.enhancement,
        transform_model=config.models.transform,
        timeout=config.timeout_gemini_seconds,
        transport=getattr(app.state, "gemini_transport", None),
    )
    await gemini.initialize()

    app.state.gemini = gemini
    app.state.sessions = SessionStore(
        factory=lambda session_id: StudioSession.build(session_id, gemini, config),
        ttl_seconds=config.session_ttl_seconds,
    )

    logger.info("Application startup complete")

    try:
        yield
    finally:
        logger.info("Application shutting down...")
        await gemini.close()
        logger.info("Application shutdown complete")


async def handle_studio_error(request: Request, exc: ArchiGenError) -> JSONResponse:
    """Map studio errors onto HTTP status codes with a readable detail."""
    status_code = 500
    for error_type, code in ERROR_STATUS:
        if isinstance(exc, error_type):
            status_code = code
            break

    if status_code >= 500:
        logger.error(
            f"Unhandled studio error: {exc}",
            extra={"path": request.url.path, "error_type": type(exc).__name__}
        )

    return JSONResponse(status_code=status_code, content={"detail": exc.message or str(exc)})


def create_app(
    config: Optional[Config] = None,
    gemini_transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastAPI:
    """
    Build the application.

    Args:
        config: Preloaded configuration (loaded at startup when omitted)
        gemini_transport: Optional httpx transport for the Gemini client
    """
    app = FastAPI(
        title="ArchiGen Transform",
        description="Transform architectural photos with a multimodal image model",
        version=__version__,
        lifespan=lifespan,
    )
    if config is not None:
        app.state.config = config
    app.state.gemini_transport = gemini_transport

    app.add_exception_handler(ArchiGenError, handle_studio_error)

    app.include_router(health.router, prefix="/health", tags=["health"])
    app.include_router(studio.router, prefix="/api", tags=["studio"])

    @app.get("/", include_in_schema=False)
    async def index():
        """Single-page studio UI."""
        return FileResponse(STATIC_DIR / "index.html", media_type="text/html")

    return app


app = create_app()


def run():
    """Console entry point."""
    import uvicorn

    port = int(os.getenv("PORT", 8000))

    uvicorn.run(
        "archigen.main:app",
        host=os.getenv("HOST", "127.0.0.1"),
        port=port,
        reload=os.getenv("APP_ENV", "development") == "development",
        log_level="info",
    )


if __name__ == "__main__":
    run()
