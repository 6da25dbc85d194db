"""Photo Explorer Backend Application.

This is the main entry point for the Photo Explorer backend service.
Photo Explorer stores uploaded images in a local directory, generates a
thumbnail for each one and serves them back for browsing and download.

Modules:
    - files: upload pipeline, thumbnails, explorer listing, view/download
    - config: YAML-backed settings
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from photo_explorer.config import AppConfig, get_config
from photo_explorer.files.router import router as files_router
from photo_explorer.files.service import (
    FileStorageService,
    get_storage_service,
    set_storage_service,
)

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

# Silence verbose third-party loggers.
# PIL logs every plugin import and chunk it parses at DEBUG;
# multipart logs each parsed part; httpx/httpcore log every connection.
for _noisy in (
    "PIL",
    "multipart",
    "python_multipart",
    "httpx",
    "httpcore",
):
    logging.getLogger(_noisy).setLevel(logging.WARNING)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup/shutdown events."""
    # Startup
    config: AppConfig = app.state.config

    # Apply configured log level to root logger so that
    # `logging.level: "debug"` in photo_explorer.settings.yaml activates DEBUG output.
    configured_level = getattr(logging, config.logging.level.upper(), None)
    if configured_level is not None:
        logging.getLogger().setLevel(configured_level)
        logger.info("Root logger level set to %s", config.logging.level.upper())

    # Tests may install their own service before the app starts.
    service = get_storage_service()
    owned = service is None
    if owned:
        service = FileStorageService(config.storage)
        set_storage_service(service)
    logger.info(
        f"Serving files from {service.paths.root} on "
        f"http://{config.server.host}:{config.server.port}"
    )

    yield  # Application runs here

    # Shutdown
    if owned:
        set_storage_service(None)
        service.close()
    logger.info("Application shutdown complete")


def create_app(config: Optional[AppConfig] = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        config: Settings for this app. Defaults to :func:`get_config`.
            CORS origins and the storage service both come from it.
    """
    config = config or get_config()

    app = FastAPI(
        title="Photo Explorer API",
        description="Upload images, generate thumbnails and browse stored files",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.config = config

    # Defaults to every origin; suitable for local use only.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.server.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register all routers
    app.include_router(files_router)

    @app.get("/health")
    async def health() -> dict:
        """Health check endpoint.

        Returns:
            dict: Status object indicating the server is running.
        """
        return {"status": "ok"}

    return app


app = create_app()


def run() -> None:
    """Start the server with uvicorn using the configured host and port."""
    import uvicorn

    config: AppConfig = app.state.config
    uvicorn.run(app, host=config.server.host, port=config.server.port)


if __name__ == "__main__":
    run()
