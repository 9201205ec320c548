"""Random File Server FastAPI application factory."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI

from rfs import __version__
from rfs.config import settings
from rfs.services import init_services, shutdown_services

logger = logging.getLogger(__name__)


@asynccontextmanager
async def _lifespan(app: FastAPI):
    """Startup / shutdown lifecycle."""
    # === STARTUP ===
    _setup_logging()
    init_services(settings)

    logger.info(
        "Random File Server v%s started - port: %s, cache TTL: %ss, non-repeat: %s, listing: %s",
        __version__,
        settings.port,
        settings.cache_ttl_secs,
        settings.non_repeat,
        settings.listing_path or "disabled",
    )

    try:
        yield
    finally:
        # === SHUTDOWN ===
        shutdown_services()
        logger.info("Random File Server shutting down")


def _setup_logging() -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def create_app() -> FastAPI:
    """Application factory."""
    from rfs.api.routes import api_router
    from rfs.api.routes.files import router as files_router

    app = FastAPI(
        title=settings.app_name,
        version=__version__,
        debug=settings.debug,
        lifespan=_lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    # Service endpoints first, the catch-all file route takes everything else
    app.include_router(api_router, prefix=settings.api_prefix)
    app.include_router(files_router)

    return app


app = create_app()


def run(**kwargs: Any) -> None:
    import uvicorn

    # uvicorn exits the process if the port cannot be bound
    uvicorn.run(
        "rfs.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
        **kwargs,
    )


if __name__ == "__main__":
    run()
