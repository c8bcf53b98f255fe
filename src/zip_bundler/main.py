# src/zip_bundler/main.py
from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from . import __version__
from .clients.fetcher import HttpFetcher
from .config import settings
from .logging_conf import setup_logging
from .middleware import add_cors, add_correlation_middleware, install_request_logging, add_error_handlers
from .routers import health_router, zip_router

logger = logging.getLogger("app")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Logging first
    setup_logging()
    logger.info("Starting %s on %s:%s", settings.app_name, settings.host, settings.port)

    # One pooled HTTP client for every remote fetch
    app.state.fetcher = HttpFetcher()
    logger.info(
        "Fetcher ready (timeout=%ss, concurrency=%s, retries=%s)",
        settings.fetch_timeout_seconds,
        settings.fetch_max_concurrency,
        settings.fetch_retry_max_retries,
    )

    try:
        yield
    finally:
        await app.state.fetcher.aclose()
        logger.info("Shutdown complete")


app = FastAPI(title=settings.app_name, version=__version__, lifespan=lifespan)

# Middlewares
add_cors(app)
install_request_logging(app)
# added last so it wraps request logging too
add_correlation_middleware(app)
add_error_handlers(app)

# Routers
app.include_router(health_router)
app.include_router(zip_router)


@app.get("/")
async def root():
    return {
        "service": settings.service_name,
        "name": settings.app_name,
        "status": "ok",
        "docs": "/docs",
        "openapi": "/openapi.json",
    }


if __name__ == "__main__":
    from .__main__ import main

    main()
