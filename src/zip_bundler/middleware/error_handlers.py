from __future__ import annotations
import logging
from fastapi import FastAPI, HTTPException
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from ..errors import ArchiveWriteError, AssemblyCancelled, BundleError, TreeValidationError
from .correlation import get_correlation_id

logger = logging.getLogger("app.errors")

# nginx convention for "client closed request"
STATUS_CLIENT_CLOSED = 499


def _bundle_error_body(exc: BundleError) -> dict:
    return {"detail": exc.to_detail(), "correlation_id": get_correlation_id()}


def add_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(HTTPException)
    async def http_exception_handler(_, exc: HTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.detail, "status_code": exc.status_code},
        )

    @app.exception_handler(TreeValidationError)
    async def tree_validation_handler(_, exc: TreeValidationError):
        logger.info("Rejected request: %s (%s) at %r", exc.code, exc, exc.path)
        return JSONResponse(status_code=400, content=_bundle_error_body(exc))

    @app.exception_handler(ArchiveWriteError)
    async def archive_write_handler(_, exc: ArchiveWriteError):
        logger.error("Archive write failed: %s", exc)
        return JSONResponse(status_code=500, content=_bundle_error_body(exc))

    @app.exception_handler(AssemblyCancelled)
    async def cancelled_handler(_, exc: AssemblyCancelled):
        logger.info("Assembly cancelled: %s", exc)
        return JSONResponse(status_code=STATUS_CLIENT_CLOSED, content=_bundle_error_body(exc))

    @app.exception_handler(ValidationError)
    async def validation_exception_handler(_, exc: ValidationError):
        logger.debug("Validation error: %s", exc)
        return JSONResponse(status_code=422, content={"detail": exc.errors()})

    @app.exception_handler(Exception)
    async def generic_exception_handler(_, exc: Exception):
        logger.exception("Unhandled exception: %s", exc)
        return JSONResponse(status_code=500, content={"detail": "Internal Server Error"})
