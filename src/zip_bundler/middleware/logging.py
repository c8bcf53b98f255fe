from __future__ import annotations
import time
import logging
from fastapi import FastAPI
from starlette.datastructures import Headers
from starlette.types import ASGIApp, Message, Receive, Scope, Send

logger = logging.getLogger("app.middleware")


class RequestLoggingMiddleware:
    """Logs method, path, status, duration and skipped-file count per request."""

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        start = time.perf_counter()
        method = scope["method"]
        path = scope["path"]
        status = {"code": 0, "skipped": "-"}

        async def send_capturing(message: Message) -> None:
            if message["type"] == "http.response.start":
                status["code"] = message["status"]
                status["skipped"] = Headers(raw=message.get("headers", [])).get("X-Skipped-Files", "-")
            await send(message)

        try:
            await self.app(scope, receive, send_capturing)
        except Exception as ex:
            duration = (time.perf_counter() - start) * 1000.0
            logger.exception("Unhandled error during %s %s (%.2f ms): %s", method, path, duration, ex)
            raise
        duration = (time.perf_counter() - start) * 1000.0
        logger.info(
            "%s %s -> %s (%.2f ms) skipped=%s",
            method, path, status["code"], duration, status["skipped"],
        )


def install_request_logging(app: FastAPI) -> None:
    app.add_middleware(RequestLoggingMiddleware)
