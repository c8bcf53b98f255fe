from __future__ import annotations

import logging
import uuid
from contextvars import ContextVar

from fastapi import FastAPI
from starlette.datastructures import Headers, MutableHeaders
from starlette.types import ASGIApp, Message, Receive, Scope, Send


HEADER_NAME = "X-Correlation-ID"

_correlation_id: ContextVar[str] = ContextVar("correlation_id", default="-")


def get_correlation_id() -> str:
    return _correlation_id.get()


class CorrelationIdFilter(logging.Filter):
    """Stamps `record.correlation_id` so formatters can print it."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = _correlation_id.get()
        return True


class CorrelationIdMiddleware:
    """
    Every request/response carries an X-Correlation-ID; a new one is
    generated when the caller sent none. Logs emitted while the request is
    handled (fetch failures, assembly summary) carry the same id.

    Plain ASGI: `receive` reaches the route untouched, so the route can
    still observe a client disconnect.
    """

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        corr = Headers(scope=scope).get(HEADER_NAME) or uuid.uuid4().hex

        async def send_with_id(message: Message) -> None:
            if message["type"] == "http.response.start":
                headers = MutableHeaders(scope=message)
                if HEADER_NAME not in headers:
                    headers.append(HEADER_NAME, corr)
            await send(message)

        token = _correlation_id.set(corr)
        try:
            await self.app(scope, receive, send_with_id)
        finally:
            _correlation_id.reset(token)


def add_correlation_middleware(app: FastAPI) -> None:
    app.add_middleware(CorrelationIdMiddleware)
