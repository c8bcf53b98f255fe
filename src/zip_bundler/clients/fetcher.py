# src/zip_bundler/clients/fetcher.py
from __future__ import annotations

import asyncio
import logging
from typing import Optional, Protocol

import httpx

from ..config import settings
from ..models import FetchFailed, FetchFailureReason, FetchOk, FetchResult

logger = logging.getLogger("app.clients.fetcher")

_RETRYABLE = (FetchFailureReason.network_error, FetchFailureReason.timeout)
_NOT_FOUND_STATUSES = (404, 410)


class Fetcher(Protocol):
    async def fetch(self, source: str) -> FetchResult: ...


class HttpFetcher:
    """
    Downloads a single resource with GET and reports the outcome as a value.

    Every failure mode becomes a FetchFailed; only task cancellation escapes.
    Safe to share across concurrent calls: the underlying httpx client is
    the only shared object.
    """

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        *,
        timeout: float = settings.fetch_timeout_seconds,
        retries: int = settings.fetch_retry_max_retries,
        backoff_ms: int = settings.fetch_retry_backoff_ms,
        follow_redirects: bool = settings.fetch_follow_redirects,
        user_agent: str = settings.fetch_user_agent,
    ):
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=timeout,
            follow_redirects=follow_redirects,
            headers={"User-Agent": user_agent},
        )
        self.retries = max(0, retries)
        self.backoff_ms = max(0, backoff_ms)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "HttpFetcher":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def fetch(self, source: str) -> FetchResult:
        result: FetchResult = FetchFailed(FetchFailureReason.other, "not attempted")
        for attempt in range(self.retries + 1):
            result = await self._fetch_once(source)
            if isinstance(result, FetchOk) or result.reason not in _RETRYABLE:
                return result
            if attempt < self.retries:
                logger.info(
                    "fetch.retry source=%s reason=%s attempt=%d/%d",
                    source, result.reason.value, attempt + 1, self.retries,
                )
                await asyncio.sleep((self.backoff_ms / 1000.0) * (attempt + 1))
        return result

    async def _fetch_once(self, source: str) -> FetchResult:
        try:
            resp = await self._client.get(source)
        except asyncio.CancelledError:
            raise
        except httpx.TimeoutException as e:
            return FetchFailed(FetchFailureReason.timeout, str(e) or type(e).__name__)
        except (httpx.TransportError, httpx.InvalidURL) as e:
            # UnsupportedProtocol is a TransportError too
            return FetchFailed(FetchFailureReason.network_error, str(e) or type(e).__name__)
        except Exception as e:
            logger.exception("fetch.unexpected source=%s", source)
            return FetchFailed(FetchFailureReason.other, str(e) or type(e).__name__)

        if resp.status_code in _NOT_FOUND_STATUSES:
            return FetchFailed(FetchFailureReason.not_found, f"HTTP {resp.status_code}")
        if resp.status_code >= 400:
            return FetchFailed(FetchFailureReason.other, f"HTTP {resp.status_code}")
        return FetchOk(resp.content)
