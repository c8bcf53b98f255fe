from __future__ import annotations

import asyncio

import httpx

from zip_bundler.clients import HttpFetcher
from zip_bundler.models import FetchFailed, FetchFailureReason, FetchOk


def _fetch(handler, source: str = "http://files.test/a.txt", *, retries: int = 0):
    async def run():
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        async with HttpFetcher(client, retries=retries, backoff_ms=0) as fetcher:
            result = await fetcher.fetch(source)
        await client.aclose()
        return result

    return asyncio.run(run())


def test_success_returns_bytes() -> None:
    result = _fetch(lambda request: httpx.Response(200, content=b"hi"))
    assert result == FetchOk(b"hi")
    assert result.ok


def test_not_found_statuses() -> None:
    for status in (404, 410):
        result = _fetch(lambda request, s=status: httpx.Response(s))
        assert isinstance(result, FetchFailed)
        assert result.reason is FetchFailureReason.not_found


def test_other_http_errors() -> None:
    result = _fetch(lambda request: httpx.Response(503))
    assert isinstance(result, FetchFailed)
    assert result.reason is FetchFailureReason.other
    assert "503" in result.detail


def test_connect_error_is_network_error_and_retried() -> None:
    calls = []

    def handler(request):
        calls.append(request.url)
        raise httpx.ConnectError("connection refused", request=request)

    result = _fetch(handler, retries=2)
    assert isinstance(result, FetchFailed)
    assert result.reason is FetchFailureReason.network_error
    assert len(calls) == 3


def test_timeout_is_reported_as_timeout() -> None:
    def handler(request):
        raise httpx.ReadTimeout("slow", request=request)

    result = _fetch(handler)
    assert isinstance(result, FetchFailed)
    assert result.reason is FetchFailureReason.timeout


def test_retry_recovers_after_transient_failure() -> None:
    attempts = []

    def handler(request):
        attempts.append(1)
        if len(attempts) == 1:
            raise httpx.ConnectError("reset", request=request)
        return httpx.Response(200, content=b"ok")

    assert _fetch(handler, retries=1) == FetchOk(b"ok")


def test_not_found_is_not_retried() -> None:
    calls = []

    def handler(request):
        calls.append(1)
        return httpx.Response(404)

    _fetch(handler, retries=3)
    assert len(calls) == 1


def test_unexpected_exception_never_escapes() -> None:
    def handler(request):
        raise ValueError("bad handler")

    result = _fetch(handler)
    assert isinstance(result, FetchFailed)
    assert result.reason is FetchFailureReason.other



def test_zero_retries_means_a_single_attempt() -> None:
    calls = []

    def handler(request):
        calls.append(1)
        raise httpx.ConnectError("refused", request=request)

    _fetch(handler, retries=0)
    assert len(calls) == 1


def test_default_retry_count_comes_from_settings() -> None:
    from zip_bundler.config import settings

    calls = []

    def handler(request):
        calls.append(1)
        raise httpx.ConnectError("refused", request=request)

    async def run():
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        fetcher = HttpFetcher(client, retries=settings.fetch_retry_max_retries, backoff_ms=0)
        await fetcher.fetch("http://files.test/a")
        await client.aclose()

    asyncio.run(run())
    assert len(calls) == settings.fetch_retry_max_retries + 1
