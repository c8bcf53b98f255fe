"""Shared fixtures: an in-memory fetcher and an app client wired to it."""

from __future__ import annotations

import asyncio
import io
import zipfile
from typing import Dict, List, Optional, Union

import pytest

from zip_bundler.models import FetchFailed, FetchFailureReason, FetchOk, FetchResult

FIXED_TIME = (2024, 1, 2, 3, 4, 6)


class FakeFetcher:
    """Serves canned content by source; unknown sources are not_found."""

    def __init__(
        self,
        content: Optional[Dict[str, Union[bytes, FetchResult]]] = None,
        *,
        delays: Optional[Dict[str, float]] = None,
    ):
        self.content = dict(content or {})
        self.delays = dict(delays or {})
        self.calls: List[str] = []
        self.active = 0
        self.max_active = 0

    async def fetch(self, source: str) -> FetchResult:
        self.calls.append(source)
        self.active += 1
        self.max_active = max(self.max_active, self.active)
        try:
            await asyncio.sleep(self.delays.get(source, 0))
        finally:
            self.active -= 1
        value = self.content.get(source)
        if value is None:
            return FetchFailed(FetchFailureReason.not_found, "HTTP 404")
        if isinstance(value, bytes):
            return FetchOk(value)
        return value


def zip_listing(data: bytes) -> List[str]:
    with zipfile.ZipFile(io.BytesIO(data)) as zf:
        return zf.namelist()


def zip_read(data: bytes, name: str) -> bytes:
    with zipfile.ZipFile(io.BytesIO(data)) as zf:
        return zf.read(name)


def file_node(name: str, source: Optional[str] = None) -> dict:
    return {"kind": "file", "name": name, "source": source if source is not None else f"http://x/{name}"}


def folder_node(name: str, *children: dict) -> dict:
    return {"kind": "folder", "name": name, "children": list(children)}


@pytest.fixture
def fake_fetcher() -> FakeFetcher:
    return FakeFetcher()
