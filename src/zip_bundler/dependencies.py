# src/zip_bundler/dependencies.py
from __future__ import annotations

from fastapi import Depends, Request

from .clients.fetcher import Fetcher
from .config import settings
from .services.assembler import ArchiveAssembler


def get_fetcher(request: Request) -> Fetcher:
    """Shared fetcher created in the app lifespan."""
    return request.app.state.fetcher


def get_assembler(fetcher: Fetcher = Depends(get_fetcher)) -> ArchiveAssembler:
    return ArchiveAssembler(
        fetcher,
        max_concurrency=settings.fetch_max_concurrency,
        compression_level=settings.zip_compression_level,
    )
