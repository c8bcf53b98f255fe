from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, List, Optional
from urllib.parse import quote

from fastapi import APIRouter, Body, Depends, Request, Response

from ..config import settings
from ..dependencies import get_assembler
from ..models import ArchiveRequest, AssemblyResult
from ..services import ArchiveAssembler, request_from_urls

logger = logging.getLogger("app.routers.zip")

router = APIRouter(prefix="/api/zip", tags=["zip"])

SKIPPED_HEADER = "X-Skipped-Files"
DISCONNECT_POLL_SECONDS = 0.5


def content_disposition(file_name: str) -> str:
    if file_name.isascii() and '"' not in file_name:
        return f'attachment; filename="{file_name}"'
    return f"attachment; filename*=utf-8''{quote(file_name)}"


def zip_response(result: AssemblyResult) -> Response:
    return Response(
        content=result.content,
        media_type="application/zip",
        headers={
            "Content-Disposition": content_disposition(result.file_name),
            SKIPPED_HEADER: str(result.skipped),
        },
    )


@asynccontextmanager
async def disconnect_watch(request: Request) -> AsyncIterator[asyncio.Event]:
    """Yields an event that is set once the client goes away."""
    event = asyncio.Event()

    async def _watch() -> None:
        while not event.is_set():
            if await request.is_disconnected():
                logger.info("client disconnected path=%s", request.url.path)
                event.set()
                return
            await asyncio.sleep(DISCONNECT_POLL_SECONDS)

    task = asyncio.create_task(_watch())
    try:
        yield event
    finally:
        task.cancel()


async def _assemble(request: Request, payload: ArchiveRequest, assembler: ArchiveAssembler) -> Response:
    async with disconnect_watch(request) as cancel_event:
        result = await assembler.assemble(payload, cancel_event=cancel_event)
    if result.skipped:
        logger.warning("zip %s: skipped %d file(s): %s", result.file_name, result.skipped, result.skipped_sources)
    return zip_response(result)


@router.post("/download", response_class=Response)
async def download_tree(
    request: Request,
    payload: ArchiveRequest,
    assembler: ArchiveAssembler = Depends(get_assembler),
):
    """Fetch every file in the tree and return them as one ZIP mirroring the folders."""
    return await _assemble(request, payload, assembler)


@router.post("/download-multiple-files", response_class=Response)
async def download_multiple_files(
    request: Request,
    file_urls: Optional[List[str]] = Body(default=None),
    assembler: ArchiveAssembler = Depends(get_assembler),
):
    """Flat form: a list of URLs, each stored under its URL's file name."""
    payload = request_from_urls(file_urls or [], name=settings.default_archive_name)
    return await _assemble(request, payload, assembler)
