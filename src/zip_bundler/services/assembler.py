from __future__ import annotations

import asyncio
import logging
from typing import List, Optional

from ..clients.fetcher import Fetcher
from ..config import settings
from ..errors import AssemblyCancelled, TreeValidationError
from ..models import (
    ArchiveRequest,
    AssemblyResult,
    AssemblyState,
    FetchFailed,
    FetchFailureReason,
    FetchOk,
    FetchResult,
    FileItem,
    iter_files,
)
from .archive_writer import DateTime, ZipArchiveWriter
from .path_resolver import resolve_entries
from .validation import validate_request

logger = logging.getLogger("app.assembler")


class ArchiveAssembler:
    """
    Validating -> Fetching -> Resolving -> Writing -> Done
         \\-> Rejected

    Only the fetch phase is concurrent. The archive is built in one sequential
    pass whose entry order depends on the request alone, never on which fetch
    finished first. Fetch failures drop the file from the archive and are
    counted in `AssemblyResult.skipped`.
    """

    def __init__(
        self,
        fetcher: Fetcher,
        *,
        max_concurrency: int = settings.fetch_max_concurrency,
        compression_level: int = settings.zip_compression_level,
    ):
        self.fetcher = fetcher
        self.max_concurrency = max(1, max_concurrency)
        self.compression_level = compression_level

    def _enter(self, state: AssemblyState, request: ArchiveRequest) -> None:
        logger.debug("assembly.%s name=%s", state.value, request.name)

    async def assemble(
        self,
        request: ArchiveRequest,
        *,
        cancel_event: Optional[asyncio.Event] = None,
        date_time: Optional[DateTime] = None,
    ) -> AssemblyResult:
        self._enter(AssemblyState.validating, request)
        try:
            validate_request(request)
        except TreeValidationError as e:
            self._enter(AssemblyState.rejected, request)
            logger.info("assembly.rejected name=%s code=%s path=%s", request.name, e.code, e.path)
            raise

        self._enter(AssemblyState.fetching, request)
        files = list(iter_files(request.roots))
        results = await self._fetch_all(files, cancel_event)

        self._enter(AssemblyState.resolving, request)
        entries = resolve_entries(request.roots, results)

        self._enter(AssemblyState.writing, request)
        writer = ZipArchiveWriter(compression_level=self.compression_level, date_time=date_time)
        skipped_sources: List[str] = []
        try:
            for entry in entries:
                if cancel_event is not None and cancel_event.is_set():
                    raise AssemblyCancelled("Request cancelled while writing the archive")
                if entry.is_folder:
                    writer.open_folder(entry.path)
                elif isinstance(entry.result, FetchOk):
                    writer.write_file(entry.path, entry.result.content)
                else:
                    skipped_sources.append(entry.source or "")
            content = writer.finish()
        except BaseException:
            writer.abort()
            raise

        self._enter(AssemblyState.done, request)
        result = AssemblyResult(
            content=content,
            file_name=request.file_name,
            entries=writer.entries,
            skipped=len(skipped_sources),
            skipped_sources=skipped_sources,
        )
        logger.info(
            "assembly.done name=%s files=%d entries=%d skipped=%d bytes=%d",
            request.name, len(files), result.entries, result.skipped, len(content),
        )
        return result

    async def _fetch_all(
        self,
        files: List[FileItem],
        cancel_event: Optional[asyncio.Event],
    ) -> List[FetchResult]:
        if not files:
            return []
        sem = asyncio.Semaphore(self.max_concurrency)

        async def _one(item: FileItem) -> FetchResult:
            async with sem:
                try:
                    result = await self.fetcher.fetch(item.source or "")
                except asyncio.CancelledError:
                    raise
                except Exception as e:
                    # Fetchers should not raise; keep the item-level isolation anyway.
                    logger.exception("fetch.raised source=%s", item.source)
                    result = FetchFailed(FetchFailureReason.other, str(e) or type(e).__name__)
            if isinstance(result, FetchFailed):
                logger.warning(
                    "fetch.failed name=%s source=%s reason=%s detail=%s",
                    item.name, item.source, result.reason.value, result.detail,
                )
            return result

        gathered = asyncio.gather(*(_one(f) for f in files))
        if cancel_event is None:
            return list(await gathered)

        cancel_wait = asyncio.ensure_future(cancel_event.wait())
        try:
            await asyncio.wait({gathered, cancel_wait}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            cancel_wait.cancel()
            if not gathered.done():
                gathered.cancel()
        # gather wins a tie: every fetch settled, so nothing is lost by continuing.
        if gathered.done() and not gathered.cancelled():
            return list(gathered.result())
        # Let the cancelled fetches unwind before reporting.
        await asyncio.wait({gathered})
        raise AssemblyCancelled("Request cancelled while fetching")
