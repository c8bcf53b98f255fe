from __future__ import annotations

import io
import logging
import time
import zipfile
from typing import Optional, Tuple

from ..errors import ArchiveWriteError

logger = logging.getLogger("app.archive")

DateTime = Tuple[int, int, int, int, int, int]

# drwxr-xr-x plus the MS-DOS directory flag
_DIR_ATTR = (0o40755 << 16) | 0x10
# -rw-r--r--
_FILE_ATTR = 0o100644 << 16


class ZipArchiveWriter:
    """
    In-memory ZIP sink. Not safe for concurrent use: one assembly owns one
    writer and appends entries sequentially.

    Every entry carries the same timestamp (fixed when the writer is created),
    so identical input produces identical bytes for a given `date_time`.
    """

    def __init__(self, *, compression_level: int = 1, date_time: Optional[DateTime] = None):
        self.compression_level = compression_level
        self.date_time: DateTime = date_time or _zip_now()
        self.entries = 0
        self._buffer = io.BytesIO()
        self._zip: Optional[zipfile.ZipFile] = zipfile.ZipFile(
            self._buffer, mode="w", compression=zipfile.ZIP_DEFLATED, compresslevel=compression_level
        )

    def _info(self, path: str, *, attr: int, compress_type: int) -> zipfile.ZipInfo:
        info = zipfile.ZipInfo(path, date_time=self.date_time)
        info.external_attr = attr
        info.compress_type = compress_type
        return info

    def _require_open(self) -> zipfile.ZipFile:
        if self._zip is None:
            raise ArchiveWriteError("Archive is already closed")
        return self._zip

    def open_folder(self, path: str) -> None:
        if not path.endswith("/"):
            path = f"{path}/"
        info = self._info(path, attr=_DIR_ATTR, compress_type=zipfile.ZIP_STORED)
        self._write(info, b"")

    def write_file(self, path: str, data: bytes) -> None:
        if path.endswith("/"):
            raise ArchiveWriteError(f"File path must not end with '/': {path}")
        info = self._info(path, attr=_FILE_ATTR, compress_type=zipfile.ZIP_DEFLATED)
        self._write(info, data, compresslevel=self.compression_level)

    def _write(self, info: zipfile.ZipInfo, data: bytes, **kwargs) -> None:
        zf = self._require_open()
        try:
            zf.writestr(info, data, **kwargs)
        except (OSError, MemoryError, zipfile.LargeZipFile) as e:
            logger.error("archive.write failed path=%s: %s", info.filename, e)
            self.abort()
            raise ArchiveWriteError(f"Failed to write archive entry {info.filename!r}: {e}") from e
        self.entries += 1

    def finish(self) -> bytes:
        """Write the central directory and return the archive bytes."""
        zf = self._require_open()
        try:
            zf.close()
        except (OSError, MemoryError, zipfile.LargeZipFile) as e:
            self.abort()
            raise ArchiveWriteError(f"Failed to finalize archive: {e}") from e
        self._zip = None
        data = self._buffer.getvalue()
        self._buffer = io.BytesIO()
        return data

    def abort(self) -> None:
        """Drop whatever has been written so far."""
        zf, self._zip = self._zip, None
        if zf is not None:
            try:
                zf.close()
            except Exception as e:
                logger.debug("archive.abort close failed: %s", e)
        self._buffer = io.BytesIO()


def _zip_now() -> DateTime:
    # ZIP timestamps have two-second resolution and start in 1980.
    t = time.localtime()
    return (max(t.tm_year, 1980), t.tm_mon, t.tm_mday, t.tm_hour, t.tm_min, t.tm_sec - t.tm_sec % 2)
