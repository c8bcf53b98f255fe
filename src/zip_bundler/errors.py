# src/zip_bundler/errors.py
from __future__ import annotations

from enum import Enum
from typing import Any, Dict


class BundleError(RuntimeError):
    """Base class for errors that abort a whole assembly."""

    code: str = "BUNDLE_ERROR"

    def to_detail(self) -> Dict[str, Any]:
        return {"code": self.code, "message": str(self)}


class ValidationCode(str, Enum):
    EMPTY_REQUEST = "EMPTY_REQUEST"
    MISSING_SOURCE = "MISSING_SOURCE"
    INVALID_NAME = "INVALID_NAME"
    PATH_COLLISION = "PATH_COLLISION"


class TreeValidationError(BundleError):
    """The requested hierarchy is malformed; raised before any I/O."""

    def __init__(self, code: ValidationCode, message: str, *, path: str = ""):
        super().__init__(message)
        self.code = code.value
        self.validation_code = code
        self.path = path

    def to_detail(self) -> Dict[str, Any]:
        return {"code": self.code, "message": str(self), "path": self.path}


class ArchiveWriteError(BundleError):
    code = "ARCHIVE_WRITE_ERROR"


class AssemblyCancelled(BundleError):
    code = "CANCELLED"
