from .item_models import ArchiveRequest, FileItem, FolderItem, ItemNode, iter_files
from .results import (
    AssemblyResult,
    AssemblyState,
    FetchFailed,
    FetchFailureReason,
    FetchOk,
    FetchResult,
    ResolvedEntry,
)

__all__ = [
    "ArchiveRequest",
    "FileItem",
    "FolderItem",
    "ItemNode",
    "iter_files",
    "AssemblyResult",
    "AssemblyState",
    "FetchFailed",
    "FetchFailureReason",
    "FetchOk",
    "FetchResult",
    "ResolvedEntry",
]
