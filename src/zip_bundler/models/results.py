from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Union


class FetchFailureReason(str, Enum):
    network_error = "network_error"
    not_found = "not_found"
    timeout = "timeout"
    other = "other"


@dataclass(frozen=True)
class FetchOk:
    content: bytes

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class FetchFailed:
    reason: FetchFailureReason
    detail: str = ""

    @property
    def ok(self) -> bool:
        return False


FetchResult = Union[FetchOk, FetchFailed]


@dataclass(frozen=True)
class ResolvedEntry:
    """One archive entry as computed by the path resolver."""

    path: str
    is_folder: bool
    source: Optional[str] = None
    result: Optional[FetchResult] = None

    @property
    def content(self) -> Optional[bytes]:
        if isinstance(self.result, FetchOk):
            return self.result.content
        return None


class AssemblyState(str, Enum):
    validating = "validating"
    rejected = "rejected"
    fetching = "fetching"
    resolving = "resolving"
    writing = "writing"
    done = "done"


@dataclass
class AssemblyResult:
    content: bytes
    file_name: str
    entries: int
    skipped: int
    skipped_sources: List[str] = field(default_factory=list)
