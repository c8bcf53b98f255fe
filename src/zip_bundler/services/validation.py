from __future__ import annotations

from typing import Dict, List

from ..errors import TreeValidationError, ValidationCode
from ..models import ArchiveRequest, FileItem, ItemNode

_SEPARATORS = ("/", "\\")
_DOT_SEGMENTS = (".", "..")


def check_name(name: str, *, path: str) -> None:
    """
    A name becomes exactly one archive path segment, so it must not be blank,
    carry a separator, or be a dot segment.
    """
    stripped = (name or "").strip()
    if not stripped:
        raise TreeValidationError(ValidationCode.INVALID_NAME, "Name must not be blank", path=path)
    if any(sep in name for sep in _SEPARATORS):
        raise TreeValidationError(
            ValidationCode.INVALID_NAME, f"Name must not contain a path separator: {name!r}", path=path
        )
    if stripped in _DOT_SEGMENTS or "\x00" in name:
        raise TreeValidationError(ValidationCode.INVALID_NAME, f"Name is not a valid path segment: {name!r}", path=path)


def validate_request(request: ArchiveRequest) -> None:
    """
    Depth-first structural validation. Raises TreeValidationError on the first
    violation; returns None when the request can be assembled.
    """
    if not request.roots or not (request.name or "").strip():
        raise TreeValidationError(ValidationCode.EMPTY_REQUEST, "Request needs a name and at least one item")
    check_name(request.name, path="")
    _validate_level(request.roots, prefix="")


def _validate_level(nodes: List[ItemNode], *, prefix: str) -> None:
    # sibling name -> kind of the first node that claimed it
    claimed: Dict[str, str] = {}
    for node in nodes:
        path = f"{prefix}{node.name}"
        check_name(node.name, path=path)

        if isinstance(node, FileItem):
            if not (node.source or "").strip():
                raise TreeValidationError(ValidationCode.MISSING_SOURCE, "File has no source", path=path)
            if claimed.get(node.name) == "folder":
                raise TreeValidationError(
                    ValidationCode.PATH_COLLISION, f"File collides with sibling folder {node.name!r}", path=path
                )
            claimed.setdefault(node.name, "file")
            continue

        if node.name in claimed:
            raise TreeValidationError(
                ValidationCode.PATH_COLLISION,
                f"Folder collides with sibling {claimed[node.name]} {node.name!r}",
                path=path,
            )
        claimed[node.name] = "folder"
        _validate_level(node.children, prefix=f"{path}/")


__all__ = ["check_name", "validate_request"]
