from __future__ import annotations

import posixpath
from typing import List
from urllib.parse import unquote, urlsplit

from ..errors import TreeValidationError
from ..models import ArchiveRequest, FileItem
from .validation import check_name

FALLBACK_NAME = "download"


def name_from_url(url: str) -> str:
    """
    Last path segment of `url`, percent-decoded, query and fragment dropped.
    Falls back to 'download' when the segment is not a usable file name.
    """
    path = urlsplit((url or "").strip()).path
    name = posixpath.basename(unquote(path))
    # an encoded separator must not create a sub-folder
    name = name.replace("\\", "/").rsplit("/", 1)[-1]
    try:
        check_name(name, path=name)
    except TreeValidationError:
        return FALLBACK_NAME
    return name


def request_from_urls(urls: List[str], *, name: str) -> ArchiveRequest:
    """Flat list of URLs -> single-level request, file names derived from the URLs."""
    return ArchiveRequest(
        name=name,
        roots=[FileItem(name=name_from_url(u), source=u) for u in urls or []],
    )
