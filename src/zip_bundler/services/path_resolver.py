from __future__ import annotations

import posixpath
from typing import Iterable, Iterator, List, Set

from ..models import FolderItem, FetchResult, ItemNode, ResolvedEntry


def unique_file_name(name: str, taken: Set[str]) -> str:
    """
    Return `name`, or the first free `stem-N.ext` variant when a sibling
    already uses it (N = 1, 2, ...).
    """
    if name not in taken:
        return name
    stem, ext = posixpath.splitext(name)
    n = 1
    while f"{stem}-{n}{ext}" in taken:
        n += 1
    return f"{stem}-{n}{ext}"


def resolve_entries(
    nodes: List[ItemNode],
    results: Iterable[FetchResult],
    prefix: str = "",
) -> List[ResolvedEntry]:
    """
    Compute the archive path of every node, depth-first in input order.
    Expects a tree that passed `validate_request`, so no folder shares its
    name with a sibling.

    `results` must line up with `iter_files(nodes)`: one fetch result per file
    node, same order. Folder entries always precede their descendants.
    """
    it = iter(results)
    out: List[ResolvedEntry] = []
    _resolve_level(nodes, it, prefix, out)
    if next(it, None) is not None:
        raise ValueError("more fetch results than file nodes")
    return out


def _resolve_level(
    nodes: List[ItemNode],
    results: Iterator[FetchResult],
    prefix: str,
    out: List[ResolvedEntry],
) -> None:
    # Folders keep their names, so reserve them before any file is renamed.
    taken: Set[str] = {n.name for n in nodes if isinstance(n, FolderItem)}

    for node in nodes:
        if isinstance(node, FolderItem):
            path = f"{prefix}{node.name}/"
            out.append(ResolvedEntry(path=path, is_folder=True))
            _resolve_level(node.children, results, path, out)
            continue

        name = unique_file_name(node.name, taken)
        taken.add(name)
        try:
            result = next(results)
        except StopIteration:
            raise ValueError("fewer fetch results than file nodes") from None
        out.append(ResolvedEntry(path=f"{prefix}{name}", is_folder=False, source=node.source, result=result))


__all__ = ["resolve_entries", "unique_file_name"]
