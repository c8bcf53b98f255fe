from __future__ import annotations

from typing import Annotated, Iterator, List, Literal, Optional, Union

from pydantic import BaseModel, Field


# ─────────────────────────────────────────────────────────────
# Requested hierarchy
# ─────────────────────────────────────────────────────────────
class FileItem(BaseModel):
    """A remote resource to fetch and place in the archive."""

    kind: Literal["file"] = "file"
    name: str = Field(..., description="File name inside the archive (last path segment).")
    source: Optional[str] = Field(default=None, description="Fetch locator, e.g. an http(s) URL.")

    model_config = dict(extra="forbid", frozen=True)


class FolderItem(BaseModel):
    """A named folder; children are placed beneath it in input order."""

    kind: Literal["folder"] = "folder"
    name: str = Field(..., description="Folder name inside the archive.")
    children: List[ItemNode] = Field(default_factory=list)

    model_config = dict(extra="forbid", frozen=True)


ItemNode = Annotated[Union[FileItem, FolderItem], Field(discriminator="kind")]

FolderItem.model_rebuild()


class ArchiveRequest(BaseModel):
    name: str = Field(default="", description="Archive base name; the response is '{name}.zip'.")
    roots: List[ItemNode] = Field(default_factory=list, description="Top-level files and folders.")

    model_config = dict(extra="forbid", frozen=True)

    @property
    def file_name(self) -> str:
        return f"{self.name.strip()}.zip"


def iter_files(nodes: List[ItemNode]) -> Iterator[FileItem]:
    """Yield every file node depth-first, in input order."""
    for node in nodes:
        if isinstance(node, FolderItem):
            yield from iter_files(node.children)
        else:
            yield node
