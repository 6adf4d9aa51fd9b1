#!/usr/bin/env python3
"""Client-side gallery preview: selected images become data-URI thumbnails.

Nothing here touches the server. Each selected image is decoded in its own
task and prepended to the grid when that task finishes, so with several
files the final order follows decode completion, not selection order.
"""

from __future__ import annotations

import asyncio
import base64
import logging
import mimetypes
from dataclasses import dataclass, field
from pathlib import Path
from typing import Awaitable, Callable, Dict, List, Optional, Sequence

from core.core import CommandHandler
from modules.base import BaseModule
from modules.dom import Element

logger = logging.getLogger("studio.gallery")

PREVIEW_ALT = "Uploaded image preview"
ITEM_CLASS = "gallery-item"


@dataclass(frozen=True)
class SelectedFile:
    name: str
    type: str
    data: bytes

    @property
    def is_image(self) -> bool:
        return self.type.startswith("image/")

    @classmethod
    def from_path(cls, path) -> "SelectedFile":
        path = Path(path)
        mime, _ = mimetypes.guess_type(path.name)
        return cls(name=path.name, type=mime or "", data=path.read_bytes())


@dataclass(frozen=True)
class GalleryItem:
    preview_url: str


@dataclass
class FileInput:
    """The ``<input type=file>`` selection; cleared after every change."""

    files: List[SelectedFile] = field(default_factory=list)

    def select(self, files: Sequence[SelectedFile]) -> None:
        self.files = list(files)

    def clear(self) -> None:
        self.files = []


FileReader = Callable[[SelectedFile], Awaitable[str]]


def encode_data_url(file: SelectedFile) -> str:
    payload = base64.b64encode(file.data).decode("ascii")
    return f"data:{file.type or 'application/octet-stream'};base64,{payload}"


async def read_as_data_url(file: SelectedFile) -> str:
    return await asyncio.to_thread(encode_data_url, file)


def build_preview_node(item: GalleryItem) -> Element:
    img = Element(tag="img", attrs={"src": item.preview_url, "alt": PREVIEW_ALT})
    node = Element(tag="div", classes={ITEM_CLASS})
    node.append(img)
    return node


class GalleryPreview(BaseModule):
    name = "gallery"

    def __init__(
        self,
        grid: Element,
        file_input: Optional[FileInput] = None,
        *,
        reader: Optional[FileReader] = None,
    ) -> None:
        super().__init__()
        self.grid = grid
        self.file_input = file_input
        self._reader = reader or read_as_data_url
        self.items: List[GalleryItem] = []

    def build_command_map(self) -> Dict[str, CommandHandler]:
        if self.file_input is None:
            return {}
        return {"files_selected": self.on_change}

    def on_change(self, payload: Optional[dict] = None) -> List["asyncio.Task[GalleryItem]"]:
        """Start one decode task per image file.

        Raises RuntimeError outside a running event loop, before the input is
        cleared, so a selection is never dropped silently.
        """
        loop = asyncio.get_running_loop()
        payload = payload or {}
        if "files" in payload:
            files = list(payload["files"])
        elif self.file_input is not None:
            files = list(self.file_input.files)
        else:
            files = []

        tasks = []
        for file in files:
            if not file.is_image:
                logger.debug({"evt": "gallery_skip", "file": file.name, "type": file.type})
                continue
            tasks.append(loop.create_task(self._preview(file)))
        if self.file_input is not None:
            self.file_input.clear()
        return tasks

    async def _preview(self, file: SelectedFile) -> GalleryItem:
        url = await self._reader(file)
        item = GalleryItem(preview_url=url)
        self.items.insert(0, item)
        self.grid.prepend(build_preview_node(item))
        logger.debug({"evt": "gallery_preview", "file": file.name, "bytes": len(file.data)})
        return item


__all__ = [
    "GalleryPreview",
    "GalleryItem",
    "SelectedFile",
    "FileInput",
    "build_preview_node",
    "encode_data_url",
    "read_as_data_url",
]
