#!/usr/bin/env python3
"""Photo upload storage shared by the upload and listing endpoints."""

from __future__ import annotations

import logging
import os
import re
import time
from pathlib import Path
from typing import List, Optional, Union

from werkzeug.datastructures import FileStorage

logger = logging.getLogger("studio.uploads")

PROJECT_ROOT = Path(__file__).resolve().parent.parent
UPLOAD_DIR = Path(os.getenv("UPLOAD_DIR", str(PROJECT_ROOT / "uploads")))
IMAGE_NAME = re.compile(r"\.(jpg|jpeg|png|gif)$", re.IGNORECASE)

PathLike = Union[str, os.PathLike]


def timestamp_ms() -> int:
    return int(time.time() * 1000)


def original_extension(filename: Optional[str]) -> str:
    """Extension of the client-side name, leading dot included ('' if none)."""
    base = os.path.basename((filename or "").replace("\\", "/"))
    return os.path.splitext(base)[1]


def generate_name(filename: Optional[str], now_ms: Optional[int] = None) -> str:
    """``<ms-timestamp><ext>``; two uploads in the same millisecond collide."""
    if now_ms is None:
        now_ms = timestamp_ms()
    return f"{now_ms}{original_extension(filename)}"


def is_image_name(name: str) -> bool:
    return bool(IMAGE_NAME.search(name))


def save_upload(photo: FileStorage, directory: PathLike = UPLOAD_DIR) -> Path:
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    target = directory / generate_name(photo.filename)
    photo.save(target)
    logger.info({"evt": "upload_saved", "original": photo.filename, "stored": target.name})
    return target


def list_images(directory: PathLike = UPLOAD_DIR) -> List[str]:
    """Image file names in code-point order; read errors propagate as OSError."""
    return sorted(name for name in os.listdir(directory) if is_image_name(name))


__all__ = [
    "UPLOAD_DIR",
    "generate_name",
    "original_extension",
    "is_image_name",
    "save_upload",
    "list_images",
    "timestamp_ms",
]
