#!/usr/bin/env python3
"""Scroll-triggered fade-in for elements tagged ``fade-in``."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

from core.core import CommandHandler
from modules.base import BaseModule
from modules.dom import Element, Rect

logger = logging.getLogger("studio.reveal")

REVEAL_THRESHOLD = 0.15
VISIBLE_CLASS = "visible"


@dataclass(frozen=True)
class IntersectionEntry:
    target: Element
    ratio: float


def intersection_ratio(rect: Rect, viewport: Rect) -> float:
    """Share of ``rect``'s area that lies inside ``viewport``."""
    if rect.area <= 0:
        return 0.0
    width = min(rect.right, viewport.right) - max(rect.left, viewport.left)
    height = min(rect.bottom, viewport.bottom) - max(rect.top, viewport.top)
    if width <= 0 or height <= 0:
        return 0.0
    return min(1.0, (width * height) / rect.area)


class RevealObserver(BaseModule):
    """Single shared watcher; each element is revealed once, then dropped."""

    name = "reveal"

    def __init__(self, targets: Iterable[Element] = (), threshold: float = REVEAL_THRESHOLD) -> None:
        super().__init__()
        self.threshold = threshold
        self._observed: List[Element] = []
        for target in targets:
            self.observe(target)

    def build_command_map(self) -> Dict[str, CommandHandler]:
        return {
            "intersections": self.on_intersections,
            "scroll": self.on_scroll,
        }

    @property
    def observed(self) -> tuple[Element, ...]:
        return tuple(self._observed)

    def observe(self, element: Element) -> None:
        if element not in self._observed:
            self._observed.append(element)

    def unobserve(self, element: Element) -> None:
        if element in self._observed:
            self._observed.remove(element)

    def is_intersecting(self, entry: IntersectionEntry) -> bool:
        return entry.ratio > 0 and entry.ratio >= self.threshold

    def handle_entries(self, entries: Iterable[IntersectionEntry]) -> List[Element]:
        revealed: List[Element] = []
        for entry in entries:
            if entry.target not in self._observed:
                continue
            if self.is_intersecting(entry):
                entry.target.add_class(VISIBLE_CLASS)
                self.unobserve(entry.target)
                revealed.append(entry.target)
        if revealed:
            logger.debug({"evt": "reveal", "count": len(revealed), "remaining": len(self._observed)})
        return revealed

    def on_intersections(self, payload: Optional[dict] = None) -> List[Element]:
        payload = payload or {}
        return self.handle_entries(payload.get("entries", ()))

    def on_scroll(self, payload: Optional[dict] = None) -> List[Element]:
        """Compute entries for observed elements against the scrolled viewport."""
        payload = payload or {}
        viewport = Rect(
            top=float(payload.get("top", 0)),
            left=float(payload.get("left", 0)),
            width=float(payload.get("width", 0)),
            height=float(payload.get("height", 0)),
        )
        entries = [
            IntersectionEntry(element, intersection_ratio(element.rect, viewport))
            for element in self._observed
            if element.rect is not None
        ]
        return self.handle_entries(entries)


__all__ = ["RevealObserver", "IntersectionEntry", "intersection_ratio", "REVEAL_THRESHOLD", "VISIBLE_CLASS"]
