#!/usr/bin/env python3
"""Cursor glow and parallax wallpaper layers.

Pointer and resize events only record state and ask for a frame; the
actual style writes happen once per frame in ``update``. At most one frame
callback is pending at any time, however many events arrive in between.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Optional, Sequence

from core.core import CommandHandler
from modules.base import BaseModule
from modules.dom import Element
from modules.environment import DESKTOP, Environment

logger = logging.getLogger("studio.cursor")

PARALLAX_STRENGTH: tuple[float, ...] = (0.02, 0.04, 0.06)
PARALLAX_RANGE_PX = 20.0
TOUCH_LAYER_FILTER = "blur(28px) saturate(110%)"


@dataclass
class PointerState:
    x: float
    y: float


@dataclass(frozen=True)
class LayerDescriptor:
    element: Element
    parallax_factor: float


@dataclass
class Viewport:
    width: float
    height: float

    @property
    def center(self) -> PointerState:
        return PointerState(self.width / 2, self.height / 2)


def _px(value: float) -> str:
    if value == 0:
        value = 0.0
    return f"{value:g}px"


def _normalize(position: float, extent: float) -> float:
    # A collapsed viewport has no meaningful offset; keep the layer centred.
    if extent <= 0:
        return 0.0
    return (position / extent - 0.5) * 2


def parallax_offset(pointer: PointerState, viewport: Viewport, factor: float) -> tuple[float, float]:
    """Translation for one layer; ``(0, 0)`` when the pointer is centred."""
    cx = _normalize(pointer.x, viewport.width)
    cy = _normalize(pointer.y, viewport.height)
    return -cx * PARALLAX_RANGE_PX * factor, -cy * PARALLAX_RANGE_PX * factor


def build_layers(elements: Sequence[Element], strengths: Sequence[float] = PARALLAX_STRENGTH) -> list[LayerDescriptor]:
    return [LayerDescriptor(element, factor) for element, factor in zip(elements, strengths)]


class CursorEffects(BaseModule):
    """Owns the pointer state and the per-frame update for glow and layers."""

    name = "cursor_effects"

    def __init__(
        self,
        glow: Element,
        layers: Sequence[LayerDescriptor],
        viewport: Viewport,
        environment: Environment = DESKTOP,
    ) -> None:
        super().__init__()
        self.glow = glow
        self.layers = tuple(layers)
        self.viewport = viewport
        self.environment = environment
        self.pointer = viewport.center
        self.needs_update = False
        self._frame_handle: Optional[int] = None
        self.update_count = 0

    # ------------------------------------------------------------------
    # Lifecycle
    def build_command_map(self) -> Dict[str, CommandHandler]:
        commands: Dict[str, CommandHandler] = {"resize": self.on_resize}
        if not self.environment.touch_primary:
            commands.update(
                {
                    "pointer_move": self.on_pointer_move,
                    "pointer_enter": self.on_pointer_enter,
                    "pointer_leave": self.on_pointer_leave,
                }
            )
        return commands

    def start(self) -> None:
        if self.environment.touch_primary:
            self.glow.style["opacity"] = "0"
            for layer in self.layers:
                layer.element.style["filter"] = TOUCH_LAYER_FILTER
        else:
            self.glow.style["opacity"] = "1"
        if not self.environment.heavy_effects:
            self._pause_layers()
        logger.debug(
            {
                "evt": "cursor_effects_start",
                "touch_primary": self.environment.touch_primary,
                "reduced_motion": self.environment.reduced_motion,
            }
        )

    def _pause_layers(self) -> None:
        for layer in self.layers:
            layer.element.style["animation-duration"] = "0s"
            layer.element.style["animation-play-state"] = "paused"
        self.glow.style["opacity"] = "0"

    # ------------------------------------------------------------------
    # Event handlers
    def on_pointer_move(self, payload: Optional[dict] = None) -> bool:
        payload = payload or {}
        self.pointer = PointerState(float(payload.get("x", 0)), float(payload.get("y", 0)))
        return self._mark_dirty()

    def on_pointer_enter(self, payload: Optional[dict] = None) -> None:
        self.glow.style["opacity"] = "1"

    def on_pointer_leave(self, payload: Optional[dict] = None) -> None:
        self.glow.style["opacity"] = "0"

    def on_resize(self, payload: Optional[dict] = None) -> bool:
        payload = payload or {}
        if "width" in payload and "height" in payload:
            self.viewport = Viewport(float(payload["width"]), float(payload["height"]))
        return self._mark_dirty()

    def _mark_dirty(self) -> bool:
        """Flag a pending update; return True if a new frame was requested."""
        self.needs_update = True
        if self._frame_handle is not None:
            return False
        self._frame_handle = self.request_frame(self.update)
        return True

    @property
    def frame_pending(self) -> bool:
        return self._frame_handle is not None

    # ------------------------------------------------------------------
    # Frame callback
    def update(self, timestamp: float = 0.0) -> None:
        self._frame_handle = None
        if not self.needs_update:
            return
        self.needs_update = False
        self.update_count += 1

        pointer = self.pointer
        self.glow.style["left"] = _px(pointer.x)
        self.glow.style["top"] = _px(pointer.y)

        for layer in self.layers:
            tx, ty = parallax_offset(pointer, self.viewport, layer.parallax_factor)
            layer.element.style["transform"] = f"translate3d({_px(tx)}, {_px(ty)}, 0)"


__all__ = [
    "CursorEffects",
    "LayerDescriptor",
    "PointerState",
    "Viewport",
    "PARALLAX_STRENGTH",
    "PARALLAX_RANGE_PX",
    "TOUCH_LAYER_FILTER",
    "build_layers",
    "parallax_offset",
]
