"""Device and motion-preference detection, evaluated once at page load."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

COARSE_POINTER_QUERY = "(pointer: coarse)"
REDUCED_MOTION_QUERY = "(prefers-reduced-motion: reduce)"


@dataclass(frozen=True)
class Environment:
    coarse_pointer: bool = False
    touch_start: bool = False
    reduced_motion: bool = False

    @property
    def touch_primary(self) -> bool:
        return self.coarse_pointer or self.touch_start

    @property
    def heavy_effects(self) -> bool:
        """Whether layer animation and the glow may run at all."""
        return not (self.touch_primary or self.reduced_motion)

    @classmethod
    def from_media(cls, matches: Callable[[str], bool], *, touch_start: bool = False) -> "Environment":
        """Build from a ``matchMedia``-style predicate."""
        return cls(
            coarse_pointer=bool(matches(COARSE_POINTER_QUERY)),
            touch_start=bool(touch_start),
            reduced_motion=bool(matches(REDUCED_MOTION_QUERY)),
        )


DESKTOP = Environment()

__all__ = ["Environment", "DESKTOP", "COARSE_POINTER_QUERY", "REDUCED_MOTION_QUERY"]
