"""Minimal element model standing in for the browser DOM."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional


@dataclass(frozen=True)
class Rect:
    """Axis-aligned box in page coordinates."""

    top: float
    left: float
    width: float
    height: float

    @property
    def bottom(self) -> float:
        return self.top + self.height

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def area(self) -> float:
        return max(0.0, self.width) * max(0.0, self.height)


@dataclass(eq=False)
class Element:
    tag: str = "div"
    id: str = ""
    classes: set = field(default_factory=set)
    style: Dict[str, str] = field(default_factory=dict)
    attrs: Dict[str, str] = field(default_factory=dict)
    children: List["Element"] = field(default_factory=list)
    rect: Optional[Rect] = None
    text: str = ""

    def add_class(self, name: str) -> None:
        self.classes.add(name)

    def has_class(self, name: str) -> bool:
        return name in self.classes

    def append(self, child: "Element") -> None:
        self.children.append(child)

    def prepend(self, child: "Element") -> None:
        self.children.insert(0, child)

    def __repr__(self) -> str:
        label = f"#{self.id}" if self.id else "".join(f".{c}" for c in sorted(self.classes))
        return f"<{self.tag}{label}>"


__all__ = ["Element", "Rect"]
