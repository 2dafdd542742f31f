# MouseManager
# Copyright © 2025 Osvaldo J. Vega Rodríguez
# Licensed under CC BY-NC-SA 4.0 International
# http://creativecommons.org/licenses/by-nc-sa/4.0/

"""Vocabulary and payload types shared by the dispatch core."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

__all__ = [
    "Operation",
    "Selection",
    "SELECTION_KEYED",
    "Region",
    "ScrollData",
    "MouseEventData",
]


class Operation(str, Enum):
    """Kind of mouse interaction routed to a managed item."""

    CLICK = "click"
    DRAG = "drag"
    RELEASE = "release"
    HOVER = "hover"
    SCROLL = "scroll"

    @property
    def selection_keyed(self) -> bool:
        return self in SELECTION_KEYED


class Selection(str, Enum):
    """Mouse button / click kind that produced an event."""

    NORMAL = "normal"
    EXTEND = "extend"
    ALT = "alt"
    OPEN = "open"
    NONE = "none"

    @classmethod
    def choices(cls) -> tuple["Selection", ...]:
        """Selections a callback can be registered for (everything but ``none``)."""
        return (cls.NORMAL, cls.EXTEND, cls.ALT, cls.OPEN)


SELECTION_KEYED = frozenset({Operation.CLICK, Operation.DRAG, Operation.RELEASE})


@dataclass(frozen=True)
class Region:
    """Axis-aligned bounding box in window pixel coordinates."""

    x0: float
    y0: float
    width: float
    height: float

    @property
    def x1(self) -> float:
        return self.x0 + self.width

    @property
    def y1(self) -> float:
        return self.y0 + self.height

    def contains(self, point: tuple[float, float]) -> bool:
        """Inclusive containment on both axes."""
        x, y = point
        return self.x0 <= x <= self.x1 and self.y0 <= y <= self.y1

    @classmethod
    def from_bbox(cls, bbox: Any) -> "Region":
        """Build a region from a matplotlib ``Bbox`` (or anything with x0/y0/width/height)."""
        return cls(
            x0=float(bbox.x0),
            y0=float(bbox.y0),
            width=float(bbox.width),
            height=float(bbox.height),
        )

    def as_tuple(self) -> tuple[float, float, float, float]:
        return (self.x0, self.y0, self.width, self.height)


@dataclass(frozen=True)
class ScrollData:
    """Wheel payload attached to ``scroll`` operations.

    delta_y is positive when scrolling up/away from the user (e.g., wheel up)
    and negative when scrolling down/toward the user.
    """

    delta_y: float
    step: float = 0.0
    button: Optional[str] = None


@dataclass(frozen=True)
class MouseEventData:
    """Payload handed to every callback alongside the target handle."""

    operation: Operation
    selection_type: Selection
    pointer_position: tuple[float, float]
    target_region: Optional[Region] = None
    scroll_data: Optional[ScrollData] = None
