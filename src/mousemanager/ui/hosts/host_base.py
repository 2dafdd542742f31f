"""Backend-agnostic host window contexts for the mouse manager."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional, Protocol, runtime_checkable

from mousemanager.core.types import Region, Selection


@dataclass
class PressContext:
    """Button press in window pixel coordinates."""

    x_px: float
    y_px: float
    selection: Selection
    current_object: Any  # topmost object under the cursor, as resolved by the host


@dataclass
class MoveContext:
    """Pointer motion in window pixel coordinates."""

    x_px: float
    y_px: float


@dataclass
class ReleaseContext:
    """Button release in window pixel coordinates."""

    x_px: float
    y_px: float


@dataclass
class ScrollContext:
    """Wheel scroll in window pixel coordinates.

    delta_y is positive when scrolling up/away from the user (e.g., wheel up)
    and negative when scrolling down/toward the user.
    """

    x_px: float
    y_px: float
    delta_y: float
    step: float = 0.0
    button: Optional[str] = None


@dataclass
class HostHandlers:
    """The four entry points a manager installs into a host's event slots."""

    on_press: Callable[[PressContext], None]
    on_motion: Callable[[MoveContext], None]
    on_release: Callable[[ReleaseContext], None]
    on_scroll: Callable[[ScrollContext], None]


@runtime_checkable
class HostWindow(Protocol):
    """Abstract interface a window exposes to the mouse manager."""

    def is_valid_item(self, item: Any) -> bool:
        ...

    def is_item_alive(self, item: Any) -> bool:
        ...

    def item_region(self, item: Any) -> Optional[Region]:
        ...

    def request_refresh(self) -> None:
        ...

    def install_handlers(self, handlers: HostHandlers) -> None:
        ...

    def remove_handlers(self) -> None:
        ...

    def on_destroyed(self, handler: Callable[[], None]) -> None:
        ...

    def on_slots_changed(self, handler: Callable[[], None]) -> None:
        ...

    def on_items_changed(self, handler: Callable[[], None]) -> None:
        ...
