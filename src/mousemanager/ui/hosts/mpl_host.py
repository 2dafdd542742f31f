# MouseManager
# Copyright © 2025 Osvaldo J. Vega Rodríguez
# Licensed under CC BY-NC-SA 4.0 International
# http://creativecommons.org/licenses/by-nc-sa/4.0/

"""Matplotlib figure host that feeds canvas events to a mouse manager."""

from __future__ import annotations

import contextlib
import logging
import math
import weakref
from collections.abc import Callable
from typing import Any, Optional

from matplotlib.axes import Axes
from matplotlib.figure import Figure

from mousemanager.core.types import Region, Selection
from mousemanager.ui.hosts.host_base import (
    HostHandlers,
    MoveContext,
    PressContext,
    ReleaseContext,
    ScrollContext,
)

__all__ = ["MplFigureHost", "current_object", "selection_type"]

log = logging.getLogger(__name__)

_MODIFIER_ALIASES = {
    "ctrl": "control",
    "cmd": "command",
    "option": "alt",
}

# Figure -> host currently holding its four mouse event slots.
_SLOT_OWNERS: "weakref.WeakKeyDictionary[Figure, MplFigureHost]" = weakref.WeakKeyDictionary()


def _root_figure(artist: Any) -> Optional[Any]:
    get_figure = getattr(artist, "get_figure", None)
    if not callable(get_figure):
        return None
    try:
        return get_figure(root=True)
    except TypeError:
        # Matplotlib < 3.10: walk up through subfigures.
        fig = get_figure()
        while fig is not None:
            parent = getattr(fig, "figure", None)
            if parent is None or parent is fig:
                break
            fig = parent
        return fig


def _axes_children(ax: Any) -> list[Any]:
    children = getattr(ax, "_children", None)
    if children is None:
        children = [
            *ax.collections,
            *ax.patches,
            *ax.lines,
            *ax.texts,
            *ax.artists,
            *ax.images,
        ]
    legend = getattr(ax, "legend_", None)
    if legend is not None:
        children = [*children, legend]
    # Stable sort keeps insertion order for equal zorder, matching draw order.
    return sorted(children, key=lambda artist: artist.get_zorder())


def _figure_layers(figure: Any) -> list[Any]:
    layers = [
        *figure.artists,
        *figure.get_axes(),
        *figure.lines,
        *figure.patches,
        *figure.texts,
        *figure.images,
        *figure.legends,
    ]
    return sorted(layers, key=lambda artist: artist.get_zorder())


def _hits(artist: Any, event: Any) -> bool:
    if not artist.get_visible():
        return False
    try:
        inside, _ = artist.contains(event)
    except Exception:
        return False
    return bool(inside)


def _in_bbox(ax: Any, event: Any) -> bool:
    try:
        return bool(ax.bbox.contains(event.x, event.y))
    except Exception:
        return False


def current_object(figure: Any, event: Any) -> Any:
    """Return the topmost visible artist under ``event``.

    Figure-level artists (texts, patches, legends) compete with the axes by
    zorder. Inside an axes the fallback is the axes itself, then the figure.
    """
    for layer in reversed(_figure_layers(figure)):
        if isinstance(layer, Axes):
            if not layer.get_visible() or not _in_bbox(layer, event):
                continue
            for child in reversed(_axes_children(layer)):
                if _hits(child, event):
                    return child
            return layer
        if _hits(layer, event):
            return layer
    return figure


class MplFigureHost:
    """Adapter that converts Matplotlib canvas events into host contexts.

    Only one host at a time holds a figure's mouse event slots. A second
    :meth:`install_handlers` call on the same figure (from any host) takes the
    slots over and notifies the previous holder through ``on_slots_changed``.
    """

    def __init__(self, figure: Figure) -> None:
        self.figure = figure
        self._canvas: Any = None
        self._handlers: HostHandlers | None = None
        self._connection_ids: list[int] = []

        self._destroyed_handlers: list[Callable[[], None]] = []
        self._slots_changed_handlers: list[Callable[[], None]] = []
        self._items_changed_handlers: list[Callable[[], None]] = []

        self._close_cid: int | None = None
        self._connect_lifecycle()

    # ------------------------------------------------------------------ geometry
    def is_valid_item(self, item: Any) -> bool:
        if item is self.figure:
            return True
        if _root_figure(item) is not self.figure:
            return False
        # Axes removal notifies observers before the artist drops its figure.
        ax = item if isinstance(item, Axes) else getattr(item, "axes", None)
        if ax is None:
            return True
        parent = getattr(ax, "figure", None)
        return parent is not None and ax in parent.axes

    def is_item_alive(self, item: Any) -> bool:
        return self.is_valid_item(item)

    def item_region(self, item: Any) -> Optional[Region]:
        if not self.is_valid_item(item):
            return None
        if item is self.figure:
            return Region.from_bbox(self.figure.bbox)
        try:
            bbox = item.get_window_extent()
        except Exception:
            log.debug("No window extent for %r", item, exc_info=True)
            return None
        if bbox is None:
            return None
        return Region.from_bbox(bbox)

    def request_refresh(self) -> None:
        draw_idle = getattr(self.figure.canvas, "draw_idle", None)
        if callable(draw_idle):
            draw_idle()

    # ------------------------------------------------------------------ event slots
    def install_handlers(self, handlers: HostHandlers) -> None:
        self._disconnect_events()
        previous = _SLOT_OWNERS.get(self.figure)
        self._handlers = handlers
        self._connect_events()
        _SLOT_OWNERS[self.figure] = self
        if previous is not None and previous is not self:
            previous._slots_taken()

    def remove_handlers(self) -> None:
        self._disconnect_events()
        self._handlers = None
        if _SLOT_OWNERS.get(self.figure) is self:
            del _SLOT_OWNERS[self.figure]

    @property
    def has_handlers(self) -> bool:
        return self._handlers is not None

    def _slots_taken(self) -> None:
        self._disconnect_events()
        self._handlers = None
        log.debug("Mouse event slots of %r taken over by another host", self.figure)
        self._notify(self._slots_changed_handlers)

    def _connect_events(self) -> None:
        canvas = self.figure.canvas
        mpl_connect = getattr(canvas, "mpl_connect", None)
        if mpl_connect is None:
            return
        self._canvas = canvas
        self._connection_ids.extend(
            [
                mpl_connect("button_press_event", self._handle_press),
                mpl_connect("button_release_event", self._handle_release),
                mpl_connect("motion_notify_event", self._handle_motion),
                mpl_connect("scroll_event", self._handle_scroll),
            ]
        )

    def _disconnect_events(self) -> None:
        mpl_disconnect = getattr(self._canvas, "mpl_disconnect", None)
        if mpl_disconnect is not None:
            for cid in self._connection_ids:
                with contextlib.suppress(Exception):
                    mpl_disconnect(cid)
        self._connection_ids.clear()
        self._canvas = None

    # ------------------------------------------------------------------ notifications
    def on_destroyed(self, handler: Callable[[], None]) -> None:
        self._destroyed_handlers.append(handler)

    def on_slots_changed(self, handler: Callable[[], None]) -> None:
        self._slots_changed_handlers.append(handler)

    def on_items_changed(self, handler: Callable[[], None]) -> None:
        self._items_changed_handlers.append(handler)

    def _connect_lifecycle(self) -> None:
        mpl_connect = getattr(self.figure.canvas, "mpl_connect", None)
        if mpl_connect is not None:
            self._close_cid = mpl_connect("close_event", self._handle_close)
        add_axobserver = getattr(self.figure, "add_axobserver", None)
        if callable(add_axobserver):
            add_axobserver(self._handle_axes_change)

    def _handle_close(self, event: Any) -> None:
        log.debug("Figure %r closed", self.figure)
        self.remove_handlers()
        self._notify(self._destroyed_handlers)

    def _handle_axes_change(self, figure: Any) -> None:
        self._notify(self._items_changed_handlers)

    def _notify(self, handlers: list[Callable[[], None]]) -> None:
        for handler in list(handlers):
            handler()

    # ------------------------------------------------------------------ canvas callbacks
    def _handle_press(self, event: Any) -> None:
        if self._handlers is not None:
            self._handlers.on_press(
                PressContext(
                    *_pixel(event), selection_type(event), current_object(self.figure, event)
                )
            )

    def _handle_release(self, event: Any) -> None:
        if self._handlers is not None:
            self._handlers.on_release(ReleaseContext(*_pixel(event)))

    def _handle_motion(self, event: Any) -> None:
        if self._handlers is not None:
            self._handlers.on_motion(MoveContext(*_pixel(event)))

    def _handle_scroll(self, event: Any) -> None:
        if self._handlers is not None:
            self._handlers.on_scroll(
                ScrollContext(
                    *_pixel(event),
                    delta_y=_wheel_delta(event),
                    step=float(getattr(event, "step", 0) or 0),
                    button=getattr(event, "button", None),
                )
            )


# ---------------------------------------------------------------------- event normalisation
_BUTTON_NAMES = {1: "left", 2: "middle", 3: "right"}
_WHEEL_DIRECTIONS = {"up": 1.0, "down": -1.0}


def _pixel(event: Any) -> tuple[float, float]:
    x, y = getattr(event, "x", None), getattr(event, "y", None)
    return (
        float(x) if x is not None else math.nan,
        float(y) if y is not None else math.nan,
    )


def _button(event: Any) -> str:
    raw = getattr(event, "button", None)
    if isinstance(raw, str):
        return raw.lower()
    return _BUTTON_NAMES.get(raw, "")


def _modifiers(event: Any) -> frozenset[str]:
    names = getattr(event, "modifiers", None) or str(getattr(event, "key", None) or "").split("+")
    return frozenset(_MODIFIER_ALIASES.get(n.lower(), n.lower()) for n in names if n)


def selection_type(event: Any) -> Selection:
    """Double-click is ``open``; shift+left or middle is ``extend``;
    control+left or right is ``alt``; plain left is ``normal``."""
    if getattr(event, "dblclick", False):
        return Selection.OPEN
    button = _button(event)
    if button == "left":
        modifiers = _modifiers(event)
        if "shift" in modifiers:
            return Selection.EXTEND
        return Selection.ALT if "control" in modifiers else Selection.NORMAL
    return {"middle": Selection.EXTEND, "right": Selection.ALT}.get(button, Selection.NONE)


def _wheel_delta(event: Any) -> float:
    step = getattr(event, "step", None)
    if step:
        return float(step)
    return _WHEEL_DIRECTIONS.get(getattr(event, "button", None), 0.0)
