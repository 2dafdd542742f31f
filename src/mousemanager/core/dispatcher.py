# MouseManager
# Copyright © 2025 Osvaldo J. Vega Rodríguez
# Licensed under CC BY-NC-SA 4.0 International
# http://creativecommons.org/licenses/by-nc-sa/4.0/

"""Down/motion/up/scroll state machine that routes events to callbacks."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Optional

from mousemanager.core.hit_resolver import HitResolver
from mousemanager.core.registry import ManagedItem, Registry
from mousemanager.core.types import MouseEventData, Operation, Region, ScrollData, Selection
from mousemanager.ui.hosts.host_base import (
    MoveContext,
    PressContext,
    ReleaseContext,
    ScrollContext,
)

__all__ = ["DispatchState", "MouseDispatcher"]

log = logging.getLogger(__name__)


@dataclass
class DispatchState:
    """Mutable dispatch state owned by one manager."""

    enabled: bool = False
    is_active: bool = False
    selection_type: Selection = Selection.NONE
    pointer_position: tuple[float, float] = (float("nan"), float("nan"))
    current_target: Optional[ManagedItem] = None
    target_region: Optional[Region] = None
    scroll_data: Optional[ScrollData] = None

    def reset(self) -> None:
        self.is_active = False
        self.selection_type = Selection.NONE
        self.current_target = None
        self.target_region = None
        self.scroll_data = None


class MouseDispatcher:
    """Drive operation sequencing for one window.

    ``Idle`` and ``Active`` (a button is held) are the only states. Callback
    exceptions propagate to the caller; state transitions that must survive
    them are committed in ``finally`` blocks.
    """

    def __init__(
        self,
        registry: Registry,
        resolver: HitResolver,
        *,
        refresh: Callable[[], None] | None = None,
        trace: bool = False,
    ) -> None:
        self._registry = registry
        self._resolver = resolver
        self._refresh = refresh or (lambda: None)
        self._trace = trace
        self.state = DispatchState()

    # ------------------------------------------------------------------ entry points
    def button_down(self, ctx: PressContext) -> None:
        state = self.state
        if not state.enabled or state.is_active:
            return
        state.pointer_position = (ctx.x_px, ctx.y_px)
        state.selection_type = ctx.selection
        state.scroll_data = None

        item, region = self._resolver.resolve_click_target(ctx.current_object)
        if item is None:
            item, region = self._resolver.resolve_hover_target(state.pointer_position)
        state.current_target, state.target_region = item, region
        if item is None:
            return

        state.is_active = True
        self._dispatch(Operation.CLICK)
        self._refresh()

    def motion(self, ctx: MoveContext) -> None:
        state = self.state
        if not state.enabled:
            return
        state.pointer_position = (ctx.x_px, ctx.y_px)
        if state.is_active:
            self._dispatch(Operation.DRAG)
        else:
            state.scroll_data = None
            self._resolve_hover()
            self._dispatch(Operation.HOVER)
        self._refresh()

    def button_up(self, ctx: ReleaseContext) -> None:
        state = self.state
        if not state.enabled or not state.is_active:
            return
        state.pointer_position = (ctx.x_px, ctx.y_px)
        try:
            self._dispatch(Operation.DRAG)
            self._dispatch(Operation.RELEASE)
        finally:
            state.is_active = False
            state.selection_type = Selection.NONE
        self._resolve_hover()
        self._dispatch(Operation.HOVER)
        self._refresh()

    def scroll(self, ctx: ScrollContext) -> None:
        state = self.state
        if not state.enabled or state.is_active:
            return
        state.pointer_position = (ctx.x_px, ctx.y_px)
        state.scroll_data = ScrollData(delta_y=ctx.delta_y, step=ctx.step, button=ctx.button)
        self._resolve_hover()
        self._dispatch(Operation.SCROLL)
        self._refresh()

    # ------------------------------------------------------------------ helpers
    def _resolve_hover(self) -> None:
        state = self.state
        state.current_target, state.target_region = self._resolver.resolve_hover_target(
            state.pointer_position
        )

    def _event_data(self, operation: Operation, region: Optional[Region]) -> MouseEventData:
        state = self.state
        return MouseEventData(
            operation=operation,
            selection_type=state.selection_type,
            pointer_position=state.pointer_position,
            target_region=region,
            scroll_data=state.scroll_data if operation is Operation.SCROLL else None,
        )

    def _dispatch(self, operation: Operation) -> None:
        state = self.state
        target = state.current_target
        if target is None:
            default_hover = self._registry.default_hover
            if operation is Operation.HOVER and default_hover is not None:
                if self._trace:
                    log.debug("dispatch hover -> default %s", default_hover.name)
                default_hover(None, self._event_data(operation, None))
            return

        # The target may have been removed (or re-registered) by an earlier callback.
        item = self._registry.get(target.handle)
        if item is None:
            return
        callback = item.table.lookup(operation, state.selection_type)
        if callback is None:
            return
        if self._trace:
            log.debug(
                "dispatch %s/%s -> %s on %r",
                operation.value,
                state.selection_type.value,
                callback.name,
                item.handle,
            )
        callback(item.handle, self._event_data(operation, state.target_region))
