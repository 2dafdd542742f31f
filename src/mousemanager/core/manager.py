# MouseManager
# Copyright © 2025 Osvaldo J. Vega Rodríguez
# Licensed under CC BY-NC-SA 4.0 International
# http://creativecommons.org/licenses/by-nc-sa/4.0/

"""Public facade that binds a registry and dispatcher to one host window."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any, Optional

from mousemanager.app.flags import is_enabled
from mousemanager.core.dispatcher import MouseDispatcher
from mousemanager.core.errors import AmbiguousOrInvalidArgumentError, ManagerDeletedError
from mousemanager.core.hit_resolver import HitResolver
from mousemanager.core.registry import CallbackSpec, ManagedItem, Registry, parse_callback_args
from mousemanager.core.types import Selection
from mousemanager.ui.hosts import host_for
from mousemanager.ui.hosts.host_base import HostHandlers, HostWindow

__all__ = ["MouseManager"]

log = logging.getLogger(__name__)

_STATE_STRINGS = {"on": True, "off": False}


class MouseManager:
    """Manage mouse-based interactions with the graphics objects of one window.

    Typical use with matplotlib::

        manager = MouseManager(fig)
        manager.add_item(ax, "normal", pan_image, "scroll", zoom_image,
                         "click", "open", reset_image)
        manager.enable(True)

    Callbacks are invoked as ``callback(item, event_data, *bound_args)`` where
    ``event_data`` is a :class:`~mousemanager.core.types.MouseEventData`.
    """

    def __init__(
        self,
        window: Any,
        *,
        refresh: Optional[bool] = None,
        trace_dispatch: Optional[bool] = None,
    ) -> None:
        self.host: HostWindow = host_for(window)
        self.figure = getattr(self.host, "figure", window)
        self._deleted = False

        do_refresh = is_enabled("refresh") if refresh is None else bool(refresh)
        do_trace = is_enabled("trace_dispatch") if trace_dispatch is None else bool(trace_dispatch)

        self._registry = Registry(validate_target=self.host.is_valid_item)
        self._resolver = HitResolver(self._registry, self.host.item_region)
        self.dispatcher = MouseDispatcher(
            self._registry,
            self._resolver,
            refresh=self.host.request_refresh if do_refresh else None,
            trace=do_trace,
        )
        self._handlers = HostHandlers(
            on_press=self.dispatcher.button_down,
            on_motion=self.dispatcher.motion,
            on_release=self.dispatcher.button_up,
            on_scroll=self.dispatcher.scroll,
        )

        self.host.on_destroyed(self.delete)
        self.host.on_slots_changed(self._on_slots_changed)
        self.host.on_items_changed(self._on_items_changed)

    # ------------------------------------------------------------------ properties
    @property
    def enabled(self) -> bool:
        return self.dispatcher.state.enabled

    @property
    def is_active(self) -> bool:
        return self.dispatcher.state.is_active

    @property
    def selection_type(self) -> Selection:
        return self.dispatcher.state.selection_type

    @property
    def items(self) -> tuple[Any, ...]:
        """Managed graphics objects in registration order."""
        return self._registry.handles()

    @property
    def deleted(self) -> bool:
        return self._deleted

    # ------------------------------------------------------------------ public API
    def enable(self, new_state: bool | str) -> None:
        """Enable or disable mouse control (``True``/``False`` or ``"on"``/``"off"``)."""
        self._ensure_alive()
        if isinstance(new_state, str):
            key = new_state.strip().lower()
            if key not in _STATE_STRINGS:
                raise AmbiguousOrInvalidArgumentError("Input must be either 'on' or 'off'.")
            new_state = _STATE_STRINGS[key]
        new_state = bool(new_state)
        if new_state == self.enabled:
            return
        if new_state:
            self.host.install_handlers(self._handlers)
            self.dispatcher.state.enabled = True
            log.debug("Mouse manager enabled for %r", self.figure)
        else:
            self._disable()

    def add_item(self, item: Any, *args: Any) -> Optional[ManagedItem]:
        """Add or update interactive control for a graphics object.

        ``args`` is a sequence of ``[operations], [selections], callback``
        groups. Operations are ``click drag release hover scroll``; selections
        are ``normal extend alt open``. Either may be a single string or a
        collection of strings; an omitted axis covers all of its values. A
        ``None`` callback clears the covered slots, and an item left without
        callbacks stops being managed.
        """
        self._ensure_alive()
        specs = parse_callback_args(args)
        return self._registry.register(item, specs)

    def add_specs(self, item: Any, specs: Iterable[CallbackSpec]) -> Optional[ManagedItem]:
        """Structured form of :meth:`add_item` taking :class:`CallbackSpec` entries."""
        self._ensure_alive()
        return self._registry.register(item, list(specs))

    def remove_item(self, item: Any) -> bool:
        """Stop managing ``item``. Removing an unmanaged item is a no-op."""
        self._ensure_alive()
        return self._registry.unregister(item)

    def set_default_hover(self, callback: Any) -> None:
        """Set the callback used when hovering over no managed item (``None`` clears it)."""
        self._ensure_alive()
        self._registry.set_default_hover(callback)

    def item_destroyed(self, item: Any) -> None:
        """Notify the manager that ``item`` was destroyed by its owner."""
        if self._deleted:
            return
        if self._registry.unregister(item):
            log.debug("Purged destroyed item %r", item)

    def delete(self) -> None:
        """Tear the manager down; called automatically when the window is destroyed."""
        if self._deleted:
            return
        if self.enabled:
            self._disable()
        self._registry.clear()
        self._deleted = True
        log.debug("Mouse manager for %r deleted", self.figure)

    def describe(self) -> str:
        """Return a text table of the managed items and their callbacks."""
        lines = [
            f"MouseManager for {self.figure!r} "
            f"(enabled: {self.enabled}, items: {len(self._registry)})"
        ]
        for index, item in enumerate(self._registry):
            suffix = "  [hover]" if item.active_on_hover else ""
            lines.append(f"  [{index}] {item.handle!r}{suffix}")
            for operation, selection, callback in item.table.entries():
                sel = selection.value if selection is not None else "-"
                lines.append(f"      {operation.value:<8} {sel:<7} {callback.name}")
        default_hover = self._registry.default_hover
        if default_hover is not None:
            lines.append(f"  default hover: {default_hover.name}")
        return "\n".join(lines)

    def __repr__(self) -> str:
        state = "deleted" if self._deleted else ("enabled" if self.enabled else "disabled")
        return f"<MouseManager {state} items={len(self._registry)}>"

    # ------------------------------------------------------------------ host notifications
    def _disable(self) -> None:
        self.host.remove_handlers()
        self.dispatcher.state.enabled = False
        self.dispatcher.state.reset()
        log.debug("Mouse manager disabled for %r", self.figure)

    def _on_slots_changed(self) -> None:
        if self._deleted or not self.enabled:
            return
        log.warning("Window event slots were replaced externally; disabling mouse manager")
        self._disable()

    def _on_items_changed(self) -> None:
        if self._deleted:
            return
        purged = self._registry.purge(self.host.is_item_alive)
        if purged:
            log.debug("Purged %d destroyed item(s)", len(purged))

    def _ensure_alive(self) -> None:
        if self._deleted:
            raise ManagerDeletedError("The window of this mouse manager has been destroyed.")
