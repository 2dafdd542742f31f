# MouseManager
# Copyright © 2025 Osvaldo J. Vega Rodríguez
# Licensed under CC BY-NC-SA 4.0 International
# http://creativecommons.org/licenses/by-nc-sa/4.0/

"""Per-item callback tables.

Every operation owns one slot. Slots come in three shapes and the shape is
fixed per operation kind: ``hover``/``scroll`` hold at most one callback
(:class:`DirectSlot`), ``click``/``drag``/``release`` hold one callback per
selection type (:class:`SelectionSlot`). An unset slot is :data:`EMPTY`.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, Optional, Union

from mousemanager.core.errors import InvalidCallbackError
from mousemanager.core.types import Operation, Selection

__all__ = [
    "BoundCallback",
    "CallbackSlot",
    "CallbackTable",
    "DirectSlot",
    "EMPTY",
    "EmptySlot",
    "SelectionSlot",
    "coerce_callback",
    "is_callback_value",
]


@dataclass(frozen=True)
class BoundCallback:
    """A callable plus extra positional arguments appended on every call."""

    func: Callable[..., Any]
    args: tuple[Any, ...] = ()

    def __call__(self, target: Any, event_data: Any) -> Any:
        return self.func(target, event_data, *self.args)

    @property
    def name(self) -> str:
        label = getattr(self.func, "__qualname__", None) or getattr(self.func, "__name__", None)
        if label is None:
            label = repr(self.func)
        if self.args:
            return f"{label}(+{len(self.args)} args)"
        return label


def is_callback_value(value: Any) -> bool:
    """Return whether ``value`` is in callback position (callable, bound tuple or None)."""
    if value is None or callable(value):
        return True
    return isinstance(value, tuple) and bool(value) and callable(value[0])


def coerce_callback(value: Any) -> Optional[BoundCallback]:
    """Normalise a user callback value.

    Accepts ``None`` (clears a slot), a callable, a ``(callable, *extra)``
    tuple, or an existing :class:`BoundCallback`.
    """
    if value is None:
        return None
    if isinstance(value, BoundCallback):
        return value
    if callable(value):
        return BoundCallback(value)
    if isinstance(value, tuple) and value and callable(value[0]):
        return BoundCallback(value[0], tuple(value[1:]))
    raise InvalidCallbackError(f"Callback argument is invalid: {value!r}")


@dataclass(frozen=True)
class EmptySlot:
    """Slot with no callback."""

    def lookup(self, selection: Selection) -> Optional[BoundCallback]:
        return None

    def __bool__(self) -> bool:
        return False


EMPTY = EmptySlot()


@dataclass(frozen=True)
class DirectSlot:
    """Single callback, independent of the selection type."""

    callback: BoundCallback

    def lookup(self, selection: Selection) -> Optional[BoundCallback]:
        return self.callback


@dataclass(frozen=True)
class SelectionSlot:
    """One callback per selection type."""

    callbacks: Mapping[Selection, BoundCallback] = field(default_factory=dict)

    def lookup(self, selection: Selection) -> Optional[BoundCallback]:
        return self.callbacks.get(selection)


CallbackSlot = Union[EmptySlot, DirectSlot, SelectionSlot]


class CallbackTable:
    """Mapping of operation -> slot for one managed item."""

    def __init__(self, slots: Mapping[Operation, CallbackSlot] | None = None) -> None:
        self._slots: dict[Operation, CallbackSlot] = {op: EMPTY for op in Operation}
        if slots:
            self._slots.update(slots)

    def copy(self) -> "CallbackTable":
        return CallbackTable(self._slots)

    def slot(self, operation: Operation) -> CallbackSlot:
        return self._slots[operation]

    def assign(
        self,
        operation: Operation,
        selections: Iterable[Selection],
        callback: Optional[BoundCallback],
    ) -> None:
        """Overwrite (or clear, with ``None``) the slot(s) for ``operation``."""
        if not operation.selection_keyed:
            self._slots[operation] = DirectSlot(callback) if callback is not None else EMPTY
            return

        current = self._slots[operation]
        merged = dict(current.callbacks) if isinstance(current, SelectionSlot) else {}
        for selection in selections:
            if callback is None:
                merged.pop(selection, None)
            else:
                merged[selection] = callback
        self._slots[operation] = SelectionSlot(merged) if merged else EMPTY

    def lookup(self, operation: Operation, selection: Selection) -> Optional[BoundCallback]:
        return self._slots[operation].lookup(selection)

    @property
    def active_on_hover(self) -> bool:
        return bool(self._slots[Operation.HOVER]) or bool(self._slots[Operation.SCROLL])

    def is_empty(self) -> bool:
        return not any(self._slots.values())

    def entries(self) -> list[tuple[Operation, Optional[Selection], BoundCallback]]:
        """Flatten the table into ``(operation, selection, callback)`` rows."""
        rows: list[tuple[Operation, Optional[Selection], BoundCallback]] = []
        for operation in Operation:
            slot = self._slots[operation]
            if isinstance(slot, DirectSlot):
                rows.append((operation, None, slot.callback))
            elif isinstance(slot, SelectionSlot):
                for selection in Selection.choices():
                    callback = slot.callbacks.get(selection)
                    if callback is not None:
                        rows.append((operation, selection, callback))
        return rows
