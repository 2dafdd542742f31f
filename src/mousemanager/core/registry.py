# MouseManager
# Copyright © 2025 Osvaldo J. Vega Rodríguez
# Licensed under CC BY-NC-SA 4.0 International
# http://creativecommons.org/licenses/by-nc-sa/4.0/

"""Registry of managed graphics objects and registration argument parsing."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator, Sequence
from dataclasses import dataclass, field
from typing import Any, Optional

from mousemanager.core.callbacks import (
    BoundCallback,
    CallbackTable,
    coerce_callback,
    is_callback_value,
)
from mousemanager.core.errors import (
    AmbiguousOrInvalidArgumentError,
    InvalidCallbackError,
    InvalidTargetError,
    MalformedArgumentListError,
)
from mousemanager.core.types import SELECTION_KEYED, Operation, Selection

__all__ = [
    "CallbackSpec",
    "ManagedItem",
    "Registry",
    "parse_callback_args",
]

log = logging.getLogger(__name__)

_OPERATION_TOKENS = {op.value: op for op in Operation}
_SELECTION_TOKENS = {sel.value: sel for sel in Selection.choices()}

_OPERATION_AXIS = "operation"
_SELECTION_AXIS = "selection"


def _valid_options() -> str:
    return "operations: {} | selections: {}".format(
        " ".join(_OPERATION_TOKENS), " ".join(_SELECTION_TOKENS)
    )


def _classify(arg: Any) -> tuple[str, tuple[Any, ...]]:
    """Return ``(axis, values)`` for one operation/selection argument."""
    if isinstance(arg, str):
        tokens: list[Any] = [arg]
    elif isinstance(arg, (set, frozenset, list, tuple)):
        tokens = list(arg)
        if not tokens:
            raise AmbiguousOrInvalidArgumentError("Operation/selection collections must not be empty.")
    else:
        raise AmbiguousOrInvalidArgumentError(
            "Input argument must be a string, a collection of strings, or a callback; "
            f"got {type(arg).__name__}."
        )

    axes: set[str] = set()
    values: list[Any] = []
    for token in tokens:
        if not isinstance(token, str):
            raise AmbiguousOrInvalidArgumentError(
                f"Collection arguments must contain strings only; got {token!r}."
            )
        key = token.strip().lower()
        is_operation = key in _OPERATION_TOKENS
        is_selection = key in _SELECTION_TOKENS
        if is_operation == is_selection:
            raise AmbiguousOrInvalidArgumentError(
                f"Unrecognised token {token!r}. Valid options are {_valid_options()}."
            )
        if is_operation:
            axes.add(_OPERATION_AXIS)
            values.append(_OPERATION_TOKENS[key])
        else:
            axes.add(_SELECTION_AXIS)
            values.append(_SELECTION_TOKENS[key])

    if len(axes) > 1:
        raise AmbiguousOrInvalidArgumentError(
            f"Argument {arg!r} mixes operation and selection tokens."
        )
    return axes.pop(), tuple(dict.fromkeys(values))


def _members(values: Any, vocabulary: dict[str, Any]) -> tuple[Any, ...]:
    """Map enum members or their string values onto ``vocabulary`` members."""
    if isinstance(values, str):
        values = (values,)
    members = []
    for value in values:
        member = vocabulary.get(value.strip().lower()) if isinstance(value, str) else None
        if member is None:
            raise AmbiguousOrInvalidArgumentError(
                f"Unrecognised token {value!r}. Valid options are {_valid_options()}."
            )
        members.append(member)
    return tuple(dict.fromkeys(members))


@dataclass(frozen=True)
class CallbackSpec:
    """One ``{operations, selections, callback}`` registration entry.

    ``callback=None`` clears the covered slots.
    """

    operations: tuple[Operation, ...]
    selections: tuple[Selection, ...]
    callback: Optional[BoundCallback] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "operations", _members(self.operations, _OPERATION_TOKENS))
        object.__setattr__(self, "selections", _members(self.selections, _SELECTION_TOKENS))
        object.__setattr__(self, "callback", coerce_callback(self.callback))

    @classmethod
    def of(
        cls,
        operations: Any = None,
        selections: Any = None,
        callback: Any = None,
    ) -> "CallbackSpec":
        """Build an entry from loose user values (strings, collections or ``None``).

        Omitted selections cover every selection. Omitted operations cover every
        operation, or only the selection-keyed ones when selections were given.
        """
        ops: Optional[tuple[Operation, ...]] = None
        sels: Optional[tuple[Selection, ...]] = None
        if operations is not None:
            axis, values = _classify(operations)
            if axis != _OPERATION_AXIS:
                raise AmbiguousOrInvalidArgumentError(f"{operations!r} is not an operation.")
            ops = values
        if selections is not None:
            axis, values = _classify(selections)
            if axis != _SELECTION_AXIS:
                raise AmbiguousOrInvalidArgumentError(f"{selections!r} is not a selection type.")
            sels = values
        return cls._from_axes(ops, sels, coerce_callback(callback))

    @classmethod
    def _from_axes(
        cls,
        operations: Optional[tuple[Operation, ...]],
        selections: Optional[tuple[Selection, ...]],
        callback: Optional[BoundCallback],
    ) -> "CallbackSpec":
        if operations is None:
            if selections is None:
                operations = tuple(Operation)
            else:
                operations = tuple(op for op in Operation if op in SELECTION_KEYED)
        if selections is None:
            selections = Selection.choices()
        return cls(operations=operations, selections=selections, callback=callback)


def parse_callback_args(args: Sequence[Any]) -> list[CallbackSpec]:
    """Parse ``[operations], [selections], callback`` groups into entries.

    Each group holds up to two operation/selection arguments (either order,
    each axis at most once) terminated by a callback value.
    """
    if not args:
        raise MalformedArgumentListError("Input argument list does not have the correct format.")

    specs: list[CallbackSpec] = []
    pending: dict[str, tuple[Any, ...]] = {}
    for arg in args:
        if is_callback_value(arg):
            specs.append(
                CallbackSpec._from_axes(
                    pending.get(_OPERATION_AXIS),
                    pending.get(_SELECTION_AXIS),
                    coerce_callback(arg),
                )
            )
            pending = {}
            continue
        if len(pending) == 2:
            raise MalformedArgumentListError(
                "Input argument list does not have the correct format: "
                "expected a callback after an operation and a selection."
            )
        axis, values = _classify(arg)
        if axis in pending:
            raise AmbiguousOrInvalidArgumentError(
                f"The {axis} argument was given twice before a callback ({arg!r})."
            )
        pending[axis] = values

    if pending:
        raise MalformedArgumentListError(
            "Input argument list does not have the correct format: it must end with a callback."
        )
    return specs


@dataclass(eq=False)
class ManagedItem:
    """A graphics object under mouse management and its callback table."""

    handle: Any
    table: CallbackTable = field(default_factory=CallbackTable)

    @property
    def active_on_hover(self) -> bool:
        return self.table.active_on_hover


class Registry:
    """Ordered set of managed items keyed by object identity."""

    def __init__(self, validate_target: Callable[[Any], bool] | None = None) -> None:
        self._validate_target = validate_target
        self._items: dict[int, ManagedItem] = {}
        self._default_hover: Optional[BoundCallback] = None

    # ------------------------------------------------------------------ queries
    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[ManagedItem]:
        return iter(list(self._items.values()))

    def __contains__(self, handle: Any) -> bool:
        return self.get(handle) is not None

    def get(self, handle: Any) -> Optional[ManagedItem]:
        item = self._items.get(id(handle))
        if item is None or item.handle is not handle:
            return None
        return item

    def handles(self) -> tuple[Any, ...]:
        return tuple(item.handle for item in self._items.values())

    @property
    def default_hover(self) -> Optional[BoundCallback]:
        return self._default_hover

    # ------------------------------------------------------------------ mutation
    def register(self, handle: Any, specs: Iterable[CallbackSpec]) -> Optional[ManagedItem]:
        """Apply ``specs`` to ``handle``'s table; return the entry, or ``None`` if it emptied."""
        if self._validate_target is not None and not self._validate_target(handle):
            raise InvalidTargetError("Argument must be a valid graphics object in this window.")

        existing = self.get(handle)
        table = existing.table.copy() if existing is not None else CallbackTable()
        for spec in specs:
            for operation in spec.operations:
                table.assign(operation, spec.selections, spec.callback)

        if table.is_empty():
            if existing is not None:
                self.unregister(handle)
            return None
        if existing is not None:
            existing.table = table
            return existing

        item = ManagedItem(handle=handle, table=table)
        self._items[id(handle)] = item
        log.debug("Registered %r (%d managed)", handle, len(self._items))
        return item

    def unregister(self, handle: Any) -> bool:
        """Remove ``handle``; return ``False`` if it was not registered."""
        if self.get(handle) is None:
            return False
        del self._items[id(handle)]
        log.debug("Unregistered %r (%d managed)", handle, len(self._items))
        return True

    def purge(self, is_alive: Callable[[Any], bool]) -> list[Any]:
        """Drop every item whose handle fails ``is_alive``; return the dropped handles."""
        dead = [item.handle for item in self._items.values() if not is_alive(item.handle)]
        for handle in dead:
            self.unregister(handle)
        return dead

    def clear(self) -> None:
        self._items.clear()
        self._default_hover = None

    def set_default_hover(self, callback: Any) -> None:
        if not is_callback_value(callback):
            raise InvalidCallbackError("Function handle argument is invalid.")
        self._default_hover = coerce_callback(callback)
