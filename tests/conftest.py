"""
Pytest fixtures for mousemanager tests
"""

from __future__ import annotations

from typing import Any, Callable, Optional

import matplotlib

matplotlib.use("Agg")

import pytest

from mousemanager.app import flags
from mousemanager.core.manager import MouseManager
from mousemanager.core.types import Region, Selection
from mousemanager.ui.hosts.host_base import (
    HostHandlers,
    MoveContext,
    PressContext,
    ReleaseContext,
    ScrollContext,
)


class FakeItem:
    """Stand-in graphics object with a fixed window region."""

    def __init__(self, host: "FakeHost", name: str, region: Optional[Region]) -> None:
        self.host = host
        self.name = name
        self.region = region
        self.alive = True

    def __repr__(self) -> str:
        return f"FakeItem({self.name!r})"


class FakeHost:
    """In-memory host window that records refreshes and replays pointer events."""

    def __init__(self) -> None:
        self.handlers: HostHandlers | None = None
        self.refresh_count = 0
        self.install_count = 0
        self._destroyed: list[Callable[[], None]] = []
        self._slots_changed: list[Callable[[], None]] = []
        self._items_changed: list[Callable[[], None]] = []

    # host protocol ------------------------------------------------------
    def is_valid_item(self, item: Any) -> bool:
        return isinstance(item, FakeItem) and item.host is self and item.alive

    def is_item_alive(self, item: Any) -> bool:
        return self.is_valid_item(item)

    def item_region(self, item: Any) -> Optional[Region]:
        if not self.is_valid_item(item):
            return None
        return item.region

    def request_refresh(self) -> None:
        self.refresh_count += 1

    def install_handlers(self, handlers: HostHandlers) -> None:
        self.handlers = handlers
        self.install_count += 1

    def remove_handlers(self) -> None:
        self.handlers = None

    def on_destroyed(self, handler: Callable[[], None]) -> None:
        self._destroyed.append(handler)

    def on_slots_changed(self, handler: Callable[[], None]) -> None:
        self._slots_changed.append(handler)

    def on_items_changed(self, handler: Callable[[], None]) -> None:
        self._items_changed.append(handler)

    # test drivers ----------------------------------------------------------
    def item(self, name: str, region: tuple[float, float, float, float] | None = None) -> FakeItem:
        return FakeItem(self, name, Region(*region) if region is not None else None)

    def press(self, x: float, y: float, selection: str = "normal", current: Any = None) -> None:
        if self.handlers is not None:
            self.handlers.on_press(PressContext(x, y, Selection(selection), current))

    def move(self, x: float, y: float) -> None:
        if self.handlers is not None:
            self.handlers.on_motion(MoveContext(x, y))

    def release(self, x: float, y: float) -> None:
        if self.handlers is not None:
            self.handlers.on_release(ReleaseContext(x, y))

    def scroll(self, x: float, y: float, delta_y: float = 1.0) -> None:
        if self.handlers is not None:
            button = "up" if delta_y > 0 else "down"
            self.handlers.on_scroll(ScrollContext(x, y, delta_y, step=delta_y, button=button))

    def destroy(self) -> None:
        for handler in list(self._destroyed):
            handler()

    def tamper_slots(self) -> None:
        self.handlers = None
        for handler in list(self._slots_changed):
            handler()

    def destroy_item(self, item: FakeItem) -> None:
        item.alive = False
        for handler in list(self._items_changed):
            handler()


class Recorder:
    """Callable that records ``(target, event_data)`` pairs."""

    def __init__(self, label: str = "recorder", log: list | None = None) -> None:
        self.__name__ = label
        self.calls: list[tuple[Any, Any]] = []
        self._log = log

    def __call__(self, target: Any, event_data: Any, *extra: Any) -> None:
        self.calls.append((target, event_data) if not extra else (target, event_data, *extra))
        if self._log is not None:
            self._log.append((self.__name__, event_data.operation.value, target))

    @property
    def operations(self) -> list[str]:
        return [call[1].operation.value for call in self.calls]


@pytest.fixture(autouse=True)
def _clean_flags(monkeypatch):
    monkeypatch.delenv(flags.ENV_VAR, raising=False)
    flags.reload()
    yield
    flags.reload()


@pytest.fixture
def host() -> FakeHost:
    return FakeHost()


@pytest.fixture
def manager(host) -> MouseManager:
    mgr = MouseManager(host)
    mgr.enable(True)
    return mgr


@pytest.fixture
def make_recorder() -> Callable[..., Recorder]:
    return Recorder
