"""Host window adapters."""

from __future__ import annotations

from importlib import import_module
from typing import Any

from matplotlib.figure import Figure

from mousemanager.core.errors import InvalidTargetError
from mousemanager.ui.hosts.host_base import HostHandlers, HostWindow
from mousemanager.ui.hosts.mpl_host import MplFigureHost

__all__ = ["HostHandlers", "HostWindow", "MplFigureHost", "QtFigureHost", "host_for"]


def _is_qt_canvas(canvas: Any) -> bool:
    module = type(canvas).__module__ or ""
    return module.startswith("matplotlib.backends.backend_qt")


def host_for(window: Any) -> HostWindow:
    """Return a host adapter for ``window`` (a host object or a matplotlib Figure)."""
    if isinstance(window, HostWindow):
        return window
    if isinstance(window, Figure):
        if _is_qt_canvas(window.canvas):
            return import_module("mousemanager.ui.hosts.qt_host").QtFigureHost(window)
        return MplFigureHost(window)
    raise InvalidTargetError("Argument must be a valid figure object.")


def __getattr__(name: str):
    if name == "QtFigureHost":
        value = import_module("mousemanager.ui.hosts.qt_host").QtFigureHost
        globals()[name] = value
        return value
    raise AttributeError(f"module 'mousemanager.ui.hosts' has no attribute {name!r}")
