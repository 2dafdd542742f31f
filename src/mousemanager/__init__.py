# MouseManager
# Copyright © 2025 Osvaldo J. Vega Rodríguez
# Licensed under CC BY-NC-SA 4.0 International
# http://creativecommons.org/licenses/by-nc-sa/4.0/

"""Public package interface for the mouse manager."""

from importlib import import_module

from mousemanager.core.callbacks import BoundCallback
from mousemanager.core.errors import (
    AmbiguousOrInvalidArgumentError,
    InvalidCallbackError,
    InvalidTargetError,
    MalformedArgumentListError,
    ManagerDeletedError,
    MouseManagerError,
)
from mousemanager.core.manager import MouseManager
from mousemanager.core.registry import CallbackSpec
from mousemanager.core.types import MouseEventData, Operation, Region, ScrollData, Selection
from mousemanager.ui.hosts import HostWindow, MplFigureHost

__version__ = "0.3.0"

_LAZY_EXPORTS = {
    "QtFigureHost": ("mousemanager.ui.hosts.qt_host", "QtFigureHost"),
    "DemoLauncher": ("mousemanager.app.launcher", "DemoLauncher"),
}


def __getattr__(name: str):
    if name in _LAZY_EXPORTS:
        module_name, attr = _LAZY_EXPORTS[name]
        module = import_module(module_name)
        value = getattr(module, attr)
        globals()[name] = value
        return value
    raise AttributeError(f"module 'mousemanager' has no attribute {name!r}")


__all__ = [
    "MouseManager",
    "CallbackSpec",
    "BoundCallback",
    "MouseEventData",
    "Operation",
    "Selection",
    "Region",
    "ScrollData",
    "HostWindow",
    "MplFigureHost",
    "QtFigureHost",
    "DemoLauncher",
    "MouseManagerError",
    "InvalidTargetError",
    "InvalidCallbackError",
    "AmbiguousOrInvalidArgumentError",
    "MalformedArgumentListError",
    "ManagerDeletedError",
]
