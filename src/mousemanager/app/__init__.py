"""Application bootstrap helpers."""

from importlib import import_module

__all__ = ["DemoLauncher", "all_enabled", "is_enabled", "reload"]


def __getattr__(name: str):
    if name == "DemoLauncher":
        module = import_module("mousemanager.app.launcher")
        value = module.DemoLauncher
    elif name in {"all_enabled", "is_enabled", "reload"}:
        module = import_module("mousemanager.app.flags")
        value = getattr(module, name)
    else:
        raise AttributeError(f"module 'mousemanager.app' has no attribute {name!r}")
    globals()[name] = value
    return value
