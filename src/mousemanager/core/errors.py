# MouseManager
# Copyright © 2025 Osvaldo J. Vega Rodríguez
# Licensed under CC BY-NC-SA 4.0 International
# http://creativecommons.org/licenses/by-nc-sa/4.0/

"""Exceptions raised synchronously by the mouse manager API."""

from __future__ import annotations

__all__ = [
    "MouseManagerError",
    "InvalidTargetError",
    "InvalidCallbackError",
    "AmbiguousOrInvalidArgumentError",
    "MalformedArgumentListError",
    "ManagerDeletedError",
]


class MouseManagerError(Exception):
    """Base class for every error raised by the manager."""


class InvalidTargetError(MouseManagerError, ValueError):
    """Raised when a graphics object is invalid or lives in another window."""


class InvalidCallbackError(MouseManagerError, TypeError):
    """Raised when a non-empty callback value is not invocable."""


class AmbiguousOrInvalidArgumentError(MouseManagerError, ValueError):
    """Raised for unknown, mixed or repeated operation/selection tokens."""


class MalformedArgumentListError(MouseManagerError, ValueError):
    """Raised when a registration argument list is not terminated by a callback."""


class ManagerDeletedError(MouseManagerError, RuntimeError):
    """Raised when a manager is used after its window was destroyed."""

