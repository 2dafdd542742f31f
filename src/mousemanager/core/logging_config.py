# MouseManager
# Copyright © 2025 Osvaldo J. Vega Rodríguez
# Licensed under CC BY-NC-SA 4.0 International
# http://creativecommons.org/licenses/by-nc-sa/4.0/

"""Logging configuration for applications built on the mouse manager."""

from __future__ import annotations

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

PACKAGE_LOGGER = "mousemanager"
LOG_FILENAME = "mousemanager.log"

_CONSOLE_FORMAT = "%(levelname)-8s %(name)s: %(message)s"
_FILE_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s:%(lineno)d] %(message)s"
_MAX_BYTES = 5 * 1024 * 1024
_BACKUPS = 3


def setup_logging(
    app_name: str = "MouseManager",
    console_level: int = logging.INFO,
    *,
    log_to_file: bool = False,
    log_dir: Path | None = None,
) -> Path | None:
    """
    Route the ``mousemanager`` logger to stdout and, optionally, a rotating file.

    The package logger is reset on every call, so entry points can call this
    more than once (for example after parsing ``--log-level``).

    Args:
        app_name: Application name used for the default log directory
        console_level: Minimum level shown on the console
        log_to_file: Also keep DEBUG records in ``mousemanager.log``
        log_dir: Directory for the log file instead of the platform default

    Returns:
        The log directory when a file handler was added, otherwise None
    """
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()
    package_logger.setLevel(logging.DEBUG)
    package_logger.propagate = False
    package_logger.addHandler(_console_handler(console_level))

    if not log_to_file:
        return None

    directory = log_dir or default_log_directory(app_name)
    directory.mkdir(parents=True, exist_ok=True)
    package_logger.addHandler(_file_handler(directory / LOG_FILENAME))
    package_logger.info("%s writing log file %s", app_name, directory / LOG_FILENAME)
    return directory


def _console_handler(level: int) -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(_CONSOLE_FORMAT))
    return handler


def _file_handler(path: Path) -> logging.Handler:
    handler = RotatingFileHandler(path, maxBytes=_MAX_BYTES, backupCount=_BACKUPS, encoding="utf-8")
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    return handler


def default_log_directory(app_name: str) -> Path:
    """Per-user log directory following each platform's convention."""
    if sys.platform == "win32":
        root = os.environ.get("LOCALAPPDATA") or Path.home() / "AppData" / "Local"
        return Path(root) / app_name / "logs"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Logs" / app_name
    root = os.environ.get("XDG_STATE_HOME") or Path.home() / ".local" / "state"
    return Path(root) / app_name / "logs"
