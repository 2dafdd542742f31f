# MouseManager
# Copyright © 2025 Osvaldo J. Vega Rodríguez
# Licensed under CC BY-NC-SA 4.0 International
# http://creativecommons.org/licenses/by-nc-sa/4.0/

"""Host for figures embedded in a Qt widget through ``FigureCanvasQTAgg``."""

from __future__ import annotations

import logging
from typing import Any

from matplotlib.figure import Figure
from PyQt5.QtCore import QObject

from mousemanager.ui.hosts.mpl_host import MplFigureHost

__all__ = ["QtFigureHost"]

log = logging.getLogger(__name__)


class QtFigureHost(MplFigureHost):
    """Matplotlib host that also treats Qt widget destruction as window destruction.

    Qt windows do not always emit matplotlib's ``close_event`` (for example
    when a parent widget is deleted), so the canvas ``destroyed`` signal and,
    optionally, the top-level window's are wired to the destroyed channel.
    """

    def __init__(self, figure: Figure, window: QObject | None = None) -> None:
        super().__init__(figure)
        self._destroyed_emitted = False
        canvas = figure.canvas
        watched: list[Any] = [canvas]
        if window is not None and window is not canvas:
            watched.append(window)
        for obj in watched:
            signal = getattr(obj, "destroyed", None)
            if signal is not None:
                signal.connect(self._handle_qt_destroyed)

    def _handle_close(self, event: Any) -> None:
        if self._destroyed_emitted:
            return
        self._destroyed_emitted = True
        super()._handle_close(event)

    def _handle_qt_destroyed(self, *_args: Any) -> None:
        log.debug("Qt widget hosting %r destroyed", self.figure)
        self._handle_close(None)
