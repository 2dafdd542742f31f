"""Qt bootstrap for running a demo inside a PyQt5 main window."""

from __future__ import annotations

import logging
import os
import sys

from matplotlib.backends.backend_qt5agg import FigureCanvasQTAgg
from matplotlib.figure import Figure
from PyQt5.QtCore import QCoreApplication, Qt
from PyQt5.QtWidgets import QApplication, QMainWindow

from mousemanager.demos import DEMOS

log = logging.getLogger(__name__)

# Ensure HiDPI scaling is enabled before the QApplication is instantiated
os.environ.setdefault("QT_AUTO_SCREEN_SCALE_FACTOR", "1")


class DemoLauncher:
    """Create the Qt application and a window hosting one demo figure."""

    def __init__(self, demo: str, *, size: tuple[int, int] = (900, 700)) -> None:
        if demo not in DEMOS:
            raise ValueError(f"Unknown demo {demo!r}; choose from {', '.join(DEMOS)}")

        QCoreApplication.setApplicationName("MouseManager")
        self.app = QApplication.instance() or QApplication(sys.argv)

        self.window = QMainWindow()
        self.window.setAttribute(Qt.WA_DeleteOnClose, True)
        self.window.setWindowTitle(f"{demo.capitalize()} Demo")
        self.window.resize(*size)

        self.figure = Figure()
        self.canvas = FigureCanvasQTAgg(self.figure)
        self.window.setCentralWidget(self.canvas)

        self.manager = DEMOS[demo](self.figure)
        log.info("Launched %s demo\n%s", demo, self.manager.describe())

    def run(self) -> int:
        """Show the window and block until the event loop exits."""
        self.window.show()
        return self.app.exec_()
