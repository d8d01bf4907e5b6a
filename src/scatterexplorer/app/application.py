import os
import sys

import pyqtgraph as pg
from PySide6.QtCore import QCoreApplication
from PySide6.QtWidgets import QApplication

ORG_ID = "scatterexplorer"
APP_ID = "scatter-explorer"

VISIBLE_APP_NAME = "Scatter Explorer"


def create_app(argv: list[str] | None = None) -> QApplication:
    """Create and configure the QApplication instance (or reuse a running one)."""
    os.environ.setdefault("QT_ENABLE_HIGHDPI_SCALING", "1")

    QCoreApplication.setOrganizationName(ORG_ID)
    QCoreApplication.setApplicationName(APP_ID)

    app = QApplication.instance() or QApplication(argv if argv is not None else sys.argv)
    app.setApplicationDisplayName(VISIBLE_APP_NAME)

    pg.setConfigOption("background", "w")
    pg.setConfigOption("foreground", "k")
    pg.setConfigOptions(antialias=True)

    return app
