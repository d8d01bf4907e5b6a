"""
Main Application Window
=======================
The primary GUI container: control panel on the left, scatter plot on the right.

Why is this file needed?
------------------------
1. Layout: It organizes the high-level visual structure of the application.
2. Routing: It connects control-panel signals to session updates and every
   session change to a full redraw of the plot.
"""
from __future__ import annotations

import logging
from typing import List, Optional

import numpy as np
from PySide6.QtCore import Qt
from PySide6.QtWidgets import QMainWindow, QSplitter

from scatterexplorer import config
from scatterexplorer.app.application import VISIBLE_APP_NAME
from scatterexplorer.controller.loader import DatasetLoader
from scatterexplorer.model.dataset import generate_synthetic
from scatterexplorer.model.fields import Record
from scatterexplorer.model.state import DataSource, SessionState
from scatterexplorer.view.control_panel import ControlPanel
from scatterexplorer.view.scatter_widget import ScatterPlotWidget

logger = logging.getLogger(__name__)

STATUS_LOADING = "🔄 Loading data..."
STATUS_SAMPLE = "⚠️ Using sample data (CSV not available)"


def status_loaded(count: int) -> str:
    return f"✅ Using real dataset: {count} records"


class MainWindow(QMainWindow):
    def __init__(self, session: SessionState, dataset_path: str = config.DEFAULT_DATASET_PATH,
                 rng: Optional[np.random.Generator] = None) -> None:
        super().__init__()
        self.session = session
        self.dataset_path = dataset_path
        self.rng = rng
        self.loader: Optional[DatasetLoader] = None

        self.setWindowTitle(VISIBLE_APP_NAME)
        self.resize(1200, 700)

        # --- LEFT: controls, RIGHT: plot ---
        splitter = QSplitter(Qt.Orientation.Horizontal)
        self.setCentralWidget(splitter)

        self.panel = ControlPanel(self.session.selection)
        self.plot = ScatterPlotWidget()
        splitter.addWidget(self.panel)
        splitter.addWidget(self.plot)
        splitter.setStretchFactor(0, 0)
        splitter.setStretchFactor(1, 1)

        # --- SIGNAL CONNECTIONS ---
        self.panel.x_field_changed.connect(self.on_x_field_changed)
        self.panel.y_field_changed.connect(self.on_y_field_changed)
        self.panel.color_field_changed.connect(self.on_color_field_changed)
        self.panel.trend_toggled.connect(self.on_trend_toggled)
        self.panel.reset_requested.connect(self.on_reset_requested)

        self.plot.statistics_changed.connect(self.panel.set_statistics)
        # reset animation done -> rebuild everything for a consistent view
        self.plot.reset_completed.connect(self.redraw)

        # Sample data first so the view is never empty
        self.session.replace_records(generate_synthetic(config.SAMPLE_SIZE, rng=self.rng), DataSource.SAMPLE)
        self.redraw()

    # --- DATA ---
    def start_loading(self) -> None:
        """Read the CSV in the background; the sample stays on screen meanwhile."""
        self.panel.set_status(STATUS_LOADING)
        self.loader = DatasetLoader(self.dataset_path, rng=self.rng, parent=self)
        self.loader.loaded.connect(self.on_dataset_loaded)
        self.loader.failed.connect(self.on_dataset_failed)
        self.loader.start()

    def on_dataset_loaded(self, records: List[Record]) -> None:
        self.session.replace_records(records, DataSource.FILE)
        self.panel.set_status(status_loaded(len(records)))
        self.redraw()

    def on_dataset_failed(self, message: str) -> None:
        logger.warning(f"Keeping sample data: {message}")
        self.panel.set_status(STATUS_SAMPLE)
        self.redraw()

    # --- SELECTION ---
    def on_x_field_changed(self, key: str) -> None:
        self.session.set_x_field(key)
        self.redraw()

    def on_y_field_changed(self, key: str) -> None:
        self.session.set_y_field(key)
        self.redraw()

    def on_color_field_changed(self, key: str) -> None:
        self.session.set_color_field(key)
        self.redraw()

    def on_trend_toggled(self) -> None:
        self.session.toggle_trend()
        self.redraw()

    def on_reset_requested(self) -> None:
        self.plot.reset_view(animate=True)

    def redraw(self) -> None:
        self.plot.draw(self.session.records, self.session.selection, self.session.show_trend)

    def closeEvent(self, event) -> None:
        if self.loader is not None and self.loader.isRunning():
            self.loader.wait()
        super().closeEvent(event)
