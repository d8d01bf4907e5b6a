"""
Background Dataset Loader (Threading)
=====================================
QThread subclass reading the CSV dataset off the UI thread.

Why is this file needed?
------------------------
1. Responsiveness: a 10 000 row CSV is read and normalized while the synthetic
   sample is already on screen.
2. Signals: the worker never touches the session. It hands the finished record
   list back through a Qt signal, and the slot (UI thread) swaps the dataset.

Classes:
    DatasetLoader: Reads and normalizes the dataset file.
"""
import logging
from typing import Optional

import numpy as np
from PySide6.QtCore import QThread, Signal

from scatterexplorer.model.dataset import DataLoadError, load_dataset

logger = logging.getLogger(__name__)


class DatasetLoader(QThread):
    # Signals to update the UI from the background
    loaded = Signal(object)  # list[Record]
    failed = Signal(str)

    def __init__(self, path: str, rng: Optional[np.random.Generator] = None, parent=None):
        super().__init__(parent)
        self.path = path
        self.rng = rng

    def run(self):
        try:
            records = load_dataset(self.path, rng=self.rng)
        except DataLoadError as e:
            logger.warning(f"CSV load failed, using sample data. Error: {e}")
            self.failed.emit(str(e))
            return
        except Exception as e:
            logger.exception("Unexpected error while loading the dataset")
            self.failed.emit(str(e))
            return

        self.loaded.emit(records)
