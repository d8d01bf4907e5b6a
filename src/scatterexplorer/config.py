"""
Configuration & Path Management
===============================
This module serves as the central registry for file paths and global constants.

Why is this file needed?
------------------------
1. Abstraction: It prevents hardcoded paths and magic numbers (plot size,
   zoom limits, animation timings) scattered throughout the code.
2. Deployment: It handles the logic required by PyInstaller (sys._MEIPASS) to
   find the bundled dataset when the app is frozen into an .exe.

Exports:
    DATA_PATH (str): Absolute path to the data directory.
    DEFAULT_DATASET_PATH (str): Absolute path to the CSV dataset.
"""
import os
import sys
from pathlib import Path


def get_resource_path(relative_path: str) -> str:
    """
    Get absolute path to resource, works for dev and for PyInstaller.
    """
    if hasattr(sys, '_MEIPASS'):
        # PyInstaller temp folder
        base_path: str = getattr(sys, '_MEIPASS')
        return os.path.join(base_path, relative_path)

    # Development mode: resolve relative to this file
    # config.py is in src/scatterexplorer/
    current_file_path: Path = Path(__file__)
    project_root: Path = current_file_path.parent.parent.parent
    return os.path.join(str(project_root), relative_path)


# Paths
DATA_PATH: str = get_resource_path("data")
DEFAULT_DATASET_PATH: str = os.environ.get(
    "SCATTEREXPLORER_DATASET",
    os.path.join(DATA_PATH, "youth_smoking_drug_data_10000_rows_expanded.csv"),
)

# Plot geometry (view units, y grows downwards)
PLOT_WIDTH: float = 770.0
PLOT_HEIGHT: float = 450.0

# Zoom / pan limits
SCALE_EXTENT: tuple[float, float] = (0.5, 10.0)
PAN_MARGIN: float = 100.0
WHEEL_ZOOM_STEP: float = 0.2  # log2 zoom change per wheel notch

# Animation timings (ms)
RESET_DURATION_MS: int = 700
POINT_TRANSITION_MS: int = 400
HOVER_TRANSITION_MS: int = 120
TOOLTIP_FADE_MS: int = 160
FRAME_INTERVAL_MS: int = 16

# Points
POINT_RADIUS: float = 5.0
POINT_HOVER_RADIUS: float = 8.0
POINT_OPACITY: float = 0.8

# Synthetic sample
SAMPLE_SIZE: int = 250
