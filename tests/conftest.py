import os

import numpy as np
import pytest

# Widgets are created without a display
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from scatterexplorer.app.application import create_app  # noqa: E402


@pytest.fixture(scope="session")
def qapp():
    """One QApplication for the whole test session."""
    return create_app([])


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(1234)


@pytest.fixture
def linear_records() -> list[dict]:
    """Three points on y = 2x."""
    return [
        {"record_id": 1, "age": 1, "substance_score": 2, "gender": "Male", "region": "North"},
        {"record_id": 2, "age": 2, "substance_score": 4, "gender": "Female", "region": "South"},
        {"record_id": 3, "age": 3, "substance_score": 6, "gender": "Male", "region": "East"},
    ]
