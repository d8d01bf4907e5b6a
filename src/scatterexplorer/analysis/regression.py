"""Ordinary least-squares trend line."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence, TYPE_CHECKING

import numpy as np

from scatterexplorer.model.coercion import to_number
from scatterexplorer.model.fields import Record

if TYPE_CHECKING:
    import numpy.typing as npt


@dataclass(frozen=True)
class LinearModel:
    slope: float = 0.0
    intercept: float = 0.0
    n: int = 0

    def predict(self, x: float | npt.NDArray[np.float64]) -> float | npt.NDArray[np.float64]:
        """y = slope * x + intercept (a degenerate model always predicts 0)."""
        if self.n == 0:
            return np.zeros_like(x, dtype=np.float64) if isinstance(x, np.ndarray) else 0.0
        return self.slope * x + self.intercept


def finite_pairs(xs: Sequence[object], ys: Sequence[object]) -> npt.NDArray[np.float64]:
    """
    Pair values index by index and keep pairs where both are finite numbers.

    Returns:
        (N, 2) float array; the shorter input bounds the number of pairs.
    """
    n = min(len(xs), len(ys))
    x = np.array([to_number(v, math.nan) for v in xs[:n]], dtype=np.float64)
    y = np.array([to_number(v, math.nan) for v in ys[:n]], dtype=np.float64)
    mask = np.isfinite(x) & np.isfinite(y)
    return np.column_stack([x[mask], y[mask]])


def fit(xs: Sequence[object], ys: Sequence[object]) -> LinearModel:
    """
    Fit y = slope * x + intercept by least squares over the finite pairs.

    A zero denominator (all x equal) gives slope 0, so the line is flat at mean(y).
    """
    pairs = finite_pairs(xs, ys)
    n = len(pairs)
    if n == 0:
        return LinearModel()

    x, y = pairs[:, 0], pairs[:, 1]
    sum_x = float(np.sum(x))
    sum_y = float(np.sum(y))
    sum_xy = float(np.sum(x * y))
    sum_x2 = float(np.sum(x * x))

    denominator = n * sum_x2 - sum_x * sum_x
    slope = (n * sum_xy - sum_x * sum_y) / denominator if denominator != 0 else 0.0
    intercept = (sum_y - slope * sum_x) / n
    return LinearModel(slope=slope, intercept=intercept, n=n)


def trend_endpoints(records: Sequence[Record], x_field: str, y_field: str) -> npt.NDArray[np.float64] | None:
    """
    Data-space endpoints of the trend line over the whole dataset.

    Returns:
        [[x_min, y(x_min)], [x_max, y(x_max)]] or None when either axis has
        fewer than two finite values.
    """
    xs = [record.get(x_field) for record in records]
    ys = [record.get(y_field) for record in records]
    n_x = sum(1 for v in xs if math.isfinite(to_number(v, math.nan)))
    n_y = sum(1 for v in ys if math.isfinite(to_number(v, math.nan)))
    if n_x < 2 or n_y < 2:
        return None

    model = fit(xs, ys)
    coerced = [to_number(v, 0.0) for v in xs]
    x_min, x_max = min(coerced), max(coerced)
    return np.array([
        [x_min, model.predict(x_min)],
        [x_max, model.predict(x_max)],
    ], dtype=np.float64)
