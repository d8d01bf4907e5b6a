"""Pearson correlation and its qualitative strength."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from scatterexplorer.analysis.regression import finite_pairs
from scatterexplorer.model.fields import Record

STRONG = "Strong"
MODERATE = "Moderate"
WEAK = "Weak"
VERY_WEAK = "Very Weak"


def correlation(records: Sequence[Record], x_field: str, y_field: str) -> float:
    """
    Pearson correlation coefficient of two fields.

    Only records where both fields are finite numbers take part. Returns 0.0 when
    there are no such records or when either field has zero variance.
    """
    pairs = finite_pairs([r.get(x_field) for r in records], [r.get(y_field) for r in records])
    n = len(pairs)
    if n == 0:
        return 0.0

    x, y = pairs[:, 0], pairs[:, 1]
    sum_x = float(np.sum(x))
    sum_y = float(np.sum(y))
    sum_xy = float(np.sum(x * y))
    sum_xx = float(np.sum(x * x))
    sum_yy = float(np.sum(y * y))

    numerator = n * sum_xy - sum_x * sum_y
    var_x = n * sum_xx - sum_x * sum_x
    var_y = n * sum_yy - sum_y * sum_y
    if var_x <= 0 or var_y <= 0:
        return 0.0

    r = numerator / math.sqrt(var_x * var_y)
    if not math.isfinite(r):
        # sums overflowed
        return 0.0
    # rounding in the sums may push |r| marginally past 1
    return max(-1.0, min(1.0, r))


def strength_label(r: float) -> str:
    """Thresholds are exclusive: exactly 0.7 is Moderate."""
    abs_r = abs(r)
    if abs_r > 0.7:
        return STRONG
    if abs_r > 0.4:
        return MODERATE
    if abs_r > 0.2:
        return WEAK
    return VERY_WEAK


@dataclass(frozen=True)
class CorrelationStats:
    coefficient: float
    n_points: int
    strength: str

    def to_html(self) -> str:
        return (
            "<h4>Correlation Statistics</h4>"
            f"<p><b>Correlation Coefficient:</b> {self.coefficient:.3f}</p>"
            f"<p><b>Data Points:</b> {self.n_points}</p>"
            f"<p><b>Trend Strength:</b> {self.strength}</p>"
        )


def correlation_stats(records: Sequence[Record], x_field: str, y_field: str) -> CorrelationStats:
    r = correlation(records, x_field, y_field)
    return CorrelationStats(coefficient=r, n_points=len(records), strength=strength_label(r))
