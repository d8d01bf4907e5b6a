"""
Scales
======
Linear domain -> range mappings with "nice" rounding and tick generation, plus
the ordinal color mapping used for the categorical dimension.

Scales are immutable: a full redraw builds new ones, zoom/pan derives rescaled
copies (see ``scatterexplorer.analysis.transform``).
"""
from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Dict, List, Sequence, TYPE_CHECKING

import numpy as np

from scatterexplorer.model.coercion import UNKNOWN_LABEL, to_label, to_number
from scatterexplorer.model.fields import Record

if TYPE_CHECKING:
    import numpy.typing as npt

# Qualitative palette (same hues as matplotlib "tab10")
CATEGORY10: List[str] = [
    '#1f77b4',  # Blue
    '#ff7f0e',  # Orange
    '#2ca02c',  # Green
    '#d62728',  # Red
    '#9467bd',  # Purple
    '#8c564b',  # Brown
    '#e377c2',  # Pink
    '#7f7f7f',  # Gray
    '#bcbd22',  # Olive
    '#17becf',  # Cyan
]

DOMAIN_PADDING = 0.05
# largest magnitude a domain end may take; leaves headroom for zooming out
DOMAIN_LIMIT = 1e300

_E10 = math.sqrt(50)
_E5 = math.sqrt(10)
_E2 = math.sqrt(2)


# ------------------------------------------------------------------------------
# Tick helpers (1-2-5 rule)
# ------------------------------------------------------------------------------
def _tick_spec(start: float, stop: float, count: float) -> tuple[int, int, float]:
    step = (stop - start) / max(0.0, count)
    power = math.floor(math.log10(step))
    error = step / 10 ** power
    factor = 10 if error >= _E10 else 5 if error >= _E5 else 2 if error >= _E2 else 1

    if power < 0:
        inc = 10 ** -power / factor
        i1 = round(start * inc)
        i2 = round(stop * inc)
        if i1 / inc < start:
            i1 += 1
        if i2 / inc > stop:
            i2 -= 1
        inc = -inc
    else:
        inc = 10 ** power * factor
        i1 = round(start / inc)
        i2 = round(stop / inc)
        if i1 * inc < start:
            i1 += 1
        if i2 * inc > stop:
            i2 -= 1

    if i2 < i1 and 0.5 <= count < 2:
        return _tick_spec(start, stop, count * 2)
    return int(i1), int(i2), float(inc)


def tick_increment(start: float, stop: float, count: float) -> float:
    """
    Step between ticks. Negative values encode the inverse of a sub-unit step
    (-10 means 0.1) so that tick values stay exact decimals.
    """
    if not count > 0 or start == stop or not (math.isfinite(start) and math.isfinite(stop)):
        return 0.0
    return _tick_spec(start, stop, count)[2]


def ticks(start: float, stop: float, count: int = 10) -> List[float]:
    """Evenly spaced round values within [start, stop]."""
    if not count > 0:
        return []
    if start == stop:
        return [float(start)]
    reverse = stop < start
    if reverse:
        start, stop = stop, start
    i1, i2, inc = _tick_spec(start, stop, count)
    if i2 < i1:
        return []
    if inc < 0:
        values = [(i1 + i) / -inc for i in range(i2 - i1 + 1)]
    else:
        values = [(i1 + i) * inc for i in range(i2 - i1 + 1)]
    return values[::-1] if reverse else values


# ------------------------------------------------------------------------------
# Linear scale
# ------------------------------------------------------------------------------
@dataclass(frozen=True)
class LinearScale:
    domain: tuple[float, float] = (0.0, 1.0)
    range: tuple[float, float] = (0.0, 1.0)

    def __call__(self, value: float | npt.NDArray[np.float64]) -> float | npt.NDArray[np.float64]:
        d0, d1 = self.domain
        r0, r1 = self.range
        span = d1 - d0
        t = (np.asarray(value, dtype=np.float64) - d0) / span if span else np.full_like(value, 0.5, dtype=np.float64)
        mapped = r0 + t * (r1 - r0)
        return float(mapped) if np.ndim(mapped) == 0 else mapped

    def invert(self, value: float | npt.NDArray[np.float64]) -> float | npt.NDArray[np.float64]:
        return replace(self, domain=self.range, range=self.domain)(value)

    def with_domain(self, domain: tuple[float, float]) -> LinearScale:
        return replace(self, domain=(float(domain[0]), float(domain[1])))

    def nice(self, count: int = 10) -> LinearScale:
        """Extend the domain to round tick boundaries."""
        d0, d1 = self.domain
        reverse = d1 < d0
        start, stop = (d1, d0) if reverse else (d0, d1)
        prestep = None
        for _ in range(10):
            step = tick_increment(start, stop, count)
            if step == prestep:
                break
            if step > 0:
                start = math.floor(start / step) * step
                stop = math.ceil(stop / step) * step
            elif step < 0:
                start = math.ceil(start * step) / step
                stop = math.floor(stop * step) / step
            else:
                break
            prestep = step
        return self.with_domain((stop, start) if reverse else (start, stop))

    def ticks(self, count: int = 10) -> List[float]:
        return ticks(self.domain[0], self.domain[1], count)


def build_linear(records: Sequence[Record], field: str) -> tuple[float, float]:
    """
    Padded, niced domain for a numeric field.

    Missing values count as 0. The extent is padded by 5% of its width on each
    side, or by 1 when all values are equal so the domain never collapses.
    Values beyond +-DOMAIN_LIMIT are clipped so the padded, niced and
    zoomed-out domains stay finite.
    """
    values = [
        min(DOMAIN_LIMIT, max(-DOMAIN_LIMIT, to_number(record.get(field), 0.0)))
        for record in records
    ]
    lo = min(values, default=0.0)
    hi = max(values, default=0.0)
    pad = hi * DOMAIN_PADDING - lo * DOMAIN_PADDING or 1.0
    return LinearScale(domain=(lo - pad, hi + pad)).nice().domain


# ------------------------------------------------------------------------------
# Color scale
# ------------------------------------------------------------------------------
def build_color_domain(records: Sequence[Record], field: str) -> List[str]:
    """Distinct labels of the color field in first-seen order."""
    seen: Dict[str, None] = {}
    for record in records:
        seen.setdefault(to_label(record.get(field), UNKNOWN_LABEL), None)
    return list(seen)


class OrdinalColorScale:
    """Category label -> palette color, cycling the palette by domain index."""

    def __init__(self, domain: Sequence[str], palette: Sequence[str] = CATEGORY10) -> None:
        self.palette = list(palette)
        self._index: Dict[str, int] = {}
        for label in domain:
            self._index.setdefault(label, len(self._index))

    @property
    def domain(self) -> List[str]:
        return list(self._index)

    def __call__(self, label: str) -> str:
        # unseen labels are appended, like an implicit ordinal domain
        index = self._index.setdefault(label, len(self._index))
        return self.palette[index % len(self.palette)]
