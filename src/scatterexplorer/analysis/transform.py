"""
View Transform
==============
Zoom/pan state as a scale factor ``k`` and translation ``(x, y)``:

    screen = k * base + (x, y)

where ``base`` is a position produced by the base scales. Rescaling a scale
through the transform yields the effective mapping used while zoomed.
"""
from __future__ import annotations

from dataclasses import dataclass

from scatterexplorer.analysis.scales import LinearScale

# (x0, y0), (x1, y1)
Extent = tuple[tuple[float, float], tuple[float, float]]


@dataclass(frozen=True)
class ViewTransform:
    k: float = 1.0
    x: float = 0.0
    y: float = 0.0

    @property
    def is_identity(self) -> bool:
        return self.k == 1.0 and self.x == 0.0 and self.y == 0.0

    def apply(self, point: tuple[float, float]) -> tuple[float, float]:
        return point[0] * self.k + self.x, point[1] * self.k + self.y

    def invert(self, point: tuple[float, float]) -> tuple[float, float]:
        return (point[0] - self.x) / self.k, (point[1] - self.y) / self.k

    def invert_x(self, x: float) -> float:
        return (x - self.x) / self.k

    def invert_y(self, y: float) -> float:
        return (y - self.y) / self.k

    def scale(self, factor: float) -> ViewTransform:
        return ViewTransform(self.k * factor, self.x, self.y)

    def translate(self, dx: float, dy: float) -> ViewTransform:
        """Translate in base units (shift on screen is k * (dx, dy))."""
        return ViewTransform(self.k, self.x + self.k * dx, self.y + self.k * dy)

    def rescale_x(self, scale: LinearScale) -> LinearScale:
        r0, r1 = scale.range
        return scale.with_domain((scale.invert(self.invert_x(r0)), scale.invert(self.invert_x(r1))))

    def rescale_y(self, scale: LinearScale) -> LinearScale:
        r0, r1 = scale.range
        return scale.with_domain((scale.invert(self.invert_y(r0)), scale.invert(self.invert_y(r1))))


IDENTITY = ViewTransform()


def scale_to(transform: ViewTransform, k: float, anchor: tuple[float, float]) -> ViewTransform:
    """New scale ``k`` keeping the base point under ``anchor`` (screen) in place."""
    base_x, base_y = transform.invert(anchor)
    return ViewTransform(k, anchor[0] - base_x * k, anchor[1] - base_y * k)


def clamp_scale(k: float, scale_extent: tuple[float, float]) -> float:
    return max(scale_extent[0], min(scale_extent[1], k))


def constrain(transform: ViewTransform, extent: Extent, translate_extent: Extent) -> ViewTransform:
    """
    Keep the visible viewport inside ``translate_extent`` (base units).

    When the viewport is larger than the allowed area along an axis, it is
    centered on that area instead.
    """
    dx0 = transform.invert_x(extent[0][0]) - translate_extent[0][0]
    dx1 = transform.invert_x(extent[1][0]) - translate_extent[1][0]
    dy0 = transform.invert_y(extent[0][1]) - translate_extent[0][1]
    dy1 = transform.invert_y(extent[1][1]) - translate_extent[1][1]
    shift_x = (dx0 + dx1) / 2 if dx1 > dx0 else (min(0.0, dx0) or max(0.0, dx1))
    shift_y = (dy0 + dy1) / 2 if dy1 > dy0 else (min(0.0, dy0) or max(0.0, dy1))
    return transform.translate(shift_x, shift_y)


def interpolate(start: ViewTransform, end: ViewTransform, t: float) -> ViewTransform:
    """Blend two transforms; ``t`` in [0, 1]."""
    if t >= 1.0:
        return end
    return ViewTransform(
        start.k + (end.k - start.k) * t,
        start.x + (end.x - start.x) * t,
        start.y + (end.y - start.y) * t,
    )


def ease_cubic(t: float) -> float:
    """Cubic in-out easing."""
    t *= 2
    if t <= 1:
        return t * t * t / 2
    t -= 2
    return (t * t * t + 2) / 2
