"""
View Transform Pipeline
=======================
Owns the zoom/pan transform of the scatter plot and turns every change of it
into a ``ViewFrame``: the effective (rescaled) X/Y scales, the screen position
of every point and the projected trend line.

Why is this file needed?
------------------------
1. Consistency: axes, points and trend line are always derived from the same
   transform in one place, so they can never drift apart.
2. Decoupling: the render surface only applies frames; gesture math and the
   animated reset live here and can be exercised without a window.

States:
    IDENTITY -> no zoom/pan applied.
    TRANSFORMED -> a non-identity scale/translation is active.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import IntEnum
from typing import Optional, Sequence, TYPE_CHECKING

import numpy as np
from PySide6.QtCore import QElapsedTimer, QObject, QTimer, Signal

from scatterexplorer import config
from scatterexplorer.analysis.scales import LinearScale
from scatterexplorer.analysis.transform import (
    IDENTITY, ViewTransform, clamp_scale, constrain, ease_cubic, interpolate, scale_to,
)
from scatterexplorer.model.coercion import to_number
from scatterexplorer.model.fields import Record

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)


class ViewState(IntEnum):
    IDENTITY = 0
    TRANSFORMED = 1


@dataclass(frozen=True)
class ViewFrame:
    """Everything the surface needs to place axes, points and trend line."""
    transform: ViewTransform
    x_scale: LinearScale
    y_scale: LinearScale
    positions: npt.NDArray[np.float64]  # (N, 2) screen coordinates
    trend: Optional[npt.NDArray[np.float64]]  # (2, 2) screen coordinates


class ViewTransformPipeline(QObject):
    """Zoom/pan state machine producing rescaled frames."""
    frame_changed = Signal(object)  # ViewFrame
    state_changed = Signal(int)  # ViewState
    reset_finished = Signal()

    def __init__(
        self,
        width: float = config.PLOT_WIDTH,
        height: float = config.PLOT_HEIGHT,
        scale_extent: tuple[float, float] = config.SCALE_EXTENT,
        margin: float = config.PAN_MARGIN,
        parent: QObject | None = None
    ) -> None:
        super().__init__(parent)
        self.width = width
        self.height = height
        self.scale_extent = scale_extent
        self.extent = ((0.0, 0.0), (width, height))
        self.translate_extent = ((-margin, -margin), (width + margin, height + margin))

        self._transform: ViewTransform = IDENTITY
        self._x_scale = LinearScale(range=(0.0, width))
        self._y_scale = LinearScale(range=(height, 0.0))
        self._data_x: npt.NDArray[np.float64] = np.empty(0)
        self._data_y: npt.NDArray[np.float64] = np.empty(0)
        self._trend_data: Optional[npt.NDArray[np.float64]] = None

        # reset animation
        self._anim_timer = QTimer(self)
        self._anim_timer.setInterval(config.FRAME_INTERVAL_MS)
        self._anim_timer.timeout.connect(self._advance_reset)
        self._anim_clock = QElapsedTimer()
        self._anim_start: ViewTransform = IDENTITY
        self._anim_duration_ms = config.RESET_DURATION_MS

    # ------------------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------------------

    @property
    def transform(self) -> ViewTransform:
        return self._transform

    @property
    def state(self) -> ViewState:
        return ViewState.IDENTITY if self._transform.is_identity else ViewState.TRANSFORMED

    @property
    def base_scales(self) -> tuple[LinearScale, LinearScale]:
        return self._x_scale, self._y_scale

    @property
    def is_animating(self) -> bool:
        return self._anim_timer.isActive()

    def bind(
        self,
        records: Sequence[Record],
        x_field: str,
        y_field: str,
        x_scale: LinearScale,
        y_scale: LinearScale,
        trend_data: Optional[npt.NDArray[np.float64]] = None
    ) -> ViewFrame:
        """
        Attach freshly built base scales and data after a full redraw.
        The transform starts over from identity.
        """
        self._anim_timer.stop()
        self._x_scale = x_scale
        self._y_scale = y_scale
        self._data_x = np.array([to_number(r.get(x_field), 0.0) for r in records], dtype=np.float64)
        self._data_y = np.array([to_number(r.get(y_field), 0.0) for r in records], dtype=np.float64)
        self._trend_data = trend_data
        self._set(IDENTITY, emit_frame=False)
        return self.current_frame()

    def current_frame(self) -> ViewFrame:
        t = self._transform
        x_scale = t.rescale_x(self._x_scale)
        y_scale = t.rescale_y(self._y_scale)

        positions = np.column_stack([x_scale(self._data_x), y_scale(self._data_y)]) \
            if len(self._data_x) else np.empty((0, 2))

        trend = None
        if self._trend_data is not None:
            trend = np.column_stack([x_scale(self._trend_data[:, 0]), y_scale(self._trend_data[:, 1])])

        return ViewFrame(transform=t, x_scale=x_scale, y_scale=y_scale, positions=positions, trend=trend)

    # ---- gestures ----

    def zoom_by(self, factor: float, anchor: tuple[float, float]) -> None:
        """Multiply the scale by ``factor`` around ``anchor`` (view units)."""
        self.zoom_to(self._transform.k * factor, anchor)

    def zoom_to(self, k: float, anchor: tuple[float, float]) -> None:
        k = clamp_scale(k, self.scale_extent)
        self.set_transform(scale_to(self._transform, k, anchor))

    def wheel(self, notches: float, anchor: tuple[float, float]) -> None:
        """Mouse wheel / pinch: one notch zooms by 2**WHEEL_ZOOM_STEP."""
        self.zoom_by(math.pow(2.0, notches * config.WHEEL_ZOOM_STEP), anchor)

    def pan_by(self, dx: float, dy: float) -> None:
        """Shift the view by a screen-space delta (view units)."""
        t = self._transform
        self.set_transform(ViewTransform(t.k, t.x + dx, t.y + dy))

    def set_transform(self, transform: ViewTransform) -> None:
        """Apply a user-driven transform, clamped and constrained to bounds."""
        self._anim_timer.stop()
        k = clamp_scale(transform.k, self.scale_extent)
        bounded = constrain(ViewTransform(k, transform.x, transform.y), self.extent, self.translate_extent)
        self._set(bounded)

    # ---- reset ----

    def reset(self, animate: bool = True) -> None:
        """
        Return to the identity view. With ``animate`` the transform eases back
        over RESET_DURATION_MS, emitting intermediate frames; ``reset_finished``
        is emitted once identity is reached.
        """
        logger.debug(f"Resetting view from {self._transform} (animate={animate}).")
        self._anim_timer.stop()
        if not animate or self._transform.is_identity:
            self._set(IDENTITY)
            self.reset_finished.emit()
            return

        self._anim_start = self._transform
        self._anim_clock.start()
        self._anim_timer.start()

    # ------------------------------------------------------------------------------
    # Internal methods
    # ------------------------------------------------------------------------------

    def _advance_reset(self) -> None:
        t = min(1.0, self._anim_clock.elapsed() / self._anim_duration_ms)
        self._set(interpolate(self._anim_start, IDENTITY, ease_cubic(t)))
        if t >= 1.0:
            self._anim_timer.stop()
            self.reset_finished.emit()

    def _set(self, transform: ViewTransform, emit_frame: bool = True) -> None:
        previous_state = self.state
        self._transform = transform
        if emit_frame:
            self.frame_changed.emit(self.current_frame())
        if self.state != previous_state:
            self.state_changed.emit(int(self.state))
