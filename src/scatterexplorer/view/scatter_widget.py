"""
Scatter Plot Widget (Render Surface)
====================================
pyqtgraph surface drawing axes, points, legend, title and trend line.

The view box works in fixed "plot units" (PLOT_WIDTH x PLOT_HEIGHT, y grows
downwards) and never pans or zooms itself: mouse gestures are forwarded to the
``ViewTransformPipeline``, whose frames reposition points, trend line and axis
ticks. A full ``draw()`` rebuilds scales, legend and title from scratch.
"""
from __future__ import annotations

import logging
from typing import Dict, Hashable, List, Optional, Sequence, TYPE_CHECKING

import numpy as np
import pyqtgraph as pg
from PySide6.QtCore import QElapsedTimer, Qt, QTimer, Signal
from PySide6.QtWidgets import QVBoxLayout, QWidget

from scatterexplorer import config
from scatterexplorer.analysis.correlation import CorrelationStats, correlation_stats
from scatterexplorer.analysis.regression import trend_endpoints
from scatterexplorer.analysis.scales import (
    LinearScale, OrdinalColorScale, build_color_domain, build_linear,
)
from scatterexplorer.analysis.transform import ease_cubic
from scatterexplorer.controller.pipeline import ViewFrame, ViewTransformPipeline
from scatterexplorer.controller.reconcile import KeyedDiff, reconcile
from scatterexplorer.model.coercion import UNKNOWN_LABEL, to_label
from scatterexplorer.model.fields import ID_FIELD, Record, field_label
from scatterexplorer.model.state import AxisSelection
from scatterexplorer.view.tooltip import PointTooltip, tooltip_html

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)

TREND_COLOR = '#e74c3c'
POINT_SIZE = 2 * config.POINT_RADIUS
HOVER_SIZE = 2 * config.POINT_HOVER_RADIUS


def format_tick(value: float) -> str:
    return f"{value:g}"


class GestureViewBox(pg.ViewBox):
    """
    Fixed-range view box translating mouse gestures into pipeline calls:
      - wheel -> zoom about the pointer,
      - left drag -> pan,
      - double click -> zoom in x2 (shift: zoom out).
    """
    def __init__(self, pipeline: ViewTransformPipeline) -> None:
        super().__init__(invertY=True, enableMenu=False, defaultPadding=0.0)
        self.pipeline = pipeline
        self.setMouseEnabled(x=False, y=False)
        self.disableAutoRange()
        self.setRange(xRange=(0.0, pipeline.width), yRange=(0.0, pipeline.height), padding=0.0)

    def _view_point(self, pos) -> tuple[float, float]:
        p = self.mapToView(pos)
        return p.x(), p.y()

    def wheelEvent(self, ev, axis=None) -> None:
        self.pipeline.wheel(ev.delta() / 120.0, self._view_point(ev.pos()))
        ev.accept()

    def mouseDragEvent(self, ev, axis=None) -> None:
        if ev.button() != Qt.MouseButton.LeftButton:
            ev.ignore()
            return
        ev.accept()
        x0, y0 = self._view_point(ev.lastPos())
        x1, y1 = self._view_point(ev.pos())
        self.pipeline.pan_by(x1 - x0, y1 - y0)

    def mouseClickEvent(self, ev) -> None:
        if ev.double() and ev.button() == Qt.MouseButton.LeftButton:
            ev.accept()
            shift = bool(ev.modifiers() & Qt.KeyboardModifier.ShiftModifier)
            self.pipeline.zoom_by(0.5 if shift else 2.0, self._view_point(ev.pos()))
            return
        ev.ignore()


class ScatterPlotWidget(QWidget):
    """The single rendering target of the application."""
    statistics_changed = Signal(object)  # CorrelationStats
    reset_completed = Signal()

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)

        self.pipeline = ViewTransformPipeline(parent=self)
        self.pipeline.frame_changed.connect(self._apply_frame)
        self.pipeline.reset_finished.connect(self.reset_completed)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        self.graphics = pg.GraphicsLayoutWidget(self)
        self.graphics.setBackground('w')
        layout.addWidget(self.graphics)

        # --- plot layout: title / y-axis + view box / x-axis ---
        self.title = pg.LabelItem(color='k')
        self.view_box = GestureViewBox(self.pipeline)
        self.x_axis = pg.AxisItem('bottom')
        self.y_axis = pg.AxisItem('left')
        for axis in (self.x_axis, self.y_axis):
            axis.setPen('k')
            axis.setTextPen('k')

        self.graphics.addItem(self.title, row=0, col=1)
        self.graphics.addItem(self.y_axis, row=1, col=0)
        self.graphics.addItem(self.view_box, row=1, col=1)
        self.graphics.addItem(self.x_axis, row=2, col=1)

        # --- plot content ---
        self.points = pg.ScatterPlotItem(
            pxMode=True,
            hoverable=True,
            hoverSize=HOVER_SIZE,
            hoverPen=pg.mkPen('k', width=1.5),
            tip=None,
        )
        self.points.sigHovered.connect(self._on_points_hovered)
        self.exiting = pg.ScatterPlotItem(pxMode=True)
        self.trend_line = pg.PlotCurveItem(pen=pg.mkPen(TREND_COLOR, width=2, style=Qt.PenStyle.DashLine))
        self.trend_line.setVisible(False)
        for item in (self.exiting, self.points, self.trend_line):
            self.view_box.addItem(item)

        self.legend = pg.LegendItem(offset=(-10, 10), labelTextColor='k', brush=pg.mkBrush(255, 255, 255, 200))
        self.legend.setParentItem(self.view_box)

        self.tooltip = PointTooltip(self)

        # --- drawn state ---
        self._records_by_id: Dict[Hashable, Record] = {}
        self._ids: List[Hashable] = []
        self._positions: npt.NDArray[np.float64] = np.empty((0, 2))
        self._brushes: list = []
        self._selection = AxisSelection()
        self._color_scale = OrdinalColorScale([])
        self._stats: Optional[CorrelationStats] = None
        self._hovered_id: Optional[Hashable] = None
        self.last_diff = KeyedDiff()

        # --- enter/update/exit transition ---
        self._transition_timer = QTimer(self)
        self._transition_timer.setInterval(config.FRAME_INTERVAL_MS)
        self._transition_timer.timeout.connect(self._advance_transition)
        self._transition_clock = QElapsedTimer()
        self._from_pos: npt.NDArray[np.float64] = np.empty((0, 2))
        self._from_size: npt.NDArray[np.float64] = np.empty(0)
        self._exit_pos: npt.NDArray[np.float64] = np.empty((0, 2))
        self._exit_brushes: list = []

    # ------------------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------------------

    @property
    def displayed_ids(self) -> List[Hashable]:
        return list(self._ids)

    @property
    def displayed_positions(self) -> npt.NDArray[np.float64]:
        """Screen (plot unit) position of every drawn point, in draw order."""
        return self._positions.copy()

    @property
    def color_scale(self) -> OrdinalColorScale:
        return self._color_scale

    @property
    def statistics(self) -> Optional[CorrelationStats]:
        return self._stats

    def axis_ranges(self) -> tuple[tuple[float, float], tuple[float, float]]:
        return tuple(self.x_axis.range), tuple(self.y_axis.range)

    def legend_labels(self) -> List[str]:
        return [label.text for _, label in self.legend.items]

    def trend_visible(self) -> bool:
        return self.trend_line.isVisible()

    def draw(self, records: Sequence[Record], selection: AxisSelection, show_trend: bool) -> None:
        """
        Full rebuild: scales, axes, title, legend, keyed points, trend line and
        statistics. The zoom transform goes back to identity.
        """
        x_field, y_field, color_field = selection.x_field, selection.y_field, selection.color_field
        logger.debug(f"Drawing {len(records)} records: {x_field} vs {y_field} by {color_field}.")
        self._transition_timer.stop()
        self._hovered_id = None
        self.tooltip.fade_out()

        # --- keyed diff against the previous draw ---
        previous = dict(zip(self._ids, self._positions))
        previous_brushes = dict(zip(self._ids, self._brushes))
        ids = [record[ID_FIELD] for record in records]
        diff = reconcile(self._ids, ids)
        self.last_diff = diff

        self._records_by_id = {record[ID_FIELD]: record for record in records}
        self._ids = ids
        self._selection = AxisSelection(x_field, y_field, color_field)

        # --- scales ---
        x_scale = LinearScale(domain=build_linear(records, x_field), range=(0.0, self.pipeline.width))
        y_scale = LinearScale(domain=build_linear(records, y_field), range=(self.pipeline.height, 0.0))
        self._color_scale = OrdinalColorScale(build_color_domain(records, color_field))

        # --- title, axis labels, legend ---
        self.title.setText(f"Scatter Plot: {field_label(x_field)} vs {field_label(y_field)}", size='12pt', bold=True)
        self.x_axis.setLabel(field_label(x_field))
        self.y_axis.setLabel(field_label(y_field))
        self._rebuild_legend()

        self._brushes = [
            pg.mkBrush(self._with_alpha(self._color_scale(to_label(r.get(color_field), UNKNOWN_LABEL))))
            for r in records
        ]

        # --- pipeline (positions, trend) ---
        trend = trend_endpoints(records, x_field, y_field) if show_trend else None
        frame = self.pipeline.bind(records, x_field, y_field, x_scale, y_scale, trend)
        self._update_axes(frame)
        self._update_trend(frame.trend)

        # --- enter / update / exit ---
        target = frame.positions
        self._from_pos = np.array(
            [previous.get(key, pos) for key, pos in zip(ids, target)], dtype=np.float64
        ).reshape(-1, 2)
        self._from_size = np.array([POINT_SIZE if key in previous else 0.0 for key in ids], dtype=np.float64)
        self._exit_pos = np.array([previous[key] for key in diff.exited], dtype=np.float64).reshape(-1, 2)
        self._exit_brushes = [previous_brushes[key] for key in diff.exited]
        self._positions = target
        self._transition_clock.start()
        self._advance_transition()
        self._transition_timer.start()

        # --- statistics ---
        self._stats = correlation_stats(records, x_field, y_field)
        self.statistics_changed.emit(self._stats)

    def reset_view(self, animate: bool = True) -> None:
        self.pipeline.reset(animate=animate)

    # ------------------------------------------------------------------------------
    # Internal methods
    # ------------------------------------------------------------------------------

    @staticmethod
    def _with_alpha(color: str):
        c = pg.mkColor(color)
        c.setAlphaF(config.POINT_OPACITY)
        return c

    def _rebuild_legend(self) -> None:
        self.legend.clear()
        for label in self._color_scale.domain:
            sample = pg.ScatterPlotItem(symbol='s', size=14, pen=None, brush=pg.mkBrush(self._color_scale(label)))
            self.legend.addItem(sample, label)

    def _update_axes(self, frame: ViewFrame) -> None:
        for axis, scale in ((self.x_axis, frame.x_scale), (self.y_axis, frame.y_scale)):
            axis.setRange(*scale.domain)
            axis.setTicks([[(v, format_tick(v)) for v in scale.ticks()]])

    def _update_trend(self, trend: Optional[npt.NDArray[np.float64]]) -> None:
        if trend is None:
            self.trend_line.setVisible(False)
            self.trend_line.setData([], [])
            return
        self.trend_line.setData(trend[:, 0], trend[:, 1])
        self.trend_line.setVisible(True)

    def _set_points(self, positions: npt.NDArray[np.float64], sizes) -> None:
        self.points.setData(
            pos=positions,
            size=sizes,
            brush=self._brushes,
            pen=pg.mkPen('w', width=1),
            data=self._ids,
        )

    def _advance_transition(self) -> None:
        t = min(1.0, self._transition_clock.elapsed() / config.POINT_TRANSITION_MS)
        e = ease_cubic(t)

        positions = self._from_pos + (self._positions - self._from_pos) * e
        sizes = self._from_size + (POINT_SIZE - self._from_size) * e
        self._set_points(positions, sizes)

        if len(self._exit_pos) and t < 1.0:
            self.exiting.setData(pos=self._exit_pos, size=POINT_SIZE * (1.0 - e), brush=self._exit_brushes, pen=None)
        else:
            self.exiting.clear()

        if t >= 1.0:
            self._transition_timer.stop()

    def _apply_frame(self, frame: ViewFrame) -> None:
        """Zoom/pan update: no scale rebuild, only re-projection."""
        self._transition_timer.stop()
        self.exiting.clear()
        self._positions = frame.positions
        self._set_points(frame.positions, POINT_SIZE)
        self._update_axes(frame)
        self._update_trend(frame.trend)

    def _on_points_hovered(self, item, points, ev) -> None:
        if len(points) == 0:
            self._hovered_id = None
            self.tooltip.fade_out()
            return
        key = points[0].data()
        record = self._records_by_id.get(key)
        if record is None:
            return
        pos = self.graphics.mapTo(self, self.graphics.mapFromScene(ev.scenePos()))
        if key == self._hovered_id:
            # pointer moved within the same point
            self.tooltip.move_to(pos)
            return
        self._hovered_id = key
        self.tooltip.show_at(tooltip_html(record, self._selection), pos)
