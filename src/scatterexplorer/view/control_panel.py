"""
Control Panel
=============
Left-side panel with the field selectors, view buttons, load status and
correlation statistics. It only emits signals; the main window decides what
they mean for the session.
"""
from __future__ import annotations

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import (
    QComboBox, QFormLayout, QGroupBox, QLabel, QPushButton, QVBoxLayout, QWidget
)

from scatterexplorer.analysis.correlation import CorrelationStats
from scatterexplorer.model.fields import FieldSpec, categorical_fields, numeric_fields
from scatterexplorer.model.state import AxisSelection


class ControlPanel(QWidget):
    # Typed UI events
    x_field_changed = Signal(str)
    y_field_changed = Signal(str)
    color_field_changed = Signal(str)
    reset_requested = Signal()
    trend_toggled = Signal()

    def __init__(self, selection: AxisSelection, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setMaximumWidth(300)

        layout = QVBoxLayout(self)

        # --- Dimensions ---
        grp_fields = QGroupBox("Dimensions")
        form = QFormLayout(grp_fields)

        self.combo_x = self._make_combo(numeric_fields(), selection.x_field)
        self.combo_x.currentIndexChanged.connect(
            lambda _: self.x_field_changed.emit(self.combo_x.currentData()))
        form.addRow("X Axis:", self.combo_x)

        self.combo_y = self._make_combo(numeric_fields(), selection.y_field)
        self.combo_y.currentIndexChanged.connect(
            lambda _: self.y_field_changed.emit(self.combo_y.currentData()))
        form.addRow("Y Axis:", self.combo_y)

        self.combo_color = self._make_combo(categorical_fields(), selection.color_field)
        self.combo_color.currentIndexChanged.connect(
            lambda _: self.color_field_changed.emit(self.combo_color.currentData()))
        form.addRow("Color By:", self.combo_color)

        layout.addWidget(grp_fields)

        # --- View ---
        grp_view = QGroupBox("View")
        l_view = QVBoxLayout(grp_view)

        self.btn_reset = QPushButton("Reset View")
        self.btn_reset.setToolTip("Zoom with the mouse wheel, pan by dragging, double-click to zoom in.")
        self.btn_reset.clicked.connect(self.reset_requested)
        l_view.addWidget(self.btn_reset)

        self.btn_trend = QPushButton("Show Trend Line")
        self.btn_trend.setCheckable(True)
        self.btn_trend.clicked.connect(self._on_trend_clicked)
        l_view.addWidget(self.btn_trend)

        layout.addWidget(grp_view)

        # --- Status & statistics ---
        self.lbl_status = QLabel("")
        self.lbl_status.setWordWrap(True)
        layout.addWidget(self.lbl_status)

        self.lbl_stats = QLabel("")
        self.lbl_stats.setTextFormat(Qt.TextFormat.RichText)
        self.lbl_stats.setWordWrap(True)
        layout.addWidget(self.lbl_stats)

        layout.addStretch()

    @staticmethod
    def _make_combo(specs: list[FieldSpec], current: str) -> QComboBox:
        combo = QComboBox()
        for spec in specs:
            combo.addItem(spec.label, userData=spec.key)
        combo.setCurrentIndex(max(0, combo.findData(current)))
        return combo

    def _on_trend_clicked(self, checked: bool) -> None:
        self.btn_trend.setText("Hide Trend Line" if checked else "Show Trend Line")
        self.trend_toggled.emit()

    def set_status(self, text: str) -> None:
        self.lbl_status.setText(text)

    def set_statistics(self, stats: CorrelationStats) -> None:
        self.lbl_stats.setText(stats.to_html())
