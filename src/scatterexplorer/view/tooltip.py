"""Floating point-details tooltip with fade in/out."""
from __future__ import annotations

from html import escape

from PySide6.QtCore import QPoint, QPropertyAnimation, Qt
from PySide6.QtWidgets import QGraphicsOpacityEffect, QLabel, QWidget

from scatterexplorer import config
from scatterexplorer.model.fields import ID_FIELD, Record, field_label
from scatterexplorer.model.state import AxisSelection

POINTER_OFFSET = QPoint(12, -12)


def tooltip_html(record: Record, selection: AxisSelection) -> str:
    """Record id, both axis values (raw), color value and the fixed age/region fields."""
    def value(key: str) -> str:
        v = record.get(key)
        return "N/A" if v is None or v == "" else escape(str(v))

    lines = [
        f"<b>Record #{value(ID_FIELD)}</b>",
        f"{field_label(selection.x_field)}: {value(selection.x_field)}",
        f"{field_label(selection.y_field)}: {value(selection.y_field)}",
        f"{field_label(selection.color_field)}: {value(selection.color_field)}",
        f"Age: {value('age')}",
        f"Region: {value('region')}",
    ]
    return "<br/>".join(lines)


class PointTooltip(QLabel):
    def __init__(self, parent: QWidget) -> None:
        super().__init__(parent)
        self.setTextFormat(Qt.TextFormat.RichText)
        self.setAttribute(Qt.WidgetAttribute.WA_TransparentForMouseEvents)
        self.setStyleSheet(
            "QLabel { background: white; border: 1px solid #ccc; border-radius: 5px;"
            " padding: 8px; font-size: 12px; color: black; }"
        )

        self._effect = QGraphicsOpacityEffect(self)
        self._effect.setOpacity(0.0)
        self.setGraphicsEffect(self._effect)

        self._fade = QPropertyAnimation(self._effect, b"opacity", self)
        self._fade.finished.connect(self._on_fade_finished)
        self.hide()

    def show_at(self, html: str, pos: QPoint) -> None:
        self.setText(html)
        self.adjustSize()
        self.move_to(pos)
        self.show()
        self.raise_()
        self._animate(0.95, config.HOVER_TRANSITION_MS)

    def move_to(self, pos: QPoint) -> None:
        """Place the top-left corner next to the pointer, kept inside the parent."""
        target = pos + POINTER_OFFSET
        parent = self.parentWidget()
        x = min(max(0, target.x()), max(0, parent.width() - self.width()))
        y = min(max(0, target.y()), max(0, parent.height() - self.height()))
        self.move(x, y)

    def fade_out(self) -> None:
        if self.isVisible():
            self._animate(0.0, config.TOOLTIP_FADE_MS)

    def _animate(self, target: float, duration_ms: int) -> None:
        self._fade.stop()
        self._fade.setDuration(duration_ms)
        self._fade.setStartValue(self._effect.opacity())
        self._fade.setEndValue(target)
        self._fade.start()

    def _on_fade_finished(self) -> None:
        if self._effect.opacity() <= 0.0:
            self.hide()
