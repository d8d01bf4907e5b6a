"""
Session State (Data Model)
==========================
This module defines the central data structure for the running application.

Why is this file needed?
------------------------
1. State Management: It holds the active dataset, the axis/color selection and
   the trend-line flag in one place, instead of module-level globals.
2. Decoupling: Views read from this object; the main window writes to it in
   response to control-panel signals.

Classes:
    AxisSelection: The three selected field keys.
    SessionState: The main container class.
"""
from __future__ import annotations

from dataclasses import dataclass, field
import logging
from enum import StrEnum
from typing import List

from scatterexplorer.model.fields import ALL_FIELDS, FieldKind, Record

logger = logging.getLogger(__name__)


class DataSource(StrEnum):
    SAMPLE = "sample"
    FILE = "file"


@dataclass
class AxisSelection:
    x_field: str = "age"
    y_field: str = "substance_score"
    color_field: str = "gender"


@dataclass
class SessionState:
    """
    Singleton-like class that holds the state of the open session.
    Pass this instance to the Views.
    """
    records: List[Record] = field(default_factory=list)
    source: DataSource = DataSource.SAMPLE
    selection: AxisSelection = field(default_factory=AxisSelection)
    show_trend: bool = False

    # --- dataset ---
    def replace_records(self, records: List[Record], source: DataSource) -> None:
        """Swap the whole active dataset (records are never patched in place)."""
        self.records = list(records)
        self.source = source
        logger.info(f"Active dataset replaced: {len(self.records)} records ({source}).")

    # --- selection ---
    def set_x_field(self, key: str) -> None:
        self.selection.x_field = self._checked(key, FieldKind.NUMERIC)

    def set_y_field(self, key: str) -> None:
        self.selection.y_field = self._checked(key, FieldKind.NUMERIC)

    def set_color_field(self, key: str) -> None:
        self.selection.color_field = self._checked(key, FieldKind.CATEGORICAL)

    def toggle_trend(self) -> bool:
        self.show_trend = not self.show_trend
        return self.show_trend

    @staticmethod
    def _checked(key: str, kind: FieldKind) -> str:
        spec = ALL_FIELDS.get(key)
        if spec is None:
            raise KeyError(f"Unknown field '{key}'.")
        if spec.kind != kind:
            raise ValueError(f"Field '{key}' is {spec.kind}, expected {kind}.")
        return key
