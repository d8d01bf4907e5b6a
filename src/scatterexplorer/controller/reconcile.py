"""Keyed diffing of record identifiers between two consecutive redraws."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Hashable, Iterable, List


@dataclass
class KeyedDiff:
    entered: List[Hashable] = field(default_factory=list)
    exited: List[Hashable] = field(default_factory=list)
    retained: List[Hashable] = field(default_factory=list)

    @property
    def is_initial(self) -> bool:
        return not self.exited and not self.retained


def reconcile(previous_ids: Iterable[Hashable], current_ids: Iterable[Hashable]) -> KeyedDiff:
    """
    Split identifiers into entered / exited / retained.

    Ordering follows the current draw for entered and retained items and the
    previous draw for exited ones.
    """
    previous = list(previous_ids)
    current = list(current_ids)
    previous_set = set(previous)
    current_set = set(current)

    diff = KeyedDiff()
    for key in current:
        (diff.retained if key in previous_set else diff.entered).append(key)
    diff.exited = [key for key in previous if key not in current_set]
    return diff
