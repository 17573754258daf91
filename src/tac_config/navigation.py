from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from .model import Entry


def first_selectable(entries: Sequence[Entry]) -> int:
    for idx, entry in enumerate(entries):
        if not entry.is_category:
            return idx
    return 0


@dataclass(slots=True)
class NavigationController:
    """Selection cursor over an entry list that never lands on a category.

    Moves do not wrap: at either end of the selectable range a move is a no-op.
    """

    entries: Sequence[Entry]
    selected: int = 0

    @classmethod
    def for_entries(cls, entries: Sequence[Entry]) -> NavigationController:
        return cls(entries=entries, selected=first_selectable(entries))

    @property
    def current(self) -> Entry | None:
        if 0 <= self.selected < len(self.entries):
            return self.entries[self.selected]
        return None

    def move_up(self) -> bool:
        for idx in range(self.selected - 1, -1, -1):
            if not self.entries[idx].is_category:
                self.selected = idx
                return True
        return False

    def move_down(self) -> bool:
        for idx in range(self.selected + 1, len(self.entries)):
            if not self.entries[idx].is_category:
                self.selected = idx
                return True
        return False
