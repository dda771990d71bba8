"""Cursor and viewport-offset arithmetic for list and text panes.

``ScrollCursor`` is pure bookkeeping: it never looks at the data it indexes.
Callers pass bounds recomputed from content and viewport size each frame.
"""

from __future__ import annotations

from dataclasses import dataclass


def clamp(value: int, lower: int, upper: int | None = None) -> int:
    """Clamp ``value`` into ``[lower, upper]``; ``upper=None`` is unbounded."""
    if upper is not None and value > upper:
        value = upper
    return max(lower, value)


@dataclass
class ScrollCursor:
    """Selected index (or none) plus the first visible row of its window."""

    index: int | None = None
    offset: int = 0

    def move(self, delta: int, lower: int = 0, upper: int | None = None) -> bool:
        """Move the selection by ``delta`` and return whether it changed.

        With no current selection any nonzero delta selects ``lower``. A
        bounded range with ``upper < lower`` is empty and selects nothing.
        """
        if upper is not None and upper < lower:
            changed = self.index is not None
            self.index = None
            return changed
        previous = self.index
        if self.index is None:
            if delta == 0:
                return False
            self.index = lower
        else:
            self.index = clamp(self.index + delta, lower, upper)
        return self.index != previous

    def select(self, index: int) -> None:
        self.index = max(0, index)

    def clear(self) -> None:
        self.index = None
        self.offset = 0

    def clamp(self, upper: int) -> None:
        """Re-clamp the selection to ``upper``; a negative bound clears it."""
        if upper < 0:
            self.index = None
            return
        if self.index is not None:
            self.index = clamp(self.index, 0, upper)

    def follow(self, visible_rows: int, total: int | None = None) -> None:
        """Shift the window so the selection is visible.

        ``total`` bounds the offset to ``total - visible_rows`` when the list
        length is known.
        """
        rows = max(1, visible_rows)
        if self.index is not None:
            if self.index < self.offset:
                self.offset = self.index
            elif self.index >= self.offset + rows:
                self.offset = self.index - rows + 1
        if total is not None:
            self.offset = clamp(self.offset, 0, max(0, total - rows))
        else:
            self.offset = max(0, self.offset)


__all__ = ["ScrollCursor", "clamp"]
