"""Pane geometry for the log and detail screens.

Everything here is integer arithmetic on the terminal size. The loop uses the
same functions as the renderer so scroll bounds and drawn panes agree.
"""

from __future__ import annotations

from dataclasses import dataclass

OVERLAY_PERCENT = 80
DETAIL_LEFT_PERCENT = 40
DETAIL_TOP_PERCENT = 40
STATUS_ROWS = 1


@dataclass(frozen=True)
class Rect:
    x: int
    y: int
    width: int
    height: int

    def inner(self, margin_x: int = 1, margin_y: int = 1) -> Rect:
        """Shrink by a margin on every side, never below zero size."""
        width = max(0, self.width - 2 * margin_x)
        height = max(0, self.height - 2 * margin_y)
        return Rect(self.x + margin_x, self.y + margin_y, width, height)


def split_rows(rect: Rect, first_percent: int) -> tuple[Rect, Rect]:
    first = max(0, min(rect.height, rect.height * first_percent // 100))
    return (
        Rect(rect.x, rect.y, rect.width, first),
        Rect(rect.x, rect.y + first, rect.width, rect.height - first),
    )


def split_cols(rect: Rect, first_percent: int) -> tuple[Rect, Rect]:
    first = max(0, min(rect.width, rect.width * first_percent // 100))
    return (
        Rect(rect.x, rect.y, first, rect.height),
        Rect(rect.x + first, rect.y, rect.width - first, rect.height),
    )


def centered_rect(percent_x: int, percent_y: int, rect: Rect) -> Rect:
    """Return a box of the given percentage size centered inside ``rect``."""
    width = max(1, rect.width * percent_x // 100)
    height = max(1, rect.height * percent_y // 100)
    x = rect.x + (rect.width - width) // 2
    y = rect.y + (rect.height - height) // 2
    return Rect(x, y, width, height)


def log_list_rows(rows: int) -> int:
    """Rows available to the record list above the status line."""
    return max(1, rows - STATUS_ROWS)


def is_wide(rows: int, cols: int) -> bool:
    return cols >= 2 * rows


@dataclass(frozen=True)
class DetailGeometry:
    message: Rect
    files: Rect
    content: Rect


def detail_geometry(rows: int, cols: int) -> DetailGeometry:
    """Lay out the message, file list, and content panes.

    Wide terminals put message over files on the left and content on the
    right; otherwise message and files sit side by side above the content.
    """
    screen = Rect(0, 0, max(1, cols), max(1, rows))
    if is_wide(rows, cols):
        left, content = split_cols(screen, DETAIL_LEFT_PERCENT)
        message, files = split_rows(left, 50)
    else:
        top, content = split_rows(screen, DETAIL_TOP_PERCENT)
        message, files = split_cols(top, 50)
    return DetailGeometry(message=message, files=files, content=content)


__all__ = [
    "DetailGeometry",
    "Rect",
    "centered_rect",
    "detail_geometry",
    "is_wide",
    "log_list_rows",
    "split_cols",
    "split_rows",
]
