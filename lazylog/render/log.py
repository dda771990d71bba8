"""Record formatting for the top-level log list.

Each record becomes one or more wrapped lines depending on density. Line
counts do not depend on the theme, so heights computed with the plain theme
match what is drawn.
"""

from __future__ import annotations

from ..ansi import clip_ansi_line, display_width, selected_with_ansi, wrap_ansi_line
from ..decorations import LOCAL, Decorations
from ..history import ChangeRecord, HistoryBuffer
from ..scroll import ScrollCursor
from ..state import Density, LogView
from ..ui_theme import PLAIN_THEME, UITheme, paint

DATE_FORMAT = "%Y-%m-%d %H:%M"
MESSAGE_INDENT = "    "


def format_decorations(record_id: str, decorations: Decorations, theme: UITheme) -> str:
    """Return ``(HEAD, main, origin/main, tag: v1)`` for ``record_id`` or ``""``."""
    parts: list[str] = []
    if decorations.head == record_id:
        parts.append(paint(theme, theme.decoration_head, "HEAD"))
    for name, kind in decorations.branches_for(record_id):
        style = theme.decoration_local if kind == LOCAL else theme.decoration_remote
        parts.append(paint(theme, style, name))
    for name in decorations.tags_for(record_id):
        parts.append(paint(theme, theme.decoration_tag, f"tag: {name}"))
    if not parts:
        return ""
    return "(" + ", ".join(parts) + ")"


def _wrap_all(lines: list[str], width: int) -> list[str]:
    out: list[str] = []
    for line in lines:
        out.extend(wrap_ansi_line(line, width))
    return out


def record_lines(
    record: ChangeRecord,
    density: Density,
    decorations: Decorations,
    width: int,
    theme: UITheme = PLAIN_THEME,
) -> list[str]:
    """Return the wrapped display lines for one record at ``density``."""
    record_id = paint(theme, theme.record_id, record.short_id)
    decor = format_decorations(record.id, decorations, theme)
    if density is Density.SHORT:
        head = " ".join(part for part in (record_id, decor, record.summary) if part)
        return wrap_ansi_line(head, width)

    date = paint(theme, theme.record_date, record.timestamp.strftime(DATE_FORMAT))
    author = paint(theme, theme.record_author, record.author_name)
    header = " ".join(part for part in (record_id, decor, author, date) if part)
    logical = [header]
    logical.extend(f"{MESSAGE_INDENT}{line}" for line in record.message.splitlines())
    if density is Density.LONG and record.stats.lines:
        logical.append("")
        logical.extend(paint(theme, theme.stats, f"{MESSAGE_INDENT}{line}") for line in record.stats.lines)
    logical.append("")
    return _wrap_all(logical, width)


def record_height(record: ChangeRecord, density: Density, decorations: Decorations, width: int) -> int:
    return len(record_lines(record, density, decorations, width))


def follow_log_cursor(
    cursor: ScrollCursor,
    buffer: HistoryBuffer,
    density: Density,
    decorations: Decorations,
    width: int,
    list_rows: int,
) -> None:
    """Move the window so the cursored record is fully visible when it fits.

    The offset counts records, not screen rows; the cursor index must already
    be within the buffer.
    """
    if cursor.index is None:
        cursor.offset = 0
        return
    if cursor.index < cursor.offset:
        cursor.offset = cursor.index
        return
    used = sum(record_height(buffer[i], density, decorations, width) for i in range(cursor.offset, cursor.index + 1))
    while used > list_rows and cursor.offset < cursor.index:
        used -= record_height(buffer[cursor.offset], density, decorations, width)
        cursor.offset += 1


def _pad(line: str, width: int) -> str:
    return line + " " * max(0, width - display_width(line))


def log_list_lines(
    view: LogView,
    buffer: HistoryBuffer,
    decorations: Decorations,
    width: int,
    rows: int,
    theme: UITheme,
) -> list[str]:
    """Return at most ``rows`` lines of the record list starting at the offset."""
    if len(buffer) == 0:
        message = "(no history)" if buffer.exhausted else "(loading history)"
        return [paint(theme, theme.help_dim, message)]
    out: list[str] = []
    index = view.cursor.offset
    while index < len(buffer) and len(out) < rows:
        lines = record_lines(buffer[index], view.density, decorations, width, theme)
        if index == view.cursor.index:
            lines = [selected_with_ansi(_pad(line, width)) for line in lines]
        out.extend(lines)
        index += 1
    return out[:rows]


def status_line(view: LogView, buffer: HistoryBuffer, range_label: str, width: int) -> str:
    total = f"{len(buffer)}" if buffer.exhausted else f"{len(buffer)}+"
    position = 0 if view.cursor.index is None or len(buffer) == 0 else view.cursor.index + 1
    text = f" {range_label}  {position}/{total}  {view.density.value}  h: help"
    return _pad(clip_ansi_line(text, width), width)


__all__ = [
    "follow_log_cursor",
    "format_decorations",
    "log_list_lines",
    "record_height",
    "record_lines",
    "status_line",
]
