"""Message, file list, and content panes of the record detail view."""

from __future__ import annotations

from dataclasses import dataclass

from ..ansi import display_width, selected_with_ansi, wrap_ansi_line, wrap_text
from ..decorations import Decorations
from ..history import ChangeRecord, FileChange
from ..state import DetailView, FileError, FileView
from ..ui_theme import PLAIN_THEME, UITheme, paint
from .layout import detail_geometry
from .log import format_decorations

DATE_FORMAT = "%a %b %d %H:%M:%S %Y %z"


def message_lines(record: ChangeRecord, decorations: Decorations, width: int, theme: UITheme = PLAIN_THEME) -> list[str]:
    """Return the wrapped commit header, message, and stat summary."""
    decor = format_decorations(record.id, decorations, theme)
    head = f"commit {paint(theme, theme.record_id, record.id)}"
    logical = [f"{head} {decor}" if decor else head]
    logical.append(f"Author: {paint(theme, theme.record_author, record.author)}")
    logical.append(f"Date:   {paint(theme, theme.record_date, record.timestamp.strftime(DATE_FORMAT))}")
    logical.append("")
    logical.extend(f"    {line}" for line in record.message.splitlines())
    if record.stats.summary:
        logical.append("")
        logical.append(paint(theme, theme.stats, record.stats.summary))
    out: list[str] = []
    for line in logical:
        out.extend(wrap_ansi_line(line, width))
    return out


def _status_style(status: str, theme: UITheme) -> str:
    if status == "A":
        return theme.change_added
    if status == "D":
        return theme.change_deleted
    if status in {"R", "C"}:
        return theme.change_renamed
    return theme.change_modified


def file_line(change: FileChange, theme: UITheme = PLAIN_THEME) -> str:
    return f"{paint(theme, _status_style(change.status, theme), change.status)} {change.label}"


def content_lines(content: FileView | FileError | None, width: int, theme: UITheme = PLAIN_THEME) -> list[str]:
    if content is None:
        return [paint(theme, theme.help_dim, "(no file changes)")]
    if isinstance(content, FileError):
        return [paint(theme, theme.error_text, line) for line in wrap_text(content.text, width)]
    return wrap_text(content.text, width)


@dataclass(frozen=True)
class DetailBounds:
    """Visible rows and largest scroll offsets of the three detail panes."""

    message_rows: int
    message_max: int
    file_rows: int
    file_count: int
    content_rows: int
    content_max: int


def detail_bounds(record: ChangeRecord, detail: DetailView, decorations: Decorations, rows: int, cols: int) -> DetailBounds:
    geometry = detail_geometry(rows, cols)
    message = geometry.message.inner()
    files = geometry.files.inner()
    content = geometry.content.inner()
    message_total = len(message_lines(record, decorations, message.width))
    content_total = len(content_lines(detail.content, content.width))
    return DetailBounds(
        message_rows=message.height,
        message_max=max(0, message_total - message.height),
        file_rows=files.height,
        file_count=len(record.files),
        content_rows=content.height,
        content_max=max(0, content_total - content.height),
    )


def file_list_lines(record: ChangeRecord, detail: DetailView, width: int, rows: int, theme: UITheme) -> list[str]:
    cursor = detail.file_cursor
    out: list[str] = []
    for index in range(cursor.offset, min(len(record.files), cursor.offset + rows)):
        line = file_line(record.files[index], theme)
        if index == cursor.index:
            line = selected_with_ansi(line + " " * max(0, width - display_width(line)))
        out.append(line)
    return out


def content_title(detail: DetailView) -> str:
    if detail.content is None:
        return " content "
    return f" {detail.content.path} "


def files_title(record: ChangeRecord, detail: DetailView) -> str:
    total = len(record.files)
    position = 0 if detail.file_cursor.index is None else detail.file_cursor.index + 1
    return f" files {position}/{total} "


__all__ = [
    "DetailBounds",
    "content_lines",
    "content_title",
    "detail_bounds",
    "file_line",
    "file_list_lines",
    "files_title",
    "message_lines",
]
