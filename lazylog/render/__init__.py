"""Rendering engine for the log and detail screens.

``render_session`` is pure: it reads the session and returns a ``Layout`` of
panes holding already wrapped, already scrolled lines. ``paint_layout``
transfers a layout onto a ``Canvas`` supplied by the terminal surface.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..ansi import wrap_text
from ..state import DetailView, FileView, LogView, Overlay, Session
from ..ui_theme import UITheme, paint
from .canvas import Canvas
from .detail import (
    content_lines,
    content_title,
    file_list_lines,
    files_title,
    message_lines,
)
from .help import HELP_TITLE, help_text
from .layout import OVERLAY_PERCENT, Rect, centered_rect, detail_geometry, log_list_rows
from .log import log_list_lines, status_line

OVERLAY_PADDING_X = 2


@dataclass(frozen=True)
class Pane:
    """A rectangle of pre-shaped lines, optionally framed and titled."""

    rect: Rect
    lines: tuple[str, ...]
    title: str = ""
    border: bool = True
    padding_x: int = 0
    base_style: str = ""
    border_style: str = ""
    title_style: str = ""
    clear: bool = False

    @property
    def body(self) -> Rect:
        margin = 1 if self.border else 0
        return self.rect.inner(margin + self.padding_x, margin)


@dataclass(frozen=True)
class Layout:
    panes: tuple[Pane, ...]
    overlay: Pane | None = None


def _log_layout(session: Session, view: LogView, rows: int, cols: int, theme: UITheme) -> Layout:
    list_rect = Rect(0, 0, cols, log_list_rows(rows))
    lines = log_list_lines(view, session.buffer, session.decorations, cols, list_rect.height, theme)
    status_rect = Rect(0, list_rect.height, cols, max(0, rows - list_rect.height))
    status = status_line(view, session.buffer, session.range_label, cols)
    return Layout(
        panes=(
            Pane(rect=list_rect, lines=tuple(lines), border=False),
            Pane(rect=status_rect, lines=(status,), border=False, base_style=theme.status_bar),
        )
    )


def _detail_layout(session: Session, view: DetailView, rows: int, cols: int, theme: UITheme) -> Layout:
    record = session.record_for(view)
    geometry = detail_geometry(rows, cols)
    message_body = geometry.message.inner()
    files_body = geometry.files.inner()
    content_body = geometry.content.inner()

    message = message_lines(record, session.decorations, message_body.width, theme)
    message = message[view.message_scroll:view.message_scroll + message_body.height]
    files = file_list_lines(record, view, files_body.width, files_body.height, theme)
    content = content_lines(view.content, content_body.width, theme)
    scroll = view.content.scroll if isinstance(view.content, FileView) else 0
    content = content[scroll:scroll + content_body.height]

    def framed(rect: Rect, lines: list[str], title: str) -> Pane:
        return Pane(
            rect=rect,
            lines=tuple(lines),
            title=title,
            border_style=theme.border,
            title_style=theme.pane_title,
        )

    return Layout(
        panes=(
            framed(geometry.message, message, " message "),
            framed(geometry.files, files, files_title(record, view)),
            framed(geometry.content, content, content_title(view)),
        )
    )


def _overlay_pane(overlay: Overlay, rows: int, cols: int, theme: UITheme) -> Pane:
    rect = centered_rect(OVERLAY_PERCENT, OVERLAY_PERCENT, Rect(0, 0, cols, rows))
    body = rect.inner(1 + OVERLAY_PADDING_X, 1)
    text = overlay.text
    if overlay.kind == "error":
        text = "\n".join(paint(theme, theme.error_text, line) for line in text.splitlines())
    lines = wrap_text(text, body.width)[: body.height]
    return Pane(
        rect=rect,
        lines=tuple(lines),
        title=f" {overlay.title} ",
        padding_x=OVERLAY_PADDING_X,
        border_style=theme.error_text if overlay.kind == "error" else theme.overlay_border,
        title_style=theme.pane_title,
        clear=True,
    )


def help_overlay(theme: UITheme) -> Overlay:
    return Overlay(title=HELP_TITLE, text=help_text(theme), kind="help")


def render_session(session: Session, rows: int, cols: int, theme: UITheme) -> Layout:
    """Lay out the active view plus the overlay, if any; never mutates ``session``."""
    rows = max(1, rows)
    cols = max(1, cols)
    if isinstance(session.view, DetailView):
        layout = _detail_layout(session, session.view, rows, cols, theme)
    else:
        layout = _log_layout(session, session.view, rows, cols, theme)
    if session.overlay is not None:
        layout = Layout(panes=layout.panes, overlay=_overlay_pane(session.overlay, rows, cols, theme))
    return layout


def paint_pane(canvas: Canvas, pane: Pane) -> None:
    if pane.clear or pane.base_style:
        canvas.fill(pane.rect, style=pane.base_style)
    if pane.border:
        canvas.draw_box(pane.rect, style=pane.border_style, title=pane.title, title_style=pane.title_style)
    body = pane.body
    for row, line in enumerate(pane.lines[: body.height]):
        canvas.put_text(body.x, body.y + row, line, body.width, base_style=pane.base_style)


def paint_layout(canvas: Canvas, layout: Layout) -> None:
    """Paint panes in order and the overlay last, on top of everything."""
    for pane in layout.panes:
        paint_pane(canvas, pane)
    if layout.overlay is not None:
        paint_pane(canvas, layout.overlay)


__all__ = [
    "Layout",
    "Pane",
    "help_overlay",
    "paint_layout",
    "paint_pane",
    "render_session",
]
