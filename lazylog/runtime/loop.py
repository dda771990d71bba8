"""Main interactive event loop.

Each iteration prepares the frame (fills the buffer and clamps cursors),
renders the session, draws it, and blocks for one event. Buffer fills
happen here, never inside rendering.
"""

from __future__ import annotations

from collections.abc import Callable
import logging
from typing import Protocol

from ..errors import HistoryError
from ..input import InputRouter
from ..render import paint_layout, render_session
from ..render.canvas import Canvas
from ..render.detail import detail_bounds
from ..render.layout import log_list_rows
from ..render.log import follow_log_cursor
from ..scroll import clamp
from ..state import DetailView, FileView, LogView, Session
from ..ui_theme import UITheme

logger = logging.getLogger(__name__)


class Surface(Protocol):
    """What the loop needs from a terminal: size, events, and drawing."""

    def size(self) -> tuple[int, int]: ...

    def read_event(self) -> str: ...

    def draw(self, paint: Callable[[Canvas], None]) -> None: ...


def _fill(session: Session, target_len: int) -> None:
    try:
        session.buffer.ensure_filled(target_len)
    except HistoryError as exc:
        logger.warning("history fill to %d records failed: %s", target_len, exc)
        session.show_error(str(exc), title="history error")


def _prepare_log(session: Session, view: LogView, rows: int, cols: int) -> None:
    buffer = session.buffer
    cursor = view.cursor
    list_rows = log_list_rows(rows)
    wanted = cursor.offset + list_rows
    if cursor.index is not None:
        wanted = max(wanted, cursor.index + 1)
    _fill(session, wanted)

    if len(buffer) == 0:
        cursor.clear()
        return
    if cursor.index is None:
        cursor.select(0)
    cursor.clamp(len(buffer) - 1)
    cursor.offset = clamp(cursor.offset, 0, len(buffer) - 1)
    follow_log_cursor(cursor, buffer, view.density, session.decorations, cols, list_rows)
    # The window may have moved down; top it up so the list pane is full.
    _fill(session, cursor.offset + list_rows)


def _prepare_detail(session: Session, view: DetailView, rows: int, cols: int) -> None:
    record = session.record_for(view)
    bounds = detail_bounds(record, view, session.decorations, rows, cols)
    view.message_scroll = clamp(view.message_scroll, 0, bounds.message_max)
    view.file_cursor.clamp(bounds.file_count - 1)
    view.file_cursor.follow(bounds.file_rows, bounds.file_count)
    if isinstance(view.content, FileView):
        view.content.scroll = clamp(view.content.scroll, 0, bounds.content_max)


def prepare_frame(session: Session, rows: int, cols: int) -> None:
    """Grow the buffer for the visible window and clamp every cursor and offset."""
    rows = max(1, rows)
    cols = max(1, cols)
    if isinstance(session.view, DetailView):
        _prepare_detail(session, session.view, rows, cols)
    else:
        _prepare_log(session, session.view, rows, cols)


def run_session(session: Session, surface: Surface, theme: UITheme) -> None:
    """Drive ``session`` on ``surface`` until a key ends it."""
    router = InputRouter(theme)
    while True:
        rows, cols = surface.size()
        prepare_frame(session, rows, cols)
        layout = render_session(session, rows, cols, theme)
        surface.draw(lambda canvas: paint_layout(canvas, layout))
        key = surface.read_event()
        if router.handle(session, key, rows, cols):
            logger.debug("session ended by key %r", key)
            return


__all__ = ["Surface", "prepare_frame", "run_session"]
