"""Key routing for the log and detail views.

``handle_key`` mutates the session in place and returns ``True`` when the
session should end. Downward moves in the log never clamp against the
buffer: the next frame fills the buffer up to the cursor and clamps only
once the history is exhausted.
"""

from __future__ import annotations

import logging

from ..render import help_overlay
from ..render.detail import detail_bounds
from ..render.layout import log_list_rows
from ..scroll import clamp
from ..state import Density, DetailView, FileView, LogView, Session, load_file_content, open_detail
from ..ui_theme import PLAIN_THEME, UITheme
from .key_registry import KeyComboBinding, KeyComboRegistry

logger = logging.getLogger(__name__)

RESIZE = "RESIZE"
QUIT_KEYS = ("q", "ESC")


def _half(rows: int) -> int:
    return max(1, rows // 2)


def _handle_log_key(session: Session, view: LogView, key: str, rows: int) -> bool | None:
    list_rows = log_list_rows(rows)
    cursor = view.cursor

    def move(delta: int) -> bool:
        cursor.move(delta, 0)
        return False

    def first() -> bool:
        cursor.select(0)
        return False

    def last() -> bool:
        cursor.select(max(0, len(session.buffer) - 1))
        return False

    def set_density(density: Density) -> bool:
        view.density = density
        return False

    def open_selected() -> bool:
        index = cursor.index
        if index is None or index >= len(session.buffer):
            return False
        session.view = open_detail(session, index, parent=view)
        logger.debug("opened record %s", session.buffer[index].short_id)
        return False

    registry = KeyComboRegistry().register_bindings(
        KeyComboBinding(("j", "DOWN"), lambda: move(1)),
        KeyComboBinding(("k", "UP"), lambda: move(-1)),
        KeyComboBinding(("d", "CTRL_D"), lambda: move(_half(list_rows))),
        KeyComboBinding(("u", "CTRL_U"), lambda: move(-_half(list_rows))),
        KeyComboBinding((" ", "f", "PAGE_DOWN", "CTRL_F"), lambda: move(list_rows)),
        KeyComboBinding(("b", "PAGE_UP", "CTRL_B"), lambda: move(-list_rows)),
        KeyComboBinding(("g", "HOME"), first),
        KeyComboBinding(("G", "END"), last),
        KeyComboBinding(("1",), lambda: set_density(Density.SHORT)),
        KeyComboBinding(("2",), lambda: set_density(Density.MEDIUM)),
        KeyComboBinding(("3",), lambda: set_density(Density.LONG)),
        KeyComboBinding(("TAB",), lambda: set_density(view.density.next())),
        KeyComboBinding(("ENTER", "l", "RIGHT"), open_selected),
        KeyComboBinding(QUIT_KEYS, lambda: True),
    )
    return registry.dispatch(key)


def _handle_detail_key(session: Session, view: DetailView, key: str, rows: int, cols: int) -> bool | None:
    record = session.record_for(view)
    bounds = detail_bounds(record, view, session.decorations, rows, cols)
    cursor = view.file_cursor

    def move_file(delta: int) -> bool:
        if cursor.move(delta, 0, len(record.files) - 1) and cursor.index is not None:
            load_file_content(session, view, cursor.index)
        cursor.follow(bounds.file_rows, len(record.files))
        return False

    def scroll_message(delta: int) -> bool:
        view.message_scroll = clamp(view.message_scroll + delta, 0, bounds.message_max)
        return False

    def scroll_content(delta: int) -> bool:
        if isinstance(view.content, FileView):
            view.content.scroll = clamp(view.content.scroll + delta, 0, bounds.content_max)
        return False

    def leave() -> bool:
        if view.parent is None:
            return True
        session.view = view.parent
        return False

    page = bounds.content_rows
    registry = KeyComboRegistry().register_bindings(
        KeyComboBinding(("j", "DOWN", "n"), lambda: move_file(1)),
        KeyComboBinding(("k", "UP", "p"), lambda: move_file(-1)),
        KeyComboBinding(("J",), lambda: scroll_message(1)),
        KeyComboBinding(("K",), lambda: scroll_message(-1)),
        KeyComboBinding(("d", "CTRL_D"), lambda: scroll_content(_half(page))),
        KeyComboBinding(("u", "CTRL_U"), lambda: scroll_content(-_half(page))),
        KeyComboBinding((" ", "f", "PAGE_DOWN", "CTRL_F"), lambda: scroll_content(max(1, page))),
        KeyComboBinding(("b", "PAGE_UP", "CTRL_B"), lambda: scroll_content(-max(1, page))),
        KeyComboBinding(("g", "HOME"), lambda: scroll_content(-bounds.content_max)),
        KeyComboBinding(("G", "END"), lambda: scroll_content(bounds.content_max)),
        KeyComboBinding(QUIT_KEYS + ("LEFT",), leave),
    )
    return registry.dispatch(key)


def handle_key(session: Session, key: str, rows: int, cols: int, theme: UITheme = PLAIN_THEME) -> bool:
    """Apply one key token to ``session`` and return ``True`` when it should end."""
    if not key or key == RESIZE:
        return False
    if session.overlay is not None:
        session.overlay = None
        return False

    global_bindings = KeyComboRegistry().register_bindings(
        KeyComboBinding(("CTRL_C",), lambda: True),
        KeyComboBinding(("h", "?"), lambda: _show_help(session, theme)),
    )
    handled = global_bindings.dispatch(key)
    if handled is not None:
        return handled

    if isinstance(session.view, DetailView):
        handled = _handle_detail_key(session, session.view, key, rows, cols)
    else:
        handled = _handle_log_key(session, session.view, key, rows)
    return bool(handled)


def _show_help(session: Session, theme: UITheme) -> bool:
    session.overlay = help_overlay(theme)
    return False


class InputRouter:
    """Key router bound to the theme used for the help overlay."""

    def __init__(self, theme: UITheme = PLAIN_THEME) -> None:
        self.theme = theme

    def handle(self, session: Session, key: str, rows: int, cols: int) -> bool:
        return handle_key(session, key, rows, cols, self.theme)


__all__ = ["InputRouter", "QUIT_KEYS", "RESIZE", "handle_key"]
