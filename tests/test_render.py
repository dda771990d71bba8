"""Tests for record formatting, pane geometry, and session layouts."""

from __future__ import annotations

from dataclasses import replace
import unittest

from history_fakes import make_record, make_session
from lazylog.ansi import display_width, strip_ansi
from lazylog.decorations import LOCAL, REMOTE, Decorations
from lazylog.render import paint_layout, render_session
from lazylog.render.canvas import Canvas
from lazylog.render.detail import content_lines, files_title, message_lines
from lazylog.render.layout import Rect, centered_rect, detail_geometry, is_wide
from lazylog.render.log import format_decorations, log_list_lines, record_lines, status_line
from lazylog.state import Density, FileError, open_detail
from lazylog.ui_theme import DEFAULT_THEME, PLAIN_THEME


def _decorations_for(record_id: str) -> Decorations:
    return Decorations(
        branches={record_id: [("main", LOCAL), ("origin/main", REMOTE)]},
        tags={record_id: ["v1.0"]},
        head=record_id,
    )


class RecordLinesTests(unittest.TestCase):
    def test_short_density_is_one_line_with_decorations(self) -> None:
        record = make_record(1)
        lines = record_lines(record, Density.SHORT, _decorations_for(record.id), 120)
        self.assertEqual(lines, [f"{record.short_id} (HEAD, main, origin/main, tag: v1.0) change 1"])

    def test_short_density_soft_wraps_to_width(self) -> None:
        record = replace(make_record(1), summary="x" * 50)
        lines = record_lines(record, Density.SHORT, Decorations(), 20)
        self.assertEqual(len(lines), 3)
        self.assertTrue(all(display_width(line) <= 20 for line in lines))

    def test_medium_density_has_header_message_and_separator(self) -> None:
        record = make_record(2, message="subject\n\nbody text")
        lines = record_lines(record, Density.MEDIUM, Decorations(), 120)
        self.assertEqual(lines[0], f"{record.short_id} Tests 2024-01-01 12:00")
        self.assertEqual(lines[1:], ["    subject", "    ", "    body text", ""])

    def test_long_density_adds_stats(self) -> None:
        record = make_record(3, files=("a.txt", "b.txt"))
        medium = record_lines(record, Density.MEDIUM, Decorations(), 120)
        long = record_lines(record, Density.LONG, Decorations(), 120)
        self.assertGreater(len(long), len(medium))
        self.assertIn("     a.txt | 1 +", long)

    def test_theme_does_not_change_line_count(self) -> None:
        record = make_record(4, message="one\ntwo\nthree")
        decorations = _decorations_for(record.id)
        for density in Density:
            plain = record_lines(record, density, decorations, 30, PLAIN_THEME)
            styled = record_lines(record, density, decorations, 30, DEFAULT_THEME)
            self.assertEqual([strip_ansi(line) for line in styled], plain)

    def test_no_decorations_renders_empty(self) -> None:
        self.assertEqual(format_decorations("abc", Decorations(), PLAIN_THEME), "")


class LogListTests(unittest.TestCase):
    def test_selected_record_is_reverse_video(self) -> None:
        session = make_session([make_record(i) for i in range(3)])
        session.buffer.ensure_filled(3)
        session.view.cursor.select(1)
        lines = log_list_lines(session.view, session.buffer, session.decorations, 40, 10, PLAIN_THEME)
        self.assertEqual(len(lines), 3)
        self.assertTrue(lines[1].startswith("\033[7m"))
        self.assertFalse(lines[0].startswith("\033[7m"))
        self.assertEqual(display_width(lines[1]), 40)

    def test_empty_buffer_placeholder(self) -> None:
        session = make_session([])
        lines = log_list_lines(session.view, session.buffer, session.decorations, 40, 10, PLAIN_THEME)
        self.assertEqual(lines, ["(loading history)"])
        session.buffer.ensure_filled(1)
        lines = log_list_lines(session.view, session.buffer, session.decorations, 40, 10, PLAIN_THEME)
        self.assertEqual(lines, ["(no history)"])

    def test_status_line_marks_unfinished_history(self) -> None:
        session = make_session([make_record(i) for i in range(5)])
        session.buffer.ensure_filled(3)
        session.view.cursor.select(2)
        text = status_line(session.view, session.buffer, "main", 60)
        self.assertTrue(text.startswith(" main  3/3+  short"))
        self.assertEqual(len(text), 60)


class DetailTextTests(unittest.TestCase):
    def test_message_lines_show_header_and_summary_stats(self) -> None:
        record = make_record(5, files=("a.txt",), message="subject\n\nbody")
        lines = message_lines(record, _decorations_for(record.id), 200)
        self.assertEqual(lines[0], f"commit {record.id} (HEAD, main, origin/main, tag: v1.0)")
        self.assertEqual(lines[1], "Author: Tests <tests@example.com>")
        self.assertTrue(lines[2].startswith("Date:   Mon Jan 01 12:00:00 2024"))
        self.assertIn("    body", lines)
        self.assertEqual(lines[-1], "1 files changed, 1 insertions(+)")

    def test_message_lines_ignore_mode_lines_after_the_stat_summary(self) -> None:
        base = make_record(6, files=("b.txt",))
        stats = replace(
            base.stats,
            lines=(" b.txt | 3 +++", " 1 file changed, 3 insertions(+)", " create mode 100644 b.txt"),
            summary="1 file changed, 3 insertions(+)",
        )
        record = replace(base, stats=stats)

        lines = message_lines(record, Decorations(), 200)

        self.assertEqual(lines[-1], "1 file changed, 3 insertions(+)")
        self.assertNotIn("create mode", "\n".join(lines))

    def test_content_placeholders(self) -> None:
        self.assertEqual(content_lines(None, 40), ["(no file changes)"])
        error = FileError(path="x", text="error: boom")
        self.assertEqual(content_lines(error, 40), ["error: boom"])

    def test_files_title_counts_selection(self) -> None:
        session = make_session([make_record(0, files=("a", "b", "c"))])
        session.buffer.ensure_filled(1)
        detail = open_detail(session, 0, parent=None)
        self.assertEqual(files_title(session.record_for(detail), detail), " files 1/3 ")


class GeometryTests(unittest.TestCase):
    def test_wide_terminal_splits_side_by_side(self) -> None:
        self.assertTrue(is_wide(20, 40))
        geometry = detail_geometry(20, 100)
        self.assertEqual(geometry.message, Rect(0, 0, 40, 10))
        self.assertEqual(geometry.files, Rect(0, 10, 40, 10))
        self.assertEqual(geometry.content, Rect(40, 0, 60, 20))

    def test_narrow_terminal_stacks_content_below(self) -> None:
        self.assertFalse(is_wide(50, 80))
        geometry = detail_geometry(50, 80)
        self.assertEqual(geometry.message, Rect(0, 0, 40, 20))
        self.assertEqual(geometry.files, Rect(40, 0, 40, 20))
        self.assertEqual(geometry.content, Rect(0, 20, 80, 30))

    def test_centered_rect_is_eighty_percent(self) -> None:
        self.assertEqual(centered_rect(80, 80, Rect(0, 0, 100, 50)), Rect(10, 5, 80, 40))


class RenderSessionTests(unittest.TestCase):
    def test_overlay_is_painted_on_top(self) -> None:
        session = make_session([make_record(i) for i in range(40)])
        session.buffer.ensure_filled(39)
        session.show_error("history exploded")
        layout = render_session(session, 20, 60, PLAIN_THEME)
        self.assertIsNotNone(layout.overlay)

        canvas = Canvas(60, 20)
        paint_layout(canvas, layout)
        rows = canvas.plain_rows()
        self.assertEqual(rows[2][6], "╭")
        self.assertIn("history exploded", rows[3])
        # Underlying list rows stay visible outside the overlay box.
        self.assertIn("change 0", rows[0])

    def test_detail_layout_has_three_framed_panes(self) -> None:
        session = make_session([make_record(0, files=("a.txt", "b.txt"))])
        session.buffer.ensure_filled(1)
        session.view = open_detail(session, 0, parent=None)
        layout = render_session(session, 20, 100, PLAIN_THEME)
        self.assertEqual(len(layout.panes), 3)
        self.assertEqual([pane.title for pane in layout.panes], [" message ", " files 1/2 ", " a.txt "])
        self.assertTrue(all(pane.border for pane in layout.panes))

    def test_render_does_not_mutate_session(self) -> None:
        session = make_session([make_record(i) for i in range(5)])
        render_session(session, 10, 40, PLAIN_THEME)
        self.assertEqual(len(session.buffer), 0)


if __name__ == "__main__":
    unittest.main()
