"""Tests for the cell grid used to compose frames."""

from __future__ import annotations

import unittest

from lazylog.render.canvas import Canvas
from lazylog.render.layout import Rect


class CanvasTests(unittest.TestCase):
    def test_put_text_clips_to_width(self) -> None:
        canvas = Canvas(10, 1)
        written = canvas.put_text(2, 0, "abcdefgh", 4)
        self.assertEqual(written, 4)
        self.assertEqual(canvas.plain_rows(), ["  abcd    "])

    def test_put_text_outside_grid_is_ignored(self) -> None:
        canvas = Canvas(4, 1)
        self.assertEqual(canvas.put_text(0, 5, "abc", 4), 0)
        self.assertEqual(canvas.plain_rows(), ["    "])

    def test_wide_characters_take_two_cells(self) -> None:
        canvas = Canvas(4, 1)
        canvas.put_text(0, 0, "日x", 4)
        self.assertEqual(canvas.plain_rows(), ["日x "])

    def test_styles_are_tracked_per_cell(self) -> None:
        canvas = Canvas(4, 1)
        canvas.put_text(0, 0, "a\033[31mb\033[0mc", 4)
        self.assertEqual(canvas.ansi_rows(), ["a\033[0m\033[31mb\033[0mc "])

    def test_reset_falls_back_to_base_style(self) -> None:
        canvas = Canvas(3, 1)
        canvas.put_text(0, 0, "\033[31ma\033[0mb", 3, base_style="\033[7m")
        self.assertEqual(canvas.ansi_rows(), ["\033[0m\033[7m\033[31ma\033[0m\033[7mb\033[0m "])

    def test_draw_box_with_title(self) -> None:
        canvas = Canvas(10, 3)
        canvas.draw_box(Rect(0, 0, 10, 3), title=" t ")
        self.assertEqual(canvas.plain_rows(), ["╭─ t ────╮", "│        │", "╰────────╯"])

    def test_fill_overwrites_cells(self) -> None:
        canvas = Canvas(3, 2)
        canvas.put_text(0, 0, "abc", 3)
        canvas.fill(Rect(1, 0, 2, 2), ch=".")
        self.assertEqual(canvas.plain_rows(), ["a..", " .."])


if __name__ == "__main__":
    unittest.main()
