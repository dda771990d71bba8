"""Tests for ANSI-aware width measurement, clipping, and wrapping."""

from __future__ import annotations

import unittest

from lazylog.ansi import clip_ansi_line, display_width, selected_with_ansi, strip_ansi, wrap_ansi_line, wrap_text


class AnsiWidthTests(unittest.TestCase):
    def test_escape_sequences_have_no_width(self) -> None:
        self.assertEqual(display_width("\033[31mred\033[0m"), 3)

    def test_wide_characters_count_twice(self) -> None:
        self.assertEqual(display_width("日本"), 4)

    def test_tabs_expand_to_next_stop(self) -> None:
        self.assertEqual(display_width("ab\tc"), 9)

    def test_clip_keeps_escapes_and_stops_at_width(self) -> None:
        clipped = clip_ansi_line("\033[32mabcdef\033[0m", 3)
        self.assertEqual(strip_ansi(clipped), "abc")
        self.assertTrue(clipped.startswith("\033[32m"))


class WrapTests(unittest.TestCase):
    def test_wrap_splits_at_width(self) -> None:
        self.assertEqual(wrap_ansi_line("abcdefgh", 3), ["abc", "def", "gh"])

    def test_wrap_empty_line_keeps_one_row(self) -> None:
        self.assertEqual(wrap_ansi_line("", 10), [""])

    def test_wrap_carries_active_color_into_continuation(self) -> None:
        chunks = wrap_ansi_line("\033[31mabcdef\033[0m", 4)
        self.assertEqual([strip_ansi(chunk) for chunk in chunks], ["abcd", "ef"])
        self.assertTrue(chunks[1].startswith("\033[31m"))

    def test_wrap_carries_stacked_styles_until_reset(self) -> None:
        chunks = wrap_ansi_line("\033[1m\033[32mabcd\033[0mef", 2)
        self.assertEqual([strip_ansi(chunk) for chunk in chunks], ["ab", "cd", "ef"])
        self.assertTrue(chunks[1].startswith("\033[1m\033[32m"))
        self.assertFalse(chunks[2].startswith("\033["))

    def test_wrap_does_not_split_wide_characters(self) -> None:
        chunks = wrap_ansi_line("a日本", 2)
        self.assertEqual(chunks, ["a", "日", "本"])

    def test_wrap_text_handles_multiple_lines(self) -> None:
        self.assertEqual(wrap_text("abc\n\ndefg", 3), ["abc", "", "def", "g"])
        self.assertEqual(wrap_text("", 3), [])

    def test_selection_survives_internal_resets(self) -> None:
        selected = selected_with_ansi("\033[31mx\033[0my")
        self.assertTrue(selected.startswith("\033[7m"))
        self.assertIn("\033[0;7m", selected)
        self.assertEqual(strip_ansi(selected), "xy")


if __name__ == "__main__":
    unittest.main()
