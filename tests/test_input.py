"""Regression tests for raw-key decoding.

Covers ESC timing, CSI and SS3 sequences, and control-key token mapping.
"""

import os
import time
import unittest

from lazylog.input import reader


def _read_all(data: bytes, count: int) -> list[str]:
    read_fd, write_fd = os.pipe()
    try:
        os.write(write_fd, data)
        return [reader.read_key(read_fd, timeout_ms=20) for _ in range(count)]
    finally:
        os.close(read_fd)
        os.close(write_fd)


class ReadKeyTests(unittest.TestCase):
    def setUp(self) -> None:
        reader._PENDING_BYTES.clear()

    def tearDown(self) -> None:
        reader._PENDING_BYTES.clear()

    def test_single_escape_returns_esc_without_second_keypress(self) -> None:
        started = time.monotonic()
        keys = _read_all(b"\x1b", 1)
        elapsed = time.monotonic() - started

        self.assertEqual(keys, ["ESC"])
        self.assertLess(elapsed, 0.2)

    def test_arrow_and_paging_sequences(self) -> None:
        keys = _read_all(b"\x1b[A\x1b[B\x1b[C\x1b[D\x1b[5~\x1b[6~", 6)
        self.assertEqual(keys, ["UP", "DOWN", "RIGHT", "LEFT", "PAGE_UP", "PAGE_DOWN"])

    def test_home_and_end_variants(self) -> None:
        keys = _read_all(b"\x1b[H\x1b[F\x1b[1~\x1b[4~\x1bOH\x1bOF", 6)
        self.assertEqual(keys, ["HOME", "END", "HOME", "END", "HOME", "END"])

    def test_modified_arrows_decode_whole_sequence(self) -> None:
        keys = _read_all(b"\x1b[1;5A\x1b[1;2C\x1b[1;3Dj", 4)
        self.assertEqual(keys, ["CTRL_UP", "SHIFT_RIGHT", "ALT_LEFT", "j"])

    def test_unbound_csi_sequences_are_not_escape(self) -> None:
        keys = _read_all(b"\x1b[1;7B\x1b[200~\x1b[2Jq", 4)
        self.assertEqual(keys, ["UNKNOWN", "UNKNOWN", "UNKNOWN", "q"])

    def test_escape_does_not_swallow_following_printable_key(self) -> None:
        self.assertEqual(_read_all(b"\x1bq", 2), ["ESC", "q"])

    def test_control_keys(self) -> None:
        keys = _read_all(b"\x04\x15\t\r\n\x03", 6)
        self.assertEqual(keys, ["CTRL_D", "CTRL_U", "TAB", "ENTER", "ENTER", "CTRL_C"])

    def test_printable_and_space_keys_pass_through(self) -> None:
        self.assertEqual(_read_all(b"jG? ", 4), ["j", "G", "?", " "])

    def test_utf8_characters_are_decoded_whole(self) -> None:
        self.assertEqual(_read_all("é".encode("utf-8"), 1), ["é"])

    def test_timeout_without_input_returns_empty(self) -> None:
        self.assertEqual(_read_all(b"", 1), [""])


if __name__ == "__main__":
    unittest.main()
