"""ANSI-aware text measurement and line shaping utilities.

Provides clipping and soft-wrapping that preserve escape sequences.
These helpers keep pane layout aligned when color codes and wide chars are present.
"""

from __future__ import annotations

import re
import unicodedata

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")
TAB_STOP = 8
RESET = "\033[0m"


def char_display_width(ch: str, col: int) -> int:
    """Return terminal column width for one character at visual column ``col``.

    Tabs expand to the next 8-column stop, combining marks consume no columns,
    and East Asian wide/fullwidth characters consume two.
    """
    if ch == "\t":
        return TAB_STOP - (col % TAB_STOP)
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def strip_ansi(text: str) -> str:
    return ANSI_ESCAPE_RE.sub("", text)


def display_width(text: str) -> int:
    """Return the visible column count of a styled single-line string."""
    col = 0
    for ch in strip_ansi(text):
        col += char_display_width(ch, col)
    return col


def clip_ansi_line(text: str, max_cols: int) -> str:
    """Trim a styled line to at most ``max_cols`` display columns.

    ANSI escape sequences are preserved verbatim and do not count toward width.
    Tabs are expanded into spaces so clipping aligns with rendered terminal cells.
    """
    if max_cols <= 0 or not text:
        return ""

    out: list[str] = []
    col = 0
    i = 0
    n = len(text)
    while i < n and col < max_cols:
        if text[i] == "\x1b":
            match = ANSI_ESCAPE_RE.match(text, i)
            if match:
                out.append(match.group(0))
                i = match.end()
                continue
        ch = text[i]
        w = char_display_width(ch, col)
        if col + w > max_cols:
            break
        out.append(" " * w if ch == "\t" else ch)
        col += w
        i += 1

    return "".join(out)


def apply_sgr(style: str, seq: str, base: str = "") -> str:
    """Fold one SGR sequence into ``style``; resets fall back to ``base``."""
    params = seq[2:-1]
    if params in {"", "0", "00"}:
        return base
    if params.startswith("0;"):
        return base + seq
    return style + seq


def wrap_ansi_line(text: str, width: int) -> list[str]:
    """Soft-wrap a styled line into chunks that fit ``width`` display columns.

    A chunk that starts while styling is active is prefixed with every SGR
    sequence seen since the last reset so each chunk can be painted on its own.
    """
    if width <= 0 or not text:
        return [""]

    wrapped: list[str] = []
    chunk: list[str] = []
    active_sgr = ""
    col = 0
    i = 0
    n = len(text)
    while i < n:
        if text[i] == "\x1b":
            match = ANSI_ESCAPE_RE.match(text, i)
            if match:
                seq = match.group(0)
                if seq.endswith("m"):
                    active_sgr = apply_sgr(active_sgr, seq)
                chunk.append(seq)
                i = match.end()
                continue

        ch = text[i]
        w = char_display_width(ch, col)
        if col + w > width and col > 0:
            wrapped.append("".join(chunk))
            chunk = [active_sgr] if active_sgr else []
            col = 0
            w = char_display_width(ch, col)
        chunk.append(" " * w if ch == "\t" else ch)
        col += w
        i += 1

    wrapped.append("".join(chunk))
    return wrapped


def wrap_text(text: str, width: int) -> list[str]:
    """Split ``text`` into logical lines and soft-wrap each one to ``width``."""
    lines = text.splitlines()
    if not lines:
        return []
    out: list[str] = []
    for line in lines:
        out.extend(wrap_ansi_line(line, width))
    return out


def selected_with_ansi(text: str) -> str:
    """Apply selection styling without discarding existing ANSI colors."""
    if not text:
        return text

    # Keep reverse video active even when the text contains internal resets.
    return "\033[7m" + text.replace(RESET, "\033[0;7m") + RESET


__all__ = [
    "ANSI_ESCAPE_RE",
    "RESET",
    "apply_sgr",
    "char_display_width",
    "clip_ansi_line",
    "display_width",
    "selected_with_ansi",
    "strip_ansi",
    "wrap_ansi_line",
    "wrap_text",
]
