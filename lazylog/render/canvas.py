"""Cell grid the surface hands to draw callbacks.

Styled text is parsed into (character, SGR prefix) cells so later panes, like
the overlay box, can be painted over earlier ones cleanly.
"""

from __future__ import annotations

from ..ansi import ANSI_ESCAPE_RE, RESET, apply_sgr, char_display_width
from .layout import Rect

Cell = tuple[str, str]
_BLANK: Cell = (" ", "")
_WIDE_TAIL = ""


class Canvas:
    def __init__(self, width: int, height: int) -> None:
        self.width = max(0, width)
        self.height = max(0, height)
        self._cells: list[list[Cell]] = [[_BLANK] * self.width for _ in range(self.height)]

    def _set(self, x: int, y: int, cell: Cell) -> None:
        if 0 <= y < self.height and 0 <= x < self.width:
            self._cells[y][x] = cell

    def fill(self, rect: Rect, ch: str = " ", style: str = "") -> None:
        for y in range(rect.y, rect.y + rect.height):
            for x in range(rect.x, rect.x + rect.width):
                self._set(x, y, (ch, style))

    def put_text(self, x: int, y: int, text: str, max_width: int, base_style: str = "") -> int:
        """Paint one styled line at ``(x, y)`` clipped to ``max_width`` columns.

        Returns the number of columns written.
        """
        if not (0 <= y < self.height):
            return 0
        style = base_style
        col = 0
        i = 0
        n = len(text)
        while i < n:
            if text[i] == "\x1b":
                match = ANSI_ESCAPE_RE.match(text, i)
                if match:
                    seq = match.group(0)
                    if seq.endswith("m"):
                        style = apply_sgr(style, seq, base_style)
                    i = match.end()
                    continue
            ch = text[i]
            i += 1
            if ch in {"\r", "\n"}:
                continue
            w = char_display_width(ch, col)
            if col + w > max_width:
                break
            if ch == "\t":
                for offset in range(w):
                    self._set(x + col + offset, y, (" ", style))
            elif w == 0:
                continue
            else:
                self._set(x + col, y, (ch, style))
                if w == 2:
                    self._set(x + col + 1, y, (_WIDE_TAIL, style))
            col += w
        return col

    def draw_box(self, rect: Rect, style: str = "", title: str = "", title_style: str = "") -> None:
        """Draw a rounded single-line frame with an optional title on the top edge."""
        if rect.width < 2 or rect.height < 2:
            return
        right = rect.x + rect.width - 1
        bottom = rect.y + rect.height - 1
        for x in range(rect.x + 1, right):
            self._set(x, rect.y, ("─", style))
            self._set(x, bottom, ("─", style))
        for y in range(rect.y + 1, bottom):
            self._set(rect.x, y, ("│", style))
            self._set(right, y, ("│", style))
        self._set(rect.x, rect.y, ("╭", style))
        self._set(right, rect.y, ("╮", style))
        self._set(rect.x, bottom, ("╰", style))
        self._set(right, bottom, ("╯", style))
        if title and rect.width > 4:
            self.put_text(rect.x + 2, rect.y, title, rect.width - 4, base_style=title_style)

    def plain_rows(self) -> list[str]:
        """Return the grid as unstyled text, one string per row."""
        return ["".join(ch for ch, _style in row) for row in self._cells]

    def ansi_rows(self) -> list[str]:
        """Return each row as ANSI text, switching style only where it changes."""
        rows: list[str] = []
        for row in self._cells:
            out: list[str] = []
            current = ""
            for ch, style in row:
                if ch == _WIDE_TAIL:
                    continue
                if style != current:
                    out.append(RESET + style)
                    current = style
                out.append(ch)
            if current:
                out.append(RESET)
            rows.append("".join(out))
        return rows


__all__ = ["Canvas", "Cell"]
