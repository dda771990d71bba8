"""Help overlay content.

Stores keybinding text for the log and detail views. The overlay itself is
drawn by the generic overlay pane in ``lazylog.render``.
"""

from __future__ import annotations

from ..ui_theme import UITheme

HELP_TITLE = "lazylog help"

# (section title, ((keys, description), ...))
HELP_SECTIONS: tuple[tuple[str, tuple[tuple[str, str], ...]], ...] = (
    (
        "Log",
        (
            ("j/k  Up/Down", "next / previous record"),
            ("d/u  Ctrl+D/U", "half page down / up"),
            ("Space/f  b", "page down / up"),
            ("g/G  Home/End", "first / last loaded record"),
            ("1 2 3  Tab", "short / medium / long layout, cycle"),
            ("Enter  l  Right", "open record"),
            ("q  Esc", "quit"),
        ),
    ),
    (
        "Record",
        (
            ("j/k  n/p", "next / previous file"),
            ("J/K", "scroll message"),
            ("d/u  Space/b", "scroll file content"),
            ("g/G", "content top / bottom"),
            ("q  Esc  Left", "back to log"),
        ),
    ),
    (
        "General",
        (
            ("h  ?", "this help"),
            ("Ctrl+C", "quit from any screen"),
            ("any key", "close a popup"),
        ),
    ),
)


def help_text(theme: UITheme) -> str:
    """Return the help overlay body as styled text."""
    key_width = max(len(keys) for _title, rows in HELP_SECTIONS for keys, _desc in rows)
    lines: list[str] = []
    for title, rows in HELP_SECTIONS:
        if lines:
            lines.append("")
        lines.append(f"{theme.help_heading}{title}{theme.reset}")
        for keys, description in rows:
            lines.append(f"  {theme.help_key}{keys.ljust(key_width)}{theme.reset}  {description}")
    lines.append("")
    lines.append(f"{theme.help_dim}Press any key to close{theme.reset}")
    return "\n".join(lines)


__all__ = ["HELP_SECTIONS", "HELP_TITLE", "help_text"]
