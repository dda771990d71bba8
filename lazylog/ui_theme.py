"""UI theme definitions and selection helpers.

Themes are UI-only ANSI palettes (log list, panes, overlays). Patch coloring
for file content remains a separate Pygments style setting.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by renderers."""

    name: str
    reset: str
    reverse: str
    border: str
    pane_title: str
    record_id: str
    record_author: str
    record_date: str
    decoration_head: str
    decoration_local: str
    decoration_remote: str
    decoration_tag: str
    change_added: str
    change_deleted: str
    change_modified: str
    change_renamed: str
    stats: str
    status_bar: str
    help_heading: str
    help_key: str
    help_dim: str
    overlay_border: str
    error_text: str


DEFAULT_THEME = UITheme(
    name="default",
    reset="\033[0m",
    reverse="\033[7m",
    border="\033[2m",
    pane_title="\033[1;38;5;81m",
    record_id="\033[38;5;214m",
    record_author="\033[38;5;110m",
    record_date="\033[2;38;5;250m",
    decoration_head="\033[1;38;5;81m",
    decoration_local="\033[1;38;5;42m",
    decoration_remote="\033[1;38;5;203m",
    decoration_tag="\033[1;38;5;229m",
    change_added="\033[38;5;42m",
    change_deleted="\033[38;5;203m",
    change_modified="\033[38;5;214m",
    change_renamed="\033[38;5;81m",
    stats="\033[38;5;250m",
    status_bar="\033[7m",
    help_heading="\033[1;38;5;81m",
    help_key="\033[38;5;229m",
    help_dim="\033[2;38;5;250m",
    overlay_border="\033[38;5;45m",
    error_text="\033[31m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    reset="\033[0m",
    reverse="\033[7m",
    border="\033[2;38;5;31m",
    pane_title="\033[1;38;5;45m",
    record_id="\033[38;5;117m",
    record_author="\033[38;5;153m",
    record_date="\033[2;38;5;110m",
    decoration_head="\033[1;38;5;45m",
    decoration_local="\033[1;38;5;84m",
    decoration_remote="\033[1;38;5;215m",
    decoration_tag="\033[1;38;5;153m",
    change_added="\033[38;5;84m",
    change_deleted="\033[38;5;210m",
    change_modified="\033[38;5;215m",
    change_renamed="\033[38;5;45m",
    stats="\033[38;5;110m",
    status_bar="\033[7;38;5;31m",
    help_heading="\033[1;38;5;45m",
    help_key="\033[38;5;153m",
    help_dim="\033[2;38;5;110m",
    overlay_border="\033[38;5;39m",
    error_text="\033[38;5;210m",
)

PLAIN_THEME = UITheme(
    name="plain",
    reset="",
    reverse="",
    border="",
    pane_title="",
    record_id="",
    record_author="",
    record_date="",
    decoration_head="",
    decoration_local="",
    decoration_remote="",
    decoration_tag="",
    change_added="",
    change_deleted="",
    change_modified="",
    change_renamed="",
    stats="",
    status_bar="",
    help_heading="",
    help_key="",
    help_dim="",
    overlay_border="",
    error_text="",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    """Return selectable non-plain theme names."""
    return tuple(sorted(_THEMES.keys()))


def normalize_theme_name(name: str | None) -> str:
    """Return a valid theme name, falling back to default."""
    if not name:
        return DEFAULT_THEME.name
    candidate = str(name).strip().lower()
    if candidate in _THEMES:
        return candidate
    return DEFAULT_THEME.name


def resolve_theme(name: str | None, *, no_color: bool = False) -> UITheme:
    """Return concrete theme for requested name and color mode."""
    if no_color:
        return PLAIN_THEME
    return _THEMES[normalize_theme_name(name)]


def paint(theme: UITheme, style: str, text: str) -> str:
    """Wrap ``text`` in ``style`` when the theme uses color."""
    if not style or not text:
        return text
    return f"{style}{text}{theme.reset}"


__all__ = [
    "UITheme",
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "available_theme_names",
    "normalize_theme_name",
    "paint",
    "resolve_theme",
]
