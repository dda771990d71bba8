"""Read-only JSON preferences.

Holds the default density, Pygments style, and UI theme. The file is never
written; malformed or missing config falls back to defaults.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

CONFIG_PATH = Path.home() / ".config" / "lazylog.json"


def load_config(path: Path | None = None) -> dict[str, object]:
    """Load the JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    config_path = CONFIG_PATH if path is None else path
    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        logger.warning("ignoring unreadable config %s: %s", config_path, exc)
        return {}
    return data if isinstance(data, dict) else {}


def _load_string(key: str, path: Path | None = None) -> str | None:
    value = load_config(path).get(key)
    if not isinstance(value, str) or not value.strip():
        return None
    return value.strip()


def load_density(path: Path | None = None) -> str | None:
    return _load_string("density", path)


def load_style(path: Path | None = None) -> str | None:
    """Load the Pygments style used for file content."""
    return _load_string("style", path)


def load_theme_name(path: Path | None = None) -> str | None:
    return _load_string("theme", path)


__all__ = ["CONFIG_PATH", "load_config", "load_density", "load_style", "load_theme_name"]
