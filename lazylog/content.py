"""Per-file change content for the detail view.

Runs ``git show`` for one record and path, then colors the patch with
Pygments. Failures come back as error text, never as exceptions.
"""

from __future__ import annotations

from collections import OrderedDict
from dataclasses import dataclass
import logging
from pathlib import Path
import re
import subprocess

from pygments import highlight
from pygments.formatters import Terminal256Formatter
from pygments.lexers import DiffLexer
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

logger = logging.getLogger(__name__)

CONTENT_CACHE_MAX = 64
GIT_TIMEOUT_SECONDS = 10.0
DEFAULT_STYLE = "monokai"

_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")


@dataclass(frozen=True)
class RenderedContent:
    text: str
    failed: bool = False


def sanitize_terminal_text(source: str) -> str:
    """Escape terminal control bytes to avoid side effects (bell, cursor moves, etc.)."""
    if _CONTROL_RE.search(source) is None:
        return source

    out: list[str] = []
    for ch in source:
        code = ord(ch)
        if ch in {"\n", "\r", "\t"}:
            out.append(ch)
            continue
        # C0 controls + DEL + C1 controls.
        if code < 32 or code == 127 or 0x80 <= code <= 0x9F:
            out.append(f"\\x{code:02x}")
            continue
        out.append(ch)
    return "".join(out)


def normalize_style(style: str | None) -> str:
    """Return ``style`` when Pygments knows it, else the default style."""
    if not style:
        return DEFAULT_STYLE
    try:
        get_style_by_name(style)
    except ClassNotFound:
        return DEFAULT_STYLE
    return style


def colorize_patch(patch: str, style: str = DEFAULT_STYLE) -> str:
    return highlight(patch, DiffLexer(), Terminal256Formatter(style=normalize_style(style)))


class GitContentRenderer:
    """Render ``git show`` output for one file of one record."""

    def __init__(
        self,
        repo_root: Path,
        *,
        style: str = DEFAULT_STYLE,
        no_color: bool = False,
        timeout_seconds: float = GIT_TIMEOUT_SECONDS,
    ) -> None:
        self.repo_root = repo_root
        self.style = normalize_style(style)
        self.no_color = no_color
        self.timeout_seconds = timeout_seconds
        self._cache: OrderedDict[tuple[str, str, str | None], RenderedContent] = OrderedDict()

    def _cache_get(self, key: tuple[str, str, str | None]) -> RenderedContent | None:
        cached = self._cache.get(key)
        if cached is not None:
            self._cache.move_to_end(key)
        return cached

    def _cache_put(self, key: tuple[str, str, str | None], value: RenderedContent) -> None:
        self._cache[key] = value
        self._cache.move_to_end(key)
        while len(self._cache) > CONTENT_CACHE_MAX:
            self._cache.popitem(last=False)

    def _run_git(self, args: list[str]) -> subprocess.CompletedProcess[str]:
        return subprocess.run(
            ["git", "-C", str(self.repo_root), *args],
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=False,
            timeout=self.timeout_seconds,
        )

    def render(self, record_id: str, path: str, previous_path: str | None = None) -> RenderedContent:
        key = (record_id, path, previous_path)
        cached = self._cache_get(key)
        if cached is not None:
            return cached

        paths = [path] if not previous_path or previous_path == path else [previous_path, path]
        args = ["show", "--format=", "--patch", "--find-renames", "--no-color", record_id, "--", *paths]
        try:
            proc = self._run_git(args)
        except (OSError, subprocess.SubprocessError) as exc:
            logger.warning("git show failed for %s %s: %s", record_id[:7], path, exc)
            return RenderedContent(text=f"error: cannot run git: {exc}", failed=True)

        if proc.returncode != 0:
            detail = proc.stderr.strip() or f"git exited with status {proc.returncode}"
            logger.warning("git show failed for %s %s: %s", record_id[:7], path, detail)
            return RenderedContent(text=f"error: {detail}", failed=True)

        patch = sanitize_terminal_text(proc.stdout)
        if not patch.strip():
            rendered = RenderedContent(text="(no textual changes)")
        elif self.no_color:
            rendered = RenderedContent(text=patch)
        else:
            rendered = RenderedContent(text=colorize_patch(patch, self.style))
        self._cache_put(key, rendered)
        return rendered


__all__ = [
    "GitContentRenderer",
    "RenderedContent",
    "colorize_patch",
    "normalize_style",
    "sanitize_terminal_text",
]
