"""Session bootstrap for ``lazylog``.

Opens the repository, builds the history buffer, decoration snapshot, and
content renderer, then hands the session to the event loop inside the
terminal surface. Everything that can fail for a bad repository or
revision fails here, before the terminal is touched.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
from pathlib import Path
import sys

import pygit2

from ..content import DEFAULT_STYLE, GitContentRenderer
from ..decorations import Decorations, snapshot_decorations
from ..errors import HistoryError
from ..history import GitHistoryProvider, HistoryBuffer
from ..state import Density, LogView, Session, open_detail
from ..ui_theme import resolve_theme
from .loop import run_session
from .terminal import TerminalController

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AppOptions:
    """Resolved command-line and config options for one run."""

    repo_path: Path
    rev: str | None = None
    show: bool = False
    density: Density = Density.SHORT
    style: str = DEFAULT_STYLE
    theme_name: str | None = None
    no_color: bool = False


def open_repository(path: Path) -> pygit2.Repository:
    """Open the repository containing ``path``."""
    try:
        discovered = pygit2.discover_repository(str(path))
    except pygit2.GitError as exc:
        raise HistoryError(f"cannot search for a repository at {path}: {exc}") from exc
    if discovered is None:
        raise HistoryError(f"not a git repository: {path}")
    try:
        return pygit2.Repository(discovered)
    except pygit2.GitError as exc:
        raise HistoryError(f"cannot open repository {discovered}: {exc}") from exc


def build_session(options: AppOptions) -> Session:
    """Build the initial session; raises ``HistoryError`` for startup failures."""
    repo = open_repository(options.repo_path)
    provider = GitHistoryProvider.open(repo, options.rev)
    buffer = HistoryBuffer(provider)
    renderer = GitContentRenderer(
        Path(repo.workdir or repo.path),
        style=options.style,
        no_color=options.no_color,
    )
    session = Session(
        buffer=buffer,
        decorations=Decorations(),
        content_renderer=renderer,
        view=LogView(density=options.density),
        range_label=options.rev or "HEAD",
    )
    try:
        session.decorations = snapshot_decorations(repo)
    except HistoryError as exc:
        logger.warning("continuing without decorations: %s", exc)
        session.show_error(str(exc), title="decorations unavailable")

    if options.show:
        buffer.ensure_filled(1)
        if len(buffer) == 0:
            raise HistoryError(f"no commits to show for {options.rev or 'HEAD'}")
        session.view = open_detail(session, 0, parent=None)
    logger.info("opened %s at %s", repo.path, session.range_label)
    return session


def run_app(options: AppOptions) -> int:
    """Run one interactive session and return the process exit status."""
    session = build_session(options)
    theme = resolve_theme(options.theme_name, no_color=options.no_color)
    terminal = TerminalController(sys.stdin.fileno(), sys.stdout.fileno())
    with terminal.raw_mode():
        run_session(session, terminal, theme)
    return 0


__all__ = ["AppOptions", "build_session", "open_repository", "run_app"]
