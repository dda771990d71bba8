"""Command-line front door for lazylog.

Parses CLI options, merges them over the JSON preferences, and dispatches
into the interactive session runtime.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from .config import load_density, load_style, load_theme_name
from .content import DEFAULT_STYLE
from .errors import HistoryError, TerminalError
from .state import Density
from .ui_theme import available_theme_names

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(log_file: Path | None) -> None:
    """Send package logs to ``log_file`` at DEBUG; stay silent without one."""
    if log_file is None:
        return
    logging.basicConfig(
        filename=str(log_file),
        level=logging.DEBUG,
        format=LOG_FORMAT,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lazylog",
        description="Browse git history in the terminal.",
    )
    parser.add_argument(
        "rev",
        nargs="?",
        default=None,
        help="Revision or range to walk (e.g. main, v1.0..HEAD). Defaults to HEAD.",
    )
    parser.add_argument("--show", action="store_true", help="Open only the first record of REV in detail view.")
    parser.add_argument(
        "--density",
        choices=[density.value for density in Density],
        default=None,
        help="Initial log layout (default: short).",
    )
    parser.add_argument("--style", default=None, help=f"Pygments style for file changes (default: {DEFAULT_STYLE}).")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument("--repo", type=Path, default=None, help="Repository path. Defaults to current directory.")
    parser.add_argument("--log-file", type=Path, default=None, help="Write debug logs to this file.")
    return parser


def main(argv: list[str] | None = None, default_path: Path | None = None) -> None:
    """Parse CLI arguments and launch the history browser.

    ``default_path`` is primarily for tests; when omitted the current working
    directory is used.
    """
    args = build_parser().parse_args(argv)
    configure_logging(args.log_file)

    # Imported late so ``--help`` works without touching pygit2.
    from .runtime.app import AppOptions, run_app

    options = AppOptions(
        repo_path=args.repo or default_path or Path.cwd(),
        rev=args.rev,
        show=args.show,
        density=Density.parse(args.density or load_density()),
        style=args.style or load_style() or DEFAULT_STYLE,
        theme_name=args.theme or load_theme_name(),
        no_color=args.no_color,
    )
    try:
        status = run_app(options)
    except HistoryError as exc:
        raise SystemExit(f"lazylog: {exc}") from exc
    except TerminalError as exc:
        logging.getLogger(__name__).error("terminal failure: %s", exc)
        raise SystemExit(f"lazylog: {exc}") from exc
    if status:
        raise SystemExit(status)


if __name__ == "__main__":
    main()
