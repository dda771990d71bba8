"""Exception types shared across lazylog.

Provider and decoration failures are recoverable and surface as overlays.
Terminal failures are fatal and propagate to the command-line entrypoint.
"""

from __future__ import annotations


class LazylogError(Exception):
    """Base class for all lazylog errors."""


class HistoryError(LazylogError):
    """History or decoration lookup failed in the repository backend."""


class TerminalError(LazylogError):
    """Terminal surface could not be initialized or restored."""


__all__ = ["LazylogError", "HistoryError", "TerminalError"]
