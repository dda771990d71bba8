"""Runtime orchestration: session bootstrap, event loop, and terminal surface."""

from __future__ import annotations


def run_app(*args, **kwargs):
    """Lazily import the bootstrap so importing the package stays cheap."""
    from .app import run_app as _run_app

    return _run_app(*args, **kwargs)


def run_session(*args, **kwargs):
    from .loop import run_session as _run_session

    return _run_session(*args, **kwargs)


__all__ = ["run_app", "run_session"]
