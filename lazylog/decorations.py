"""Branch and tag names attached to records.

The snapshot is taken once at startup and only read afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import logging

import pygit2

from .errors import HistoryError

logger = logging.getLogger(__name__)

LOCAL = "local"
REMOTE = "remote"

_HEADS_PREFIX = "refs/heads/"
_REMOTES_PREFIX = "refs/remotes/"
_TAGS_PREFIX = "refs/tags/"


@dataclass(frozen=True)
class Decorations:
    """Record id -> branch ``(name, kind)`` pairs and tag names."""

    branches: dict[str, list[tuple[str, str]]] = field(default_factory=dict)
    tags: dict[str, list[str]] = field(default_factory=dict)
    head: str | None = None

    def branches_for(self, record_id: str) -> list[tuple[str, str]]:
        return self.branches.get(record_id, [])

    def tags_for(self, record_id: str) -> list[str]:
        return self.tags.get(record_id, [])


def snapshot_decorations(repo: pygit2.Repository) -> Decorations:
    """Collect every branch and tag in ``repo`` keyed by the commit it names."""
    branches: dict[str, list[tuple[str, str]]] = {}
    tags: dict[str, list[str]] = {}
    try:
        names = sorted(repo.references)
        head = None if repo.head_is_unborn else str(repo.head.target)
    except pygit2.GitError as exc:
        raise HistoryError(f"failed to read references: {exc}") from exc

    for name in names:
        if name.startswith(_HEADS_PREFIX):
            kind, short = LOCAL, name[len(_HEADS_PREFIX):]
        elif name.startswith(_REMOTES_PREFIX):
            kind, short = REMOTE, name[len(_REMOTES_PREFIX):]
            if short.endswith("/HEAD"):
                continue
        elif name.startswith(_TAGS_PREFIX):
            kind, short = "tag", name[len(_TAGS_PREFIX):]
        else:
            continue
        try:
            commit = repo.references[name].peel(pygit2.Commit)
        except (pygit2.GitError, KeyError, ValueError) as exc:
            # tags may point at trees or blobs
            logger.debug("skipping reference %s: %s", name, exc)
            continue
        record_id = str(commit.id)
        if kind == "tag":
            tags.setdefault(record_id, []).append(short)
        else:
            branches.setdefault(record_id, []).append((short, kind))
    return Decorations(branches=branches, tags=tags, head=head)


__all__ = ["Decorations", "LOCAL", "REMOTE", "snapshot_decorations"]
