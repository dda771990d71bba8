"""Change records, the git history provider, and the lazily filled buffer.

The provider hands out one commit at a time in reverse-chronological order.
``HistoryBuffer`` pulls from it only as far as the viewport needs, so the
session never walks more history than the user has scrolled through.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
import logging
import re
from typing import Iterator, Protocol

import pygit2
from pygit2.enums import DiffStatsFormat, RevSpecFlag, SortMode

from .errors import HistoryError

logger = logging.getLogger(__name__)

STATS_WIDTH = 100
SHORT_ID_LENGTH = 7
_STATS_SUMMARY_RE = re.compile(r"\s*\d+ files? changed")


@dataclass(frozen=True)
class FileChange:
    """One path touched by a record; ``old_path`` is set for renames and copies."""

    path: str
    status: str
    old_path: str | None = None

    @property
    def label(self) -> str:
        if self.old_path and self.old_path != self.path:
            return f"{self.old_path} -> {self.path}"
        return self.path


@dataclass(frozen=True)
class DiffStats:
    files_changed: int = 0
    insertions: int = 0
    deletions: int = 0
    lines: tuple[str, ...] = ()
    summary: str = ""


@dataclass(frozen=True)
class ChangeRecord:
    id: str
    author_name: str
    author_email: str
    timestamp: datetime
    summary: str
    message: str
    files: tuple[FileChange, ...] = ()
    stats: DiffStats = field(default_factory=DiffStats)

    @property
    def short_id(self) -> str:
        return self.id[:SHORT_ID_LENGTH]

    @property
    def author(self) -> str:
        return f"{self.author_name} <{self.author_email}>"


class HistoryProvider(Protocol):
    """Source of records, newest first; ``None`` signals exhaustion."""

    def next_record(self) -> ChangeRecord | None: ...


def _signature_time(signature: pygit2.Signature) -> datetime:
    tz = timezone(timedelta(minutes=signature.offset))
    return datetime.fromtimestamp(signature.time, tz)


def _summary_of(message: str) -> str:
    for line in message.splitlines():
        if line.strip():
            return line.strip()
    return ""


def _stats_summary(lines: tuple[str, ...]) -> str:
    """Pick the "N files changed" line; mode and rename lines follow it."""
    for line in lines:
        if _STATS_SUMMARY_RE.match(line):
            return line.strip()
    return ""


def record_from_commit(repo: pygit2.Repository, commit: pygit2.Commit) -> ChangeRecord:
    """Build a ``ChangeRecord`` by diffing ``commit`` against its first parent."""
    if commit.parents:
        diff = repo.diff(commit.parents[0].tree, commit.tree)
    else:
        diff = commit.tree.diff_to_tree(swap=True)
    diff.find_similar()

    files: list[FileChange] = []
    for delta in diff.deltas:
        status = delta.status_char()
        old_path = delta.old_file.path if status in {"R", "C"} else None
        files.append(FileChange(path=delta.new_file.path, status=status, old_path=old_path))

    stats = diff.stats
    formatted = stats.format(DiffStatsFormat.FULL | DiffStatsFormat.INCLUDE_SUMMARY, STATS_WIDTH)
    stat_lines = tuple(line.rstrip() for line in formatted.splitlines() if line.strip())
    message = commit.message or ""
    author = commit.author
    return ChangeRecord(
        id=str(commit.id),
        author_name=author.name or "",
        author_email=author.email or "",
        timestamp=_signature_time(author),
        summary=_summary_of(message),
        message=message.rstrip("\n"),
        files=tuple(files),
        stats=DiffStats(
            files_changed=stats.files_changed,
            insertions=stats.insertions,
            deletions=stats.deletions,
            lines=stat_lines,
            summary=_stats_summary(stat_lines),
        ),
    )


class GitHistoryProvider:
    """Walk a pygit2 repository one commit at a time.

    A commit whose diff fails to load stays pending, so the next call retries
    the same commit instead of silently skipping it.
    """

    def __init__(self, repo: pygit2.Repository, walker: Iterator[pygit2.Commit] | None) -> None:
        self.repo = repo
        self._walker = walker
        self._pending: pygit2.Commit | None = None

    @classmethod
    def open(cls, repo: pygit2.Repository, rev: str | None = None) -> GitHistoryProvider:
        """Start a walk at ``rev`` (HEAD by default).

        ``a..b`` walks b but not a; ``a...b`` walks both sides down to their
        merge base.
        """
        try:
            if rev is None:
                if repo.head_is_unborn:
                    return cls(repo, None)
                walker = repo.walk(repo.head.target, SortMode.TIME)
            elif ".." in rev:
                spec = repo.revparse(rev)
                tip = spec.to_object if spec.to_object is not None else repo.head.peel(pygit2.Commit)
                tip_id = tip.peel(pygit2.Commit).id
                walker = repo.walk(tip_id, SortMode.TIME)
                if spec.from_object is not None:
                    base_id = spec.from_object.peel(pygit2.Commit).id
                    if spec.flags & RevSpecFlag.MERGE_BASE:
                        walker.push(base_id)
                        merge_base = repo.merge_base(base_id, tip_id)
                        if merge_base is not None:
                            walker.hide(merge_base)
                    else:
                        walker.hide(base_id)
            else:
                target = repo.revparse_single(rev).peel(pygit2.Commit)
                walker = repo.walk(target.id, SortMode.TIME)
        except (pygit2.GitError, KeyError, ValueError) as exc:
            raise HistoryError(f"bad revision {rev or 'HEAD'!r}: {exc}") from exc
        return cls(repo, walker)

    def next_record(self) -> ChangeRecord | None:
        if self._walker is None:
            return None
        try:
            if self._pending is None:
                self._pending = next(self._walker, None)
                if self._pending is None:
                    self._walker = None
                    return None
            record = record_from_commit(self.repo, self._pending)
        except (pygit2.GitError, KeyError, ValueError) as exc:
            commit_label = str(self._pending.id)[:SHORT_ID_LENGTH] if self._pending is not None else "?"
            logger.warning("failed to load commit %s: %s", commit_label, exc)
            raise HistoryError(f"failed to load commit {commit_label}: {exc}") from exc
        self._pending = None
        return record


class HistoryBuffer:
    """Append-only list of records, grown on demand from a provider."""

    def __init__(self, provider: HistoryProvider) -> None:
        self._provider = provider
        self._records: list[ChangeRecord] = []
        self._exhausted = False
        self._failed_target: int | None = None

    def __len__(self) -> int:
        return len(self._records)

    def __getitem__(self, index: int) -> ChangeRecord:
        return self._records[index]

    def __iter__(self) -> Iterator[ChangeRecord]:
        return iter(self._records)

    @property
    def exhausted(self) -> bool:
        return self._exhausted

    def ensure_filled(self, target_len: int) -> bool:
        """Pull records until ``len(self) >= target_len``.

        Returns whether the buffer grew. Stops quietly once the provider is
        exhausted. A provider failure raises ``HistoryError`` with the buffer
        left at its last good length; the same or a smaller target is not
        retried until a larger one is requested.
        """
        if self._exhausted or len(self._records) >= target_len:
            return False
        if self._failed_target is not None and target_len <= self._failed_target:
            return False
        start_len = len(self._records)
        while len(self._records) < target_len:
            try:
                record = self._provider.next_record()
            except HistoryError:
                self._failed_target = target_len
                raise
            if record is None:
                self._exhausted = True
                logger.debug("history exhausted after %d records", len(self._records))
                break
            self._records.append(record)
        self._failed_target = None
        return len(self._records) > start_len


__all__ = [
    "ChangeRecord",
    "DiffStats",
    "FileChange",
    "GitHistoryProvider",
    "HistoryBuffer",
    "HistoryProvider",
    "record_from_commit",
]
