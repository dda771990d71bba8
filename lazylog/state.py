"""Session state: the active view, its cursors, and the overlay.

The active view is exactly one of ``LogView`` or ``DetailView``. A detail
view refers to its record by index into the history buffer, so the buffer
can keep growing underneath it. The overlay belongs to the session and masks
input for whichever view is active.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import enum
from typing import Literal, Protocol, Union

from .content import RenderedContent
from .decorations import Decorations
from .history import ChangeRecord, HistoryBuffer
from .scroll import ScrollCursor


class Density(enum.Enum):
    SHORT = "short"
    MEDIUM = "medium"
    LONG = "long"

    def next(self) -> Density:
        members = list(Density)
        return members[(members.index(self) + 1) % len(members)]

    @classmethod
    def parse(cls, value: object, default: Density | None = None) -> Density:
        """Return the density named by ``value`` or ``default`` (``SHORT``)."""
        if isinstance(value, Density):
            return value
        if isinstance(value, str):
            for member in cls:
                if member.value == value.strip().lower():
                    return member
        return default if default is not None else cls.SHORT


@dataclass
class FileView:
    """Rendered change content for the selected file plus its scroll offset."""

    path: str
    text: str
    scroll: int = 0


@dataclass(frozen=True)
class FileError:
    """Inline error content shown instead of a ``FileView``."""

    path: str
    text: str


@dataclass
class LogView:
    density: Density = Density.SHORT
    cursor: ScrollCursor = field(default_factory=lambda: ScrollCursor(index=0))


@dataclass
class DetailView:
    """One record's detail; ``parent is None`` means single-record show mode."""

    record_index: int
    message_scroll: int = 0
    file_cursor: ScrollCursor = field(default_factory=ScrollCursor)
    content: FileView | FileError | None = None
    parent: LogView | None = None


View = Union[LogView, DetailView]


@dataclass(frozen=True)
class Overlay:
    title: str
    text: str
    kind: Literal["help", "error"] = "help"


class ContentRenderer(Protocol):
    """Anything with ``GitContentRenderer.render``'s signature."""

    def render(self, record_id: str, path: str, previous_path: str | None = None) -> RenderedContent: ...


@dataclass
class Session:
    """All mutable state of one browsing session, owned by the loop."""

    buffer: HistoryBuffer
    decorations: Decorations
    content_renderer: ContentRenderer
    view: View
    overlay: Overlay | None = None
    range_label: str = "HEAD"

    def record_for(self, detail: DetailView) -> ChangeRecord:
        return self.buffer[detail.record_index]

    def show_error(self, message: str, title: str = "error") -> None:
        self.overlay = Overlay(title=title, text=message, kind="error")


def load_file_content(session: Session, detail: DetailView, file_index: int) -> None:
    """Render ``file_index`` of the detail's record and replace its content."""
    record = session.record_for(detail)
    change = record.files[file_index]
    rendered = session.content_renderer.render(record.id, change.path, change.old_path)
    if rendered.failed:
        detail.content = FileError(path=change.path, text=rendered.text)
    else:
        detail.content = FileView(path=change.path, text=rendered.text)


def open_detail(session: Session, record_index: int, parent: LogView | None) -> DetailView:
    """Build the detail view for ``record_index`` and eagerly open its first file."""
    detail = DetailView(record_index=record_index, parent=parent)
    if session.buffer[record_index].files:
        detail.file_cursor.select(0)
        load_file_content(session, detail, 0)
    return detail


__all__ = [
    "ContentRenderer",
    "Density",
    "DetailView",
    "FileError",
    "FileView",
    "LogView",
    "Overlay",
    "Session",
    "View",
    "load_file_content",
    "open_detail",
]
