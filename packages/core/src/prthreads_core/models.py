"""Domain models for pull request threads and status checks.

Decoupled from the HTTP client: nothing here knows about URLs or sessions.
Wire values (the integers and strings Azure DevOps speaks) are kept in
lookup tables next to the types they belong to.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Union


class ThreadStatus(Enum):
    """Status a review thread can be created with or moved to."""

    ACTIVE = "Active"
    FIXED = "Fixed"
    WONT_FIX = "WontFix"
    CLOSED = "Closed"
    PENDING = "Pending"

    @classmethod
    def names(cls) -> list[str]:
        return [s.value for s in cls]

    @classmethod
    def wire(cls, name: str) -> int:
        """Return the integer the API expects for a status name.

        Unknown names map to Active so a typo never blocks posting.
        """
        try:
            status = cls(name)
        except ValueError:
            return _STATUS_TO_WIRE[cls.ACTIVE]
        return _STATUS_TO_WIRE[status]


_STATUS_TO_WIRE: dict[ThreadStatus, int] = {
    ThreadStatus.ACTIVE: 1,
    ThreadStatus.FIXED: 2,
    ThreadStatus.WONT_FIX: 3,
    ThreadStatus.CLOSED: 4,
    ThreadStatus.PENDING: 5,
}

# Thread GET responses carry the status as a camelCase string.
_WIRE_TO_DISPLAY: dict[str, str] = {
    "active": "Active",
    "fixed": "Fixed",
    "wontFix": "WontFix",
    "closed": "Closed",
    "pending": "Pending",
    "byDesign": "By Design",
}


def decode_status(wire_status: str | None) -> str:
    """Map a thread's wire status to its display name.

    Values the table does not know (newer server releases) pass through verbatim.
    """
    if wire_status is None:
        return "Unknown"
    return _WIRE_TO_DISPLAY.get(wire_status, wire_status)


class StatusCheckState(str, Enum):
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    ERROR = "error"
    PENDING = "pending"
    NOT_SET = "notSet"
    NOT_APPLICABLE = "notApplicable"


def normalize_path(path: str) -> str:
    """Return a repository path in the form Azure DevOps anchors comments to.

    Backslashes become forward slashes and a leading slash is ensured, so
    ``src\\a.cs`` and ``/src/a.cs`` both normalize to ``/src/a.cs``.
    """
    path = path.replace("\\", "/")
    if not path.startswith("/"):
        path = "/" + path
    return path


def format_line_range(start: int, end: int) -> str:
    return str(start) if end == start else f"{start}-{end}"


@dataclass(frozen=True)
class PullRequestRef:
    """Addresses one pull request inside an organization/project/repository."""

    organization: str
    project: str
    repository: str
    pull_request_id: int

    @property
    def display(self) -> str:
        return f"{self.organization}/{self.project}/{self.repository}!{self.pull_request_id}"


@dataclass
class CommentRequest:
    """A comment to post: either a reply to a thread or a new (possibly inline) thread."""

    body: str
    thread_id: int | None = None
    file_path: str | None = None
    start_line: int | None = None
    end_line: int | None = None
    iteration_id: int | None = None
    initial_status: str = ThreadStatus.ACTIVE.value

    def __post_init__(self):
        if not self.body or not self.body.strip():
            raise ValueError("Comment body must not be empty.")
        for name in ("thread_id", "start_line", "end_line", "iteration_id"):
            value = getattr(self, name)
            if value is not None and value <= 0:
                raise ValueError(f"{name} must be a positive integer, got {value}.")
        if self.file_path and self.start_line is None:
            raise ValueError("start_line is required when file_path is given.")
        if self.start_line is not None and self.end_line is not None and self.end_line < self.start_line:
            raise ValueError(f"end_line ({self.end_line}) must not be before start_line ({self.start_line}).")

    @property
    def is_inline(self) -> bool:
        return bool(self.file_path) and (self.start_line or 0) > 0

    @property
    def effective_end_line(self) -> int | None:
        if self.end_line:
            return self.end_line
        return self.start_line


# --------------------------------------------------------------------------- #
# Outcomes                                                                    #
# --------------------------------------------------------------------------- #


@dataclass
class Failed:
    reason: str


@dataclass
class Replied:
    thread_id: int
    comment_id: int


@dataclass
class CreatedInline:
    thread_id: int
    comment_id: int
    path: str
    line_range: str


@dataclass
class CreatedGeneral:
    thread_id: int
    comment_id: int


PostOutcome = Union[Replied, CreatedInline, CreatedGeneral, Failed]


@dataclass
class Unchanged:
    thread_id: int
    status: str


@dataclass
class Updated:
    thread_id: int
    previous: str
    status: str


StatusUpdateOutcome = Union[Unchanged, Updated, Failed]


@dataclass
class Created:
    status_id: int
    state: str
    context_label: str


StatusCheckOutcome = Union[Created, Failed]


@dataclass
class ThreadSummary:
    """Read-only view of a thread for listings."""

    thread_id: int
    status: str
    file_path: str | None = None
    start_line: int | None = None
    end_line: int | None = None
    comment_count: int = 0
    first_comment: str = ""
    authors: list[str] = field(default_factory=list)
