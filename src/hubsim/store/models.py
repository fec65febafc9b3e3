"""Data models for the domain store."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum


class IssueState(StrEnum):
    """Issue state enum."""

    OPEN = "open"
    CLOSED = "closed"


def utcnow() -> datetime:
    """Current time in UTC, truncated to whole seconds like the host API."""
    return datetime.now(UTC).replace(microsecond=0)


def unique_labels(labels: list[str] | None) -> list[str]:
    """Drop duplicate labels, keeping first-seen order."""
    if not labels:
        return []
    return list(dict.fromkeys(labels))


@dataclass
class Issue:
    """Represents an issue in the simulated repository."""

    number: int
    title: str = ""
    body: str = ""
    state: str = IssueState.OPEN.value
    labels: list[str] = field(default_factory=list)
    assignee: str | None = None
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    @property
    def is_open(self) -> bool:
        return self.state == IssueState.OPEN.value


@dataclass
class Comment:
    """A comment owned by one issue."""

    id: int
    author: str
    body: str
    created_at: datetime = field(default_factory=utcnow)


@dataclass
class Column:
    """A status column (single-select option) of a project board."""

    id: str
    name: str


@dataclass
class Project:
    """A project board with ordered columns."""

    id: int
    title: str = ""
    columns: list[Column] = field(default_factory=list)

    def find_column(self, column_id: str | None) -> Column | None:
        """Return the column with the given id, or None."""
        for column in self.columns:
            if column.id == column_id:
                return column
        return None

    @property
    def default_column_id(self) -> str | None:
        """Id of the leftmost column, where newly added items land."""
        return self.columns[0].id if self.columns else None


@dataclass
class ProjectItem:
    """Placement of one issue on one project board."""

    project_id: int
    issue_number: int
    column_id: str | None = None
