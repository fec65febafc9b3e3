"""Domain store - Issues, comments, project boards and their placements."""

from hubsim.store.exceptions import (
    ColumnNotFoundError,
    IssueNotFoundError,
    ProjectInvalidError,
    ProjectItemNotFoundError,
    ProjectNotFoundError,
    StoreError,
)
from hubsim.store.locks import ReadWriteLock
from hubsim.store.models import (
    Column,
    Comment,
    Issue,
    IssueState,
    Project,
    ProjectItem,
)
from hubsim.store.store import DEFAULT_AUTHENTICATED_USER, StateStore

__all__ = [
    "DEFAULT_AUTHENTICATED_USER",
    "Column",
    "ColumnNotFoundError",
    "Comment",
    "Issue",
    "IssueNotFoundError",
    "IssueState",
    "Project",
    "ProjectInvalidError",
    "ProjectItem",
    "ProjectItemNotFoundError",
    "ProjectNotFoundError",
    "ReadWriteLock",
    "StateStore",
    "StoreError",
]
