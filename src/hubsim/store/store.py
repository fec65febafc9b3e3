"""StateStore - Authoritative state shared by the REST and GraphQL surfaces."""

from __future__ import annotations

import copy
import logging
from typing import TYPE_CHECKING

from hubsim.store.exceptions import (
    ColumnNotFoundError,
    IssueNotFoundError,
    ProjectInvalidError,
    ProjectItemNotFoundError,
    ProjectNotFoundError,
)
from hubsim.store.locks import ReadWriteLock
from hubsim.store.models import (
    Column,
    Comment,
    Issue,
    IssueState,
    Project,
    ProjectItem,
    unique_labels,
    utcnow,
)

if TYPE_CHECKING:
    from collections.abc import Iterable

logger = logging.getLogger("hubsim.store")

DEFAULT_AUTHENTICATED_USER = "test-user"


class StateStore:
    """Main API for domain store operations.

    Holds issues, comments, projects, columns and project-item placements.
    Every read runs under the shared lock and every mutation under the
    exclusive lock, so counters are bumped in the same critical section as the
    entity they number. Returned entities are copies; mutate through the store.
    """

    def __init__(self) -> None:
        self._lock = ReadWriteLock()
        self._init_state()

    def _init_state(self) -> None:
        self._issues: dict[int, Issue] = {}
        self._comments: dict[int, list[Comment]] = {}
        self._projects: dict[int, Project] = {}
        self._project_items: dict[int, dict[int, ProjectItem]] = {}
        self._invalid_project_ids: set[int] = set()
        self._next_issue_number = 1
        self._next_comment_id = 1
        self._authenticated_user = DEFAULT_AUTHENTICATED_USER

    def reset(self) -> None:
        """Discard all state, as if freshly constructed."""
        with self._lock.write():
            self._init_state()
        logger.debug("Store reset")

    # --- Settings ---

    @property
    def authenticated_user(self) -> str:
        with self._lock.read():
            return self._authenticated_user

    @authenticated_user.setter
    def authenticated_user(self, login: str) -> None:
        with self._lock.write():
            self._authenticated_user = login

    # --- Issue Operations ---

    def set_issues(self, issues: Iterable[Issue]) -> None:
        """Replace the full issue set.

        The next issue number moves one past the highest seeded number. It never
        moves backwards, so numbers handed out earlier are not reused.

        Raises:
            ValueError: If an issue number is not positive or appears twice.
        """
        seeded: dict[int, Issue] = {}
        for issue in issues:
            if issue.number < 1:
                raise ValueError(f"Issue number must be positive, got {issue.number}")
            if issue.number in seeded:
                raise ValueError(f"Duplicate issue number {issue.number}")
            stored = copy.deepcopy(issue)
            stored.labels = unique_labels(stored.labels)
            seeded[stored.number] = stored

        with self._lock.write():
            self._issues = seeded
            if seeded:
                self._next_issue_number = max(self._next_issue_number, max(seeded) + 1)
        logger.debug("Seeded %d issue(s)", len(seeded))

    def create_issue(
        self,
        title: str,
        body: str = "",
        labels: list[str] | None = None,
        assignee: str | None = None,
    ) -> Issue:
        """Create an open issue with the next issue number."""
        with self._lock.write():
            issue = Issue(
                number=self._next_issue_number,
                title=title,
                body=body,
                state=IssueState.OPEN.value,
                labels=unique_labels(labels),
                assignee=assignee or None,
            )
            self._next_issue_number += 1
            self._issues[issue.number] = issue
            logger.info("Created issue #%d", issue.number)
            return copy.deepcopy(issue)

    def get_issue(self, number: int) -> Issue:
        """Get an issue by number.

        Raises:
            IssueNotFoundError: If the issue doesn't exist.
        """
        with self._lock.read():
            return copy.deepcopy(self._require_issue(number))

    def list_issues(self) -> list[Issue]:
        """All issues, ascending by number."""
        with self._lock.read():
            return [copy.deepcopy(self._issues[n]) for n in sorted(self._issues)]

    def update_issue(
        self,
        number: int,
        *,
        title: str | None = None,
        body: str | None = None,
        state: str | None = None,
        labels: list[str] | None = None,
        assignee: str | None = None,
    ) -> Issue:
        """Update issue fields. Only provided (non-None) fields are changed.

        An empty ``assignee`` string clears the assignee. ``labels`` replaces the
        label set wholesale.

        Raises:
            IssueNotFoundError: If the issue doesn't exist.
            ValueError: If ``state`` is not open or closed.
        """
        new_state = IssueState(state).value if state is not None else None
        with self._lock.write():
            issue = self._require_issue(number)
            if title is not None:
                issue.title = title
            if body is not None:
                issue.body = body
            if new_state is not None:
                issue.state = new_state
            if labels is not None:
                issue.labels = unique_labels(labels)
            if assignee is not None:
                issue.assignee = assignee or None
            issue.updated_at = utcnow()
            logger.info("Updated issue #%d", number)
            return copy.deepcopy(issue)

    # --- Label Operations ---

    def get_labels(self, number: int) -> list[str]:
        with self._lock.read():
            return list(self._require_issue(number).labels)

    def add_labels(self, number: int, labels: list[str]) -> list[str]:
        """Append labels not already present; returns the resulting set."""
        with self._lock.write():
            issue = self._require_issue(number)
            issue.labels = unique_labels(issue.labels + list(labels))
            issue.updated_at = utcnow()
            return list(issue.labels)

    def set_labels(self, number: int, labels: list[str]) -> list[str]:
        """Replace the label set; returns the resulting set."""
        with self._lock.write():
            issue = self._require_issue(number)
            issue.labels = unique_labels(labels)
            issue.updated_at = utcnow()
            return list(issue.labels)

    def remove_label(self, number: int, name: str) -> list[str]:
        """Remove one label if present; returns the remaining set."""
        with self._lock.write():
            issue = self._require_issue(number)
            issue.labels = [label for label in issue.labels if label != name]
            issue.updated_at = utcnow()
            return list(issue.labels)

    # --- Comment Operations ---

    def set_comments(self, issue_number: int, comments: Iterable[Comment]) -> None:
        """Seed the comments of an issue, replacing any existing ones.

        Raises:
            ValueError: If a comment id is not positive, repeats, or belongs to
                another issue's comment.
        """
        seeded = [copy.deepcopy(c) for c in comments]
        ids = [c.id for c in seeded]
        if any(i < 1 for i in ids):
            raise ValueError(f"Comment ids must be positive, got {ids}")
        if len(ids) != len(set(ids)):
            raise ValueError(f"Duplicate comment id in {ids}")
        with self._lock.write():
            for number, existing in self._comments.items():
                if number == issue_number:
                    continue
                taken = set(ids).intersection(c.id for c in existing)
                if taken:
                    raise ValueError(
                        f"Comment id {min(taken)} already belongs to issue #{number}"
                    )
            self._comments[issue_number] = seeded
            if seeded:
                self._next_comment_id = max(
                    self._next_comment_id, max(c.id for c in seeded) + 1
                )

    def list_comments(self, issue_number: int) -> list[Comment]:
        """Comments of an issue in creation order.

        Raises:
            IssueNotFoundError: If the issue doesn't exist.
        """
        with self._lock.read():
            self._require_issue(issue_number)
            return copy.deepcopy(self._comments.get(issue_number, []))

    def comment_counts(self) -> dict[int, int]:
        """Number of comments per issue number, for issues that have any."""
        with self._lock.read():
            return {n: len(c) for n, c in self._comments.items() if c}

    def add_comment(self, issue_number: int, body: str) -> Comment:
        """Append a comment authored by the authenticated user."""
        with self._lock.write():
            issue = self._require_issue(issue_number)
            comment = Comment(
                id=self._next_comment_id,
                author=self._authenticated_user,
                body=body,
            )
            self._next_comment_id += 1
            self._comments.setdefault(issue_number, []).append(comment)
            issue.updated_at = utcnow()
            logger.info("Added comment %d to issue #%d", comment.id, issue_number)
            return copy.deepcopy(comment)

    # --- Project Operations ---

    def set_project(self, project_id: int, title: str, columns: Iterable[Column]) -> Project:
        """Create or replace a project board and its ordered columns.

        Existing placements are kept. Those whose column is no longer part of
        the board move to the new first column.
        """
        project = Project(id=project_id, title=title, columns=[copy.copy(c) for c in columns])
        ids = [c.id for c in project.columns]
        if len(ids) != len(set(ids)):
            raise ValueError(f"Duplicate column id in project {project_id}")
        with self._lock.write():
            self._projects[project_id] = project
            items = self._project_items.setdefault(project_id, {})
            for item in items.values():
                if project.find_column(item.column_id) is None:
                    item.column_id = project.default_column_id
            return copy.deepcopy(project)

    def get_project(self, project_id: int) -> Project:
        """Get a project by number, ignoring invalid markings.

        Raises:
            ProjectNotFoundError: If the project doesn't exist.
        """
        with self._lock.read():
            project = self._projects.get(project_id)
            if project is None:
                raise ProjectNotFoundError(project_id)
            return copy.deepcopy(project)

    def list_projects(self) -> list[Project]:
        with self._lock.read():
            return [copy.deepcopy(self._projects[p]) for p in sorted(self._projects)]

    def mark_project_invalid(self, project_id: int) -> None:
        """Make every lookup of this project number fail."""
        with self._lock.write():
            self._invalid_project_ids.add(project_id)

    def is_project_invalid(self, project_id: int) -> bool:
        with self._lock.read():
            return project_id in self._invalid_project_ids

    def resolve_project(self, project_id: int) -> Project:
        """Look a project up the way the host does.

        The invalid marking is checked before existence, so a marked project
        fails even when an entry exists under that number.

        Raises:
            ProjectInvalidError: If the project number was marked invalid.
            ProjectNotFoundError: If the project doesn't exist.
        """
        with self._lock.read():
            return copy.deepcopy(self._resolve_project(project_id))

    def get_board(self, project_id: int) -> tuple[Project, list[tuple[ProjectItem, Issue]]]:
        """Resolve a project and its placements in one consistent read.

        Placements whose issue no longer exists are skipped.

        Raises:
            ProjectInvalidError: If the project number was marked invalid.
            ProjectNotFoundError: If the project doesn't exist.
        """
        with self._lock.read():
            project = self._resolve_project(project_id)
            items = self._project_items.get(project_id, {})
            board = [
                (copy.copy(items[n]), copy.deepcopy(self._issues[n]))
                for n in sorted(items)
                if n in self._issues
            ]
            return copy.deepcopy(project), board

    # --- Project Item Operations ---

    def set_project_item(
        self, project_id: int, issue_number: int, column_id: str
    ) -> ProjectItem:
        """Place an issue in a column, creating or overwriting the placement.

        Raises:
            ProjectNotFoundError: If the project doesn't exist.
            ColumnNotFoundError: If the column is not one of the project's.
        """
        with self._lock.write():
            project = self._projects.get(project_id)
            if project is None:
                raise ProjectNotFoundError(project_id)
            if project.find_column(column_id) is None:
                raise ColumnNotFoundError(project_id, column_id)
            item = ProjectItem(project_id, issue_number, column_id)
            self._project_items.setdefault(project_id, {})[issue_number] = item
            return copy.copy(item)

    def get_project_item(self, project_id: int, issue_number: int) -> ProjectItem:
        """Get the placement of an issue on a project.

        Raises:
            ProjectItemNotFoundError: If the issue is not on the board.
        """
        with self._lock.read():
            return copy.copy(self._require_item(project_id, issue_number))

    def list_project_items(self, project_id: int) -> list[ProjectItem]:
        """All placements of a project, ascending by issue number."""
        with self._lock.read():
            items = self._project_items.get(project_id, {})
            return [copy.copy(items[n]) for n in sorted(items)]

    def add_project_item(self, project_id: int, issue_number: int) -> ProjectItem:
        """Add an issue to a project board.

        New items land in the project's first column. Adding an issue that is
        already on the board returns the existing placement unchanged.

        Raises:
            ProjectNotFoundError: If the project is unknown or marked invalid.
            IssueNotFoundError: If the issue doesn't exist.
        """
        with self._lock.write():
            project = self._resolve_project(project_id)
            self._require_issue(issue_number)
            items = self._project_items.setdefault(project_id, {})
            item = items.get(issue_number)
            if item is None:
                item = ProjectItem(project_id, issue_number, project.default_column_id)
                items[issue_number] = item
                logger.info("Added issue #%d to project %d", issue_number, project_id)
            return copy.copy(item)

    def move_project_item(
        self, project_id: int, issue_number: int, column_id: str
    ) -> ProjectItem:
        """Move an existing placement to another column of the same project.

        Raises:
            ProjectNotFoundError: If the project is unknown or marked invalid.
            ProjectItemNotFoundError: If the issue is not on the board.
            ColumnNotFoundError: If the column is not one of the project's.
        """
        with self._lock.write():
            project = self._resolve_project(project_id)
            item = self._require_item(project_id, issue_number)
            if project.find_column(column_id) is None:
                raise ColumnNotFoundError(project_id, column_id)
            item.column_id = column_id
            logger.info(
                "Moved issue #%d to column %s in project %d", issue_number, column_id, project_id
            )
            return copy.copy(item)

    # --- Internal helpers (caller holds the lock) ---

    def _require_issue(self, number: int) -> Issue:
        issue = self._issues.get(number)
        if issue is None:
            raise IssueNotFoundError(number)
        return issue

    def _resolve_project(self, project_id: int) -> Project:
        if project_id in self._invalid_project_ids:
            raise ProjectInvalidError(project_id)
        project = self._projects.get(project_id)
        if project is None:
            raise ProjectNotFoundError(project_id)
        return project

    def _require_item(self, project_id: int, issue_number: int) -> ProjectItem:
        item = self._project_items.get(project_id, {}).get(issue_number)
        if item is None:
            raise ProjectItemNotFoundError(project_id, issue_number)
        return item
