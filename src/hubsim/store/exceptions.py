"""Custom exceptions for the domain store."""


class StoreError(Exception):
    """Base exception for domain store errors."""


class IssueNotFoundError(StoreError):
    """Issue with given number does not exist."""

    def __init__(self, number: int) -> None:
        super().__init__(f"Issue #{number} not found")
        self.number = number


class ProjectNotFoundError(StoreError):
    """Project with given number does not exist."""

    def __init__(self, project_id: int) -> None:
        super().__init__(f"Could not find project with number {project_id}")
        self.project_id = project_id


class ProjectInvalidError(ProjectNotFoundError):
    """Project number was explicitly marked invalid."""


class ColumnNotFoundError(StoreError):
    """Column id does not belong to the project."""

    def __init__(self, project_id: int, column_id: str | None) -> None:
        super().__init__(f"Column {column_id!r} not found in project {project_id}")
        self.project_id = project_id
        self.column_id = column_id


class ProjectItemNotFoundError(StoreError):
    """Issue has no placement on the project board."""

    def __init__(self, project_id: int, issue_number: int) -> None:
        super().__init__(f"Issue #{issue_number} is not an item of project {project_id}")
        self.project_id = project_id
        self.issue_number = issue_number
