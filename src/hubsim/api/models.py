"""Pydantic models for the REST surface."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

from hubsim.node_ids import comment_node_id, issue_node_id
from hubsim.store import Comment, Issue

API_BASE_URL = "https://api.github.com"
HTML_BASE_URL = "https://github.com"
DOCUMENTATION_URL = "https://docs.github.com/rest"
DEFAULT_LABEL_COLOR = "ededed"


class ErrorResponse(BaseModel):
    """Error body in the host's shape."""

    message: str
    documentation_url: str = DOCUMENTATION_URL


# User and repository models


class UserRef(BaseModel):
    """Minimal user object embedded in other resources."""

    login: str


class UserResponse(BaseModel):
    """Response model for the authenticated user."""

    login: str
    id: int = 1
    type: str = "User"


class RepositoryResponse(BaseModel):
    """Static repository descriptor echoing the requested owner and name."""

    id: int = 1
    name: str
    full_name: str
    owner: UserRef
    private: bool = False
    html_url: str
    description: str = "Test repository"
    fork: bool = False
    default_branch: str = "main"


def repository_to_response(owner: str, repo: str) -> RepositoryResponse:
    return RepositoryResponse(
        name=repo,
        full_name=f"{owner}/{repo}",
        owner=UserRef(login=owner),
        html_url=f"{HTML_BASE_URL}/{owner}/{repo}",
    )


# Label models


class LabelsBody(BaseModel):
    """Request model for adding or replacing issue labels."""

    labels: list[str] = Field(default_factory=list)


class LabelResponse(BaseModel):
    """Response model for a label attached to an issue."""

    id: int
    name: str
    color: str = DEFAULT_LABEL_COLOR
    default: bool = False


def labels_to_response(labels: list[str]) -> list[LabelResponse]:
    """Convert label names to label objects, numbered by position."""
    return [LabelResponse(id=i, name=name) for i, name in enumerate(labels, start=1)]


# Issue models


class IssueCreate(BaseModel):
    """Request model for creating an issue."""

    title: str
    body: str | None = None
    labels: list[str] | None = None
    assignee: str | None = None
    assignees: list[str] | None = None

    def resolved_assignee(self) -> str | None:
        """First of ``assignees`` if given, else ``assignee``."""
        if self.assignees:
            return self.assignees[0]
        return self.assignee


class IssueUpdate(BaseModel):
    """Request model for updating an issue (partial update).

    ``assignee`` distinguishes an explicit null (unassign) from an absent
    field, so callers check ``model_fields_set``.
    """

    title: str | None = None
    body: str | None = None
    state: Literal["open", "closed"] | None = None
    labels: list[str] | None = None
    assignee: str | None = None
    assignees: list[str] | None = None

    def resolved_assignee(self) -> str | None:
        """New assignee, ``""`` to unassign, or None to leave untouched."""
        if self.assignees is not None:
            return self.assignees[0] if self.assignees else ""
        if "assignee" in self.model_fields_set:
            return self.assignee or ""
        return None

    def resolved_labels(self) -> list[str] | None:
        """Replacement label set; an empty list leaves labels untouched."""
        return self.labels or None


class IssueResponse(BaseModel):
    """Response model for an issue."""

    id: int
    node_id: str
    number: int
    title: str
    body: str
    state: str
    labels: list[LabelResponse]
    assignee: UserRef | None
    assignees: list[UserRef]
    user: UserRef
    comments: int
    created_at: datetime
    updated_at: datetime
    url: str
    html_url: str


def issue_to_response(
    issue: Issue, owner: str, repo: str, *, author: str, comments: int = 0
) -> IssueResponse:
    """Convert a store Issue to IssueResponse."""
    assignee = UserRef(login=issue.assignee) if issue.assignee else None
    return IssueResponse(
        id=issue.number,
        node_id=issue_node_id(issue.number),
        number=issue.number,
        title=issue.title,
        body=issue.body,
        state=issue.state,
        labels=labels_to_response(issue.labels),
        assignee=assignee,
        assignees=[assignee] if assignee else [],
        user=UserRef(login=author),
        comments=comments,
        created_at=issue.created_at,
        updated_at=issue.updated_at,
        url=f"{API_BASE_URL}/repos/{owner}/{repo}/issues/{issue.number}",
        html_url=f"{HTML_BASE_URL}/{owner}/{repo}/issues/{issue.number}",
    )


# Comment models


class CommentCreate(BaseModel):
    """Request model for creating a comment."""

    body: str


class CommentResponse(BaseModel):
    """Response model for an issue comment."""

    id: int
    node_id: str
    user: UserRef
    body: str
    created_at: datetime
    updated_at: datetime


def comment_to_response(comment: Comment) -> CommentResponse:
    """Convert a store Comment to CommentResponse."""
    return CommentResponse(
        id=comment.id,
        node_id=comment_node_id(comment.id),
        user=UserRef(login=comment.author),
        body=comment.body,
        created_at=comment.created_at,
        updated_at=comment.created_at,
    )
