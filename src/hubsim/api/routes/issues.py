"""Issue endpoints."""

from fastapi import APIRouter, Request, Response, status

from hubsim.api.dependencies import StoreDep
from hubsim.api.listing import (
    DEFAULT_PER_PAGE,
    StateFilter,
    filter_issues,
    link_header,
    paginate,
    parse_labels,
    parse_positive_int,
)
from hubsim.api.models import IssueCreate, IssueResponse, IssueUpdate, issue_to_response

router = APIRouter(prefix="/repos/{owner}/{repo}/issues", tags=["issues"])


@router.get("", response_model=list[IssueResponse])
def list_issues(
    owner: str,
    repo: str,
    request: Request,
    response: Response,
    store: StoreDep,
    state: StateFilter = StateFilter.OPEN,
    labels: str | None = None,
    assignee: str | None = None,
    per_page: str | None = None,
    page: str | None = None,
) -> list[IssueResponse]:
    """List issues, ascending by number."""
    issues = filter_issues(
        store.list_issues(),
        state=state,
        labels=parse_labels(labels),
        assignee=assignee,
    )
    result = paginate(
        issues,
        page=parse_positive_int(page, 1),
        per_page=parse_positive_int(per_page, DEFAULT_PER_PAGE),
    )

    link = link_header(str(request.url), result)
    if link is not None:
        response.headers["Link"] = link

    author = store.authenticated_user
    counts = store.comment_counts()
    return [
        issue_to_response(i, owner, repo, author=author, comments=counts.get(i.number, 0))
        for i in result.items
    ]


@router.post("", response_model=IssueResponse, status_code=status.HTTP_201_CREATED)
def create_issue(owner: str, repo: str, issue: IssueCreate, store: StoreDep) -> IssueResponse:
    """Create a new open issue."""
    created = store.create_issue(
        title=issue.title,
        body=issue.body or "",
        labels=issue.labels,
        assignee=issue.resolved_assignee(),
    )
    return issue_to_response(created, owner, repo, author=store.authenticated_user)


@router.get("/{number:int}", response_model=IssueResponse)
def get_issue(owner: str, repo: str, number: int, store: StoreDep) -> IssueResponse:
    """Get an issue by number."""
    issue = store.get_issue(number)
    comments = store.comment_counts().get(number, 0)
    return issue_to_response(
        issue, owner, repo, author=store.authenticated_user, comments=comments
    )


@router.patch("/{number:int}", response_model=IssueResponse)
def update_issue(
    owner: str, repo: str, number: int, issue: IssueUpdate, store: StoreDep
) -> IssueResponse:
    """Update an issue (partial update)."""
    updated = store.update_issue(
        number,
        title=issue.title,
        body=issue.body,
        state=issue.state,
        labels=issue.resolved_labels(),
        assignee=issue.resolved_assignee(),
    )
    comments = store.comment_counts().get(number, 0)
    return issue_to_response(
        updated, owner, repo, author=store.authenticated_user, comments=comments
    )
