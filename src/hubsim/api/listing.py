"""Issue list filtering and pagination."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

from starlette.datastructures import URL

if TYPE_CHECKING:
    from hubsim.store import Issue

DEFAULT_PER_PAGE = 30
MAX_PER_PAGE = 100

ASSIGNEE_NONE = "none"
ASSIGNEE_ANY = "*"


class StateFilter(StrEnum):
    """Values accepted by the ``state`` query parameter."""

    OPEN = "open"
    CLOSED = "closed"
    ALL = "all"


def parse_positive_int(value: str | None, default: int) -> int:
    """Read a paging parameter; anything but a positive integer gives ``default``."""
    if value is None or not (value.isascii() and value.strip().isdigit()):
        return default
    number = int(value)
    return number if number > 0 else default


def parse_labels(labels: str | None) -> list[str]:
    """Split a comma-separated label filter, trimming whitespace around names."""
    if not labels:
        return []
    return [name.strip() for name in labels.split(",") if name.strip()]


def filter_issues(
    issues: list[Issue],
    state: StateFilter = StateFilter.OPEN,
    labels: list[str] | None = None,
    assignee: str | None = None,
) -> list[Issue]:
    """Filter issues, preserving input order.

    An issue passes the label filter only if it carries every named label.
    ``assignee`` matches exactly, except ``none`` (unassigned) and ``*``
    (assigned to anyone).
    """
    required = set(labels or [])
    result = []
    for issue in issues:
        if state is not StateFilter.ALL and issue.state != state.value:
            continue
        if not required.issubset(issue.labels):
            continue
        if assignee == ASSIGNEE_NONE:
            if issue.assignee:
                continue
        elif assignee == ASSIGNEE_ANY:
            if not issue.assignee:
                continue
        elif assignee and issue.assignee != assignee:
            continue
        result.append(issue)
    return result


@dataclass(frozen=True)
class Page:
    """One page of a listing."""

    items: list[Issue]
    page: int
    per_page: int
    last_page: int

    @property
    def has_next(self) -> bool:
        return self.page < self.last_page


def paginate(issues: list[Issue], page: int = 1, per_page: int = DEFAULT_PER_PAGE) -> Page:
    """Slice out one page. Pages are 1-based; ``per_page`` is capped at 100."""
    per_page = min(per_page, MAX_PER_PAGE)
    last_page = max(1, -(-len(issues) // per_page))
    start = (page - 1) * per_page
    return Page(
        items=issues[start : start + per_page],
        page=page,
        per_page=per_page,
        last_page=last_page,
    )


def link_header(url: str, page: Page) -> str | None:
    """``Link`` header pointing at the next and last pages, or None on the last page.

    ``url`` is the request URL; its ``page`` and ``per_page`` parameters are
    replaced, other parameters are kept.
    """
    if not page.has_next:
        return None
    links = [
        f'<{_page_url(url, page.page + 1, page.per_page)}>; rel="next"',
        f'<{_page_url(url, page.last_page, page.per_page)}>; rel="last"',
    ]
    return ", ".join(links)


def _page_url(url: str, page: int, per_page: int) -> str:
    return str(URL(url).include_query_params(page=page, per_page=per_page))
