"""Resolvers for the GraphQL query shapes served by the emulator."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from hubsim.graphql.classifier import ADD_ITEM_FIELD, UPDATE_ITEM_FIELD, QueryKind, classify
from hubsim.graphql.exceptions import (
    GraphQLError,
    InvalidInputError,
    NodeNotFoundError,
    NotFoundError,
    QuerySyntaxError,
)
from hubsim.graphql.parser import OWNER_ROOTS, ParsedQuery, apply_selection, parse
from hubsim.node_ids import (
    STATUS_FIELD_ID,
    STATUS_FIELD_NAME,
    InvalidNodeIdError,
    issue_node_id,
    parse_issue_node_id,
    parse_project_item_id,
    parse_project_node_id,
    project_item_id,
    project_node_id,
)
from hubsim.store import (
    ColumnNotFoundError,
    IssueNotFoundError,
    ProjectItemNotFoundError,
    ProjectNotFoundError,
)

if TYPE_CHECKING:
    from hubsim.store import Issue, Project, ProjectItem, StateStore

logger = logging.getLogger("hubsim.graphql")

DEFAULT_OWNER = "test-owner"
DEFAULT_REPO = "test-repo"
HTML_BASE_URL = "https://github.com"


def error_response(*errors: GraphQLError) -> dict[str, Any]:
    """Response body carrying GraphQL errors."""
    return {"errors": [e.to_dict() for e in errors]}


class GraphQLExecutor:
    """Answers GraphQL documents from the domain store.

    The document is read by the lightweight parser, classified into a
    :class:`QueryKind`, resolved into a full payload and then trimmed to the
    fields the document selects.
    """

    def __init__(self, store: StateStore) -> None:
        self._store = store

    def execute(self, query: object, variables: object = None) -> dict[str, Any]:
        """Run one request body's ``query`` with its ``variables``.

        Returns:
            Response body, ``{"data": ...}`` or ``{"errors": [...]}``.
        """
        if not isinstance(query, str) or not query.strip():
            return error_response(
                InvalidInputError("A query attribute must be specified and must be a string.")
            )
        if variables is None:
            variables = {}
        if not isinstance(variables, dict):
            return error_response(InvalidInputError("Variables must be a JSON object."))

        try:
            parsed = parse(query)
        except QuerySyntaxError as e:
            logger.debug("Falling back to loose query reading: %s", e)
            parsed = ParsedQuery.loose(query)

        kind = classify(parsed)
        logger.debug("GraphQL %s classified as %s", parsed.operation, kind)

        try:
            data = self._resolve(kind, parsed, variables)
        except GraphQLError as e:
            logger.info("GraphQL %s failed: %s", kind, e.message)
            return error_response(e)
        return {"data": apply_selection(data, parsed.selection)}

    def _resolve(self, kind: QueryKind, parsed: ParsedQuery, variables: dict[str, Any]) -> Any:
        if kind is QueryKind.ADD_PROJECT_ITEM:
            return self._add_project_item(variables)
        if kind is QueryKind.UPDATE_PROJECT_ITEM_FIELD:
            return self._update_project_item_field(variables)
        if kind is QueryKind.ISSUE_NODE_ID:
            return self._issue(variables)
        if kind in (QueryKind.PROJECT_INFO, QueryKind.PROJECT_FIELDS, QueryKind.PROJECT_ITEMS):
            return self._project(kind, parsed, variables)
        return {}

    # --- Queries ---

    def _issue(self, variables: dict[str, Any]) -> dict[str, Any]:
        number = _int_variable(variables, "number", "issueNumber")
        if number is None:
            raise InvalidInputError("Variable $number of type Int! was not provided.")
        try:
            issue = self._store.get_issue(number)
        except IssueNotFoundError as e:
            raise NotFoundError(f"Could not resolve to an Issue with number {number}") from e
        return {"repository": {"issue": _issue_payload(issue, _repo_url(variables))}}

    def _project(self, kind: QueryKind, parsed: ParsedQuery, variables: dict[str, Any]) -> Any:
        number = _project_number(variables)
        if number is None:
            return _place_project(parsed, None)

        try:
            project, board = self._store.get_board(number)
        except ProjectNotFoundError as e:
            raise NotFoundError(str(e)) from e

        payload = _project_payload(project, _owner(variables))
        if kind is QueryKind.PROJECT_FIELDS:
            status_field = _status_field_payload(project)
            payload["field"] = status_field
            payload["fields"] = {"totalCount": 1, "nodes": [status_field]}
        elif kind is QueryKind.PROJECT_ITEMS:
            repo_url = _repo_url(variables)
            nodes = [_item_payload(project, item, issue, repo_url) for item, issue in board]
            payload["items"] = {
                "totalCount": len(nodes),
                "nodes": nodes,
                "pageInfo": {"hasNextPage": False, "endCursor": None},
            }
        return _place_project(parsed, payload)

    # --- Mutations ---

    def _add_project_item(self, variables: dict[str, Any]) -> dict[str, Any]:
        data = _mutation_input(variables)
        project_token = _required(data, "projectId")
        content_token = _required(data, "contentId")
        project_id = _decode(parse_project_node_id, project_token)
        issue_number = _decode(parse_issue_node_id, content_token)

        try:
            item = self._store.add_project_item(project_id, issue_number)
        except ProjectNotFoundError as e:
            raise NotFoundError(str(e)) from e
        except IssueNotFoundError as e:
            raise NodeNotFoundError(content_token) from e

        item_id = project_item_id(item.issue_number)
        return {ADD_ITEM_FIELD: {"item": {"__typename": "ProjectV2Item", "id": item_id}}}

    def _update_project_item_field(self, variables: dict[str, Any]) -> dict[str, Any]:
        data = _mutation_input(variables)
        project_token = _required(data, "projectId")
        item_token = _required(data, "itemId")
        field_token = data.get("fieldId")
        if field_token is not None and field_token != STATUS_FIELD_ID:
            raise NodeNotFoundError(field_token)
        option_id = _option_id(data)

        project_id = _decode(parse_project_node_id, project_token)
        issue_number = _decode(parse_project_item_id, item_token)

        try:
            self._store.move_project_item(project_id, issue_number, option_id)
        except ProjectItemNotFoundError as e:
            raise NodeNotFoundError(item_token) from e
        except ProjectNotFoundError as e:
            raise NotFoundError(str(e)) from e
        except ColumnNotFoundError as e:
            raise NotFoundError(
                f"Could not resolve to a single select option with id '{option_id}'"
            ) from e

        return {
            UPDATE_ITEM_FIELD: {
                "projectV2Item": {"__typename": "ProjectV2Item", "id": item_token},
            }
        }


# --- Variable helpers ---


def _int_variable(variables: dict[str, Any], *keys: str) -> int | None:
    for key in keys:
        value = variables.get(key)
        if value is None:
            continue
        if isinstance(value, int) and not isinstance(value, bool):
            return value
        if isinstance(value, float) and value.is_integer():
            return int(value)
        if isinstance(value, str) and value.isdigit():
            return int(value)
        raise InvalidInputError(f"Variable ${key} of type Int! was provided invalid value")
    return None


def _project_number(variables: dict[str, Any]) -> int | None:
    """Project number from ``projectNumber``/``number``, else from ``projectId``."""
    number = _int_variable(variables, "projectNumber", "number")
    if number is not None:
        return number
    token = variables.get("projectId")
    if token is None:
        return None
    return _decode(parse_project_node_id, token)


def _decode(parser: Any, token: object) -> int:
    try:
        number: int = parser(token)
    except InvalidNodeIdError as e:
        raise NodeNotFoundError(token) from e
    return number


def _mutation_input(variables: dict[str, Any]) -> dict[str, Any]:
    """Mutation input from ``$input``, or the flat variables when the input
    object is written inline in the document."""
    data = variables.get("input")
    if data is None:
        return variables
    if not isinstance(data, dict):
        raise InvalidInputError("Variable $input must be an input object.")
    return data


def _required(data: dict[str, Any], key: str) -> Any:
    value = data.get(key)
    if value is None:
        raise InvalidInputError(f"Argument '{key}' on input is required.")
    return value


def _option_id(data: dict[str, Any]) -> str:
    value = data.get("value")
    candidates = []
    if isinstance(value, dict):
        candidates.append(value.get("singleSelectOptionId"))
    candidates += [data.get("singleSelectOptionId"), data.get("optionId")]
    for candidate in candidates:
        if isinstance(candidate, str) and candidate:
            return candidate
    raise InvalidInputError("A single select option id is required to update the field value.")


# --- Payload builders ---


def _owner(variables: dict[str, Any]) -> str:
    owner = variables.get("owner") or variables.get("login")
    return owner if isinstance(owner, str) else DEFAULT_OWNER


def _repo_url(variables: dict[str, Any]) -> str:
    repo = variables.get("repo") or variables.get("name")
    if not isinstance(repo, str):
        repo = DEFAULT_REPO
    return f"{HTML_BASE_URL}/{_owner(variables)}/{repo}"


def _place_project(parsed: ParsedQuery, payload: dict[str, Any] | None) -> dict[str, Any]:
    """Put a project payload under whichever root the document selected."""
    root = next((r for r in parsed.root_fields if r in OWNER_ROOTS), "repository")
    if root == "node":
        return {"node": payload}
    return {root: {"projectV2": payload}}


def _project_payload(project: Project, owner: str) -> dict[str, Any]:
    return {
        "__typename": "ProjectV2",
        "id": project_node_id(project.id),
        "number": project.id,
        "title": project.title,
        "url": f"{HTML_BASE_URL}/orgs/{owner}/projects/{project.id}",
    }


def _status_field_payload(project: Project) -> dict[str, Any]:
    return {
        "__typename": "ProjectV2SingleSelectField",
        "id": STATUS_FIELD_ID,
        "name": STATUS_FIELD_NAME,
        "dataType": "SINGLE_SELECT",
        "options": [{"id": c.id, "name": c.name} for c in project.columns],
    }


def _issue_payload(issue: Issue, repo_url: str) -> dict[str, Any]:
    return {
        "__typename": "Issue",
        "id": issue_node_id(issue.number),
        "number": issue.number,
        "title": issue.title,
        "body": issue.body,
        "state": issue.state.upper(),
        "url": f"{repo_url}/issues/{issue.number}",
        "labels": {"nodes": [{"name": label} for label in issue.labels]},
        "assignees": {"nodes": [{"login": issue.assignee}] if issue.assignee else []},
    }


def _item_payload(
    project: Project, item: ProjectItem, issue: Issue, repo_url: str
) -> dict[str, Any]:
    value = None
    if item.column_id is not None:
        column = project.find_column(item.column_id)
        value = {
            "__typename": "ProjectV2ItemFieldSingleSelectValue",
            "name": column.name if column else "",
            "optionId": item.column_id,
            "field": {
                "__typename": "ProjectV2SingleSelectField",
                "id": STATUS_FIELD_ID,
                "name": STATUS_FIELD_NAME,
            },
        }
    return {
        "__typename": "ProjectV2Item",
        "id": project_item_id(item.issue_number),
        "type": "ISSUE",
        "content": _issue_payload(issue, repo_url),
        "fieldValueByName": value,
        "fieldValues": {"nodes": [value] if value else []},
    }
