"""Classification of query documents into the closed set of served shapes."""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from hubsim.graphql.parser import ParsedQuery


class QueryKind(StrEnum):
    """Query and mutation shapes the handler knows how to answer."""

    ADD_PROJECT_ITEM = "add_project_item"
    UPDATE_PROJECT_ITEM_FIELD = "update_project_item_field"
    ISSUE_NODE_ID = "issue_node_id"
    PROJECT_INFO = "project_info"
    PROJECT_FIELDS = "project_fields"
    PROJECT_ITEMS = "project_items"
    UNKNOWN = "unknown"


ADD_ITEM_FIELD = "addProjectV2ItemById"
UPDATE_ITEM_FIELD = "updateProjectV2ItemFieldValue"


def references_project(names: frozenset[str]) -> bool:
    """True if the document mentions the project-board field or any of its types."""
    return "projectV2" in names or any(name.startswith("ProjectV2") for name in names)


def classify(query: ParsedQuery) -> QueryKind:
    """Pick the shape of a query. First match wins.

    Matching is on whole identifiers, so ``issues`` never reads as ``issue``
    and text inside string literals or comments is ignored.
    """
    names = query.names

    if query.operation == "mutation" and ADD_ITEM_FIELD in names:
        return QueryKind.ADD_PROJECT_ITEM
    if UPDATE_ITEM_FIELD in names:
        return QueryKind.UPDATE_PROJECT_ITEM_FIELD

    project = references_project(names)
    if query.operation == "query" and "issue" in names and not project:
        return QueryKind.ISSUE_NODE_ID
    if project:
        # Item listings select fieldValueByName / field { } inside items, so
        # items is checked before field.
        if "items" in names:
            return QueryKind.PROJECT_ITEMS
        if "field" in names or "fields" in names:
            return QueryKind.PROJECT_FIELDS
        return QueryKind.PROJECT_INFO

    return QueryKind.UNKNOWN
