"""Unit tests for query classification."""

import pytest
from queries import (
    ADD_ITEM_MUTATION,
    ISSUE_QUERY,
    PROJECT_FIELDS_QUERY,
    PROJECT_INFO_QUERY,
    PROJECT_ITEMS_QUERY,
    UPDATE_ITEM_MUTATION,
)

from hubsim.graphql import ParsedQuery, QueryKind, classify, parse


@pytest.mark.unit
class TestClassify:
    """Tests for classify."""

    @pytest.mark.parametrize(
        ("query", "kind"),
        [
            (ISSUE_QUERY, QueryKind.ISSUE_NODE_ID),
            (PROJECT_INFO_QUERY, QueryKind.PROJECT_INFO),
            (PROJECT_FIELDS_QUERY, QueryKind.PROJECT_FIELDS),
            (PROJECT_ITEMS_QUERY, QueryKind.PROJECT_ITEMS),
            (ADD_ITEM_MUTATION, QueryKind.ADD_PROJECT_ITEM),
            (UPDATE_ITEM_MUTATION, QueryKind.UPDATE_PROJECT_ITEM_FIELD),
        ],
    )
    def test_known_shapes(self, query: str, kind: QueryKind) -> None:
        assert classify(parse(query)) is kind

    def test_items_win_over_field(self) -> None:
        """Item listings select a field inside items and are still item listings."""
        query = (
            "{ node(id: 1) { ... on ProjectV2 { items { nodes { "
            "fieldValues { nodes { ... on ProjectV2ItemFieldSingleSelectValue "
            "{ field { ... on ProjectV2SingleSelectField { name } } } } } } } } } }"
        )

        assert classify(parse(query)) is QueryKind.PROJECT_ITEMS

    def test_fields_plural(self) -> None:
        query = "{ node(id: 1) { ... on ProjectV2 { fields(first: 20) { nodes { id } } } } }"

        assert classify(parse(query)) is QueryKind.PROJECT_FIELDS

    def test_issue_inside_project_is_project(self) -> None:
        query = (
            "{ repository { projectV2(number: 1) { items { nodes { "
            "content { ... on Issue { id } } } } } } }"
        )

        assert classify(parse(query)) is QueryKind.PROJECT_ITEMS

    def test_issues_plural_is_not_issue_lookup(self) -> None:
        assert classify(parse("{ repository { issues(first: 5) { nodes { id } } } }")) is (
            QueryKind.UNKNOWN
        )

    def test_add_item_only_as_mutation(self) -> None:
        assert classify(parse("{ addProjectV2ItemById { item { id } } }")) is not (
            QueryKind.ADD_PROJECT_ITEM
        )

    def test_other_mutation_is_unknown(self) -> None:
        query = "mutation($id: ID!) { closeIssue(input: {issueId: $id}) { issue { id } } }"

        assert classify(parse(query)) is QueryKind.UNKNOWN

    def test_viewer_is_unknown(self) -> None:
        assert classify(parse("{ viewer { login } }")) is QueryKind.UNKNOWN

    def test_loose_reading_still_classifies(self) -> None:
        parsed = ParsedQuery.loose("mutation { updateProjectV2ItemFieldValue(input: {")

        assert classify(parsed) is QueryKind.UPDATE_PROJECT_ITEM_FIELD
