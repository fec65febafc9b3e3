"""Reading of GraphQL query documents.

Documents are parsed with graphql-core, but never validated against a schema.
The handler only needs the operation type, every identifier the document
mentions (string literals, comments and variable names excluded) and the tree
of fields it selects, so it can classify known query shapes and trim responses
to the selected fields.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any

from graphql import GraphQLSyntaxError
from graphql import parse as parse_document
from graphql.language import (
    FieldNode,
    FragmentDefinitionNode,
    FragmentSpreadNode,
    InlineFragmentNode,
    NameNode,
    OperationDefinitionNode,
    SelectionSetNode,
    VariableNode,
    Visitor,
    visit,
)

from hubsim.graphql.exceptions import QuerySyntaxError

# response key -> (field name, sub-selection or None for a leaf)
Selection = dict[str, tuple[str, "Selection | None"]]

OPERATION_TYPES = ("query", "mutation", "subscription")
OWNER_ROOTS = ("node", "user", "organization", "repository")

_LOOSE_NAME_RE = re.compile(r"[_A-Za-z][_0-9A-Za-z]*")


@dataclass(frozen=True)
class ParsedQuery:
    """What the handler needs to know about a query document."""

    operation: str
    names: frozenset[str]
    selection: Selection | None = None
    root_fields: tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def loose(cls, text: str) -> ParsedQuery:
        """Best-effort reading of text that does not parse.

        Identifiers are collected with a plain regex and no selection is
        available, so responses go out untrimmed.
        """
        words = _LOOSE_NAME_RE.findall(text)
        operation = words[0] if words and words[0] in OPERATION_TYPES else "query"
        names = frozenset(words)
        roots = tuple(root for root in OWNER_ROOTS if root in names)
        return cls(operation=operation, names=names, selection=None, root_fields=roots)


class _NameCollector(Visitor):
    """Gathers every name in a document except variable names."""

    def __init__(self) -> None:
        super().__init__()
        self.names: set[str] = set()

    def enter_variable(self, _node: VariableNode, *_args: Any) -> Any:
        return self.SKIP

    def enter_name(self, node: NameNode, *_args: Any) -> None:
        self.names.add(node.value)


def parse(text: str) -> ParsedQuery:
    """Parse the first operation of a query document.

    Fragment definitions anywhere in the document are collected and their
    spreads expanded in place. Later operations are ignored.

    Raises:
        QuerySyntaxError: If the text is not a readable query document.
    """
    try:
        document = parse_document(text, no_location=True)
    except GraphQLSyntaxError as e:
        raise QuerySyntaxError(e.message) from e

    operations = [d for d in document.definitions if isinstance(d, OperationDefinitionNode)]
    if not operations:
        raise QuerySyntaxError("Document contains no operation")
    fragments = {
        d.name.value: d for d in document.definitions if isinstance(d, FragmentDefinitionNode)
    }

    operation = operations[0]
    selection = _read_selection_set(operation.selection_set, fragments, frozenset())

    collector = _NameCollector()
    visit(document, collector)

    return ParsedQuery(
        operation=operation.operation.value,
        names=frozenset(collector.names),
        selection=selection,
        root_fields=tuple(field_name for field_name, _ in selection.values()),
    )


def apply_selection(value: Any, selection: Selection | None) -> Any:
    """Keep only the selected fields of a response value.

    Aliased fields come out under their alias. Fields the value does not have
    are left out rather than invented.
    """
    if selection is None:
        return value
    if isinstance(value, list):
        return [apply_selection(v, selection) for v in value]
    if not isinstance(value, dict):
        return value
    result: dict[str, Any] = {}
    for key, (field_name, sub) in selection.items():
        if field_name in value:
            result[key] = apply_selection(value[field_name], sub)
    return result


def _read_selection_set(
    node: SelectionSetNode,
    fragments: dict[str, FragmentDefinitionNode],
    active: frozenset[str],
) -> Selection:
    """Flatten a selection set, merging inline fragments and expanding spreads."""
    selection: Selection = {}
    for item in node.selections:
        if isinstance(item, FieldNode):
            key = item.alias.value if item.alias else item.name.value
            sub = (
                _read_selection_set(item.selection_set, fragments, active)
                if item.selection_set
                else None
            )
            _merge(selection, {key: (item.name.value, sub)})
        elif isinstance(item, InlineFragmentNode):
            _merge(selection, _read_selection_set(item.selection_set, fragments, active))
        elif isinstance(item, FragmentSpreadNode):
            name = item.name.value
            if name not in fragments:
                raise QuerySyntaxError(f"Unknown fragment {name!r}")
            if name in active:
                raise QuerySyntaxError(f"Fragment {name!r} spreads itself")
            spread = fragments[name].selection_set
            _merge(selection, _read_selection_set(spread, fragments, active | {name}))
    return selection


def _merge(target: Selection, source: Selection) -> None:
    """Merge selections; repeated fields combine their sub-selections."""
    for key, (field_name, sub) in source.items():
        existing = target.get(key)
        if existing is None:
            target[key] = (field_name, sub)
        elif existing[1] is None or sub is None:
            target[key] = (field_name, existing[1] if sub is None else sub)
        else:
            merged = dict(existing[1])
            _merge(merged, sub)
            target[key] = (field_name, merged)
