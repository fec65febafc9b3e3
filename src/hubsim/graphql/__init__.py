"""GraphQL handler - Query classification and resolution against the store."""

from hubsim.graphql.classifier import QueryKind, classify
from hubsim.graphql.exceptions import (
    GraphQLError,
    InvalidInputError,
    NodeNotFoundError,
    NotFoundError,
    QuerySyntaxError,
    UnauthorizedError,
)
from hubsim.graphql.parser import ParsedQuery, apply_selection, parse
from hubsim.graphql.resolvers import GraphQLExecutor, error_response

__all__ = [
    "GraphQLError",
    "GraphQLExecutor",
    "InvalidInputError",
    "NodeNotFoundError",
    "NotFoundError",
    "ParsedQuery",
    "QueryKind",
    "QuerySyntaxError",
    "UnauthorizedError",
    "apply_selection",
    "classify",
    "error_response",
    "parse",
]
