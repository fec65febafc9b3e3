"""Custom exceptions for the GraphQL handler.

Each maps onto one entry of the ``errors`` array of a GraphQL response.
"""

from __future__ import annotations

from typing import Any


class GraphQLError(Exception):
    """Base exception for GraphQL-level errors."""

    error_type = "INTERNAL"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict[str, Any]:
        """Error entry in the shape the host API uses."""
        return {"type": self.error_type, "message": self.message}


class NotFoundError(GraphQLError):
    """Referenced entity does not exist."""

    error_type = "NOT_FOUND"


class NodeNotFoundError(NotFoundError):
    """Node id is malformed or refers to nothing."""

    def __init__(self, node_id: object) -> None:
        super().__init__(f"Could not resolve to a node with the global id of '{node_id}'")
        self.node_id = node_id


class InvalidInputError(GraphQLError):
    """Variables or mutation input are missing or of the wrong type."""

    error_type = "UNPROCESSABLE"


class UnauthorizedError(GraphQLError):
    """Credential rejected by the auth gate."""

    error_type = "UNAUTHORIZED"

    def __init__(self, message: str = "Bad credentials") -> None:
        super().__init__(message)


class QuerySyntaxError(GraphQLError):
    """Query text could not be read as a selection set."""

    error_type = "PARSE_ERROR"
