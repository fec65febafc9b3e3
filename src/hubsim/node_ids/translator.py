"""Translation between REST integers and GraphQL node ids.

Issue ``n`` is ``I_<n>``, project ``p`` is ``PVT_<p>``, the project item that
places issue ``n`` is ``PVTI_<n>`` and comment ``c`` is ``IC_<c>``. Encoding and
decoding are exact inverses: decoding accepts only a known prefix followed by a
positive integer without leading zeros.
"""

from __future__ import annotations

import re
from enum import StrEnum

from hubsim.node_ids.exceptions import InvalidNodeIdError

STATUS_FIELD_ID = "PVTSSF_Status"
STATUS_FIELD_NAME = "Status"

_TOKEN_RE = re.compile(r"([A-Z]+)_([1-9][0-9]*)")


class NodeKind(StrEnum):
    """Entity kinds and their node id prefixes."""

    ISSUE = "I"
    PROJECT = "PVT"
    PROJECT_ITEM = "PVTI"
    COMMENT = "IC"


def encode(kind: NodeKind, number: int) -> str:
    """Encode a positive integer as a node id of the given kind."""
    if isinstance(number, bool) or not isinstance(number, int) or number < 1:
        raise ValueError(f"Node ids encode positive integers, got {number!r}")
    return f"{kind.value}_{number}"


def decode_node_id(token: object) -> tuple[NodeKind, int]:
    """Decode any known node id into its kind and integer.

    Raises:
        InvalidNodeIdError: If the token is malformed or has an unknown prefix.
    """
    if not isinstance(token, str):
        raise InvalidNodeIdError(token)
    match = _TOKEN_RE.fullmatch(token)
    if match is None:
        raise InvalidNodeIdError(token)
    try:
        kind = NodeKind(match.group(1))
    except ValueError as e:
        raise InvalidNodeIdError(token) from e
    return kind, int(match.group(2))


def decode(kind: NodeKind, token: object) -> int:
    """Decode a node id that must be of the given kind.

    Raises:
        InvalidNodeIdError: If the token is malformed or of another kind.
    """
    try:
        actual, number = decode_node_id(token)
    except InvalidNodeIdError as e:
        raise InvalidNodeIdError(token, kind.name.lower()) from e
    if actual is not kind:
        raise InvalidNodeIdError(token, kind.name.lower())
    return number


def issue_node_id(number: int) -> str:
    return encode(NodeKind.ISSUE, number)


def parse_issue_node_id(token: object) -> int:
    return decode(NodeKind.ISSUE, token)


def project_node_id(project_id: int) -> str:
    return encode(NodeKind.PROJECT, project_id)


def parse_project_node_id(token: object) -> int:
    return decode(NodeKind.PROJECT, token)


def project_item_id(issue_number: int) -> str:
    return encode(NodeKind.PROJECT_ITEM, issue_number)


def parse_project_item_id(token: object) -> int:
    return decode(NodeKind.PROJECT_ITEM, token)


def comment_node_id(comment_id: int) -> str:
    return encode(NodeKind.COMMENT, comment_id)
