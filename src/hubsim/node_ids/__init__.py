"""Node ids - Opaque GraphQL identifiers for REST-side integers."""

from hubsim.node_ids.exceptions import InvalidNodeIdError, NodeIdError
from hubsim.node_ids.translator import (
    STATUS_FIELD_ID,
    STATUS_FIELD_NAME,
    NodeKind,
    comment_node_id,
    decode,
    decode_node_id,
    encode,
    issue_node_id,
    parse_issue_node_id,
    parse_project_item_id,
    parse_project_node_id,
    project_item_id,
    project_node_id,
)

__all__ = [
    "STATUS_FIELD_ID",
    "STATUS_FIELD_NAME",
    "InvalidNodeIdError",
    "NodeIdError",
    "NodeKind",
    "comment_node_id",
    "decode",
    "decode_node_id",
    "encode",
    "issue_node_id",
    "parse_issue_node_id",
    "parse_project_item_id",
    "parse_project_node_id",
    "project_item_id",
    "project_node_id",
]
