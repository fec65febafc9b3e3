"""Custom exceptions for node id translation."""


class NodeIdError(Exception):
    """Base exception for node id errors."""


class InvalidNodeIdError(NodeIdError):
    """Value is not a well-formed node id of the expected kind."""

    def __init__(self, value: object, kind: str | None = None) -> None:
        expected = f" {kind}" if kind else ""
        super().__init__(f"Not a valid{expected} node id: {value!r}")
        self.value = value
        self.kind = kind
