"""Exceptions raised by the REST surface."""


class APIError(Exception):
    """Base exception for REST surface errors."""

    status_code = 500

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class AuthenticationError(APIError):
    """Raised when a request's credential is rejected by the auth gate."""

    status_code = 401

    def __init__(self, message: str = "Bad credentials") -> None:
        super().__init__(message)

