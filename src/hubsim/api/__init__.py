"""REST and GraphQL HTTP surface."""

from hubsim.api.app import create_app
from hubsim.api.auth import AuthGate, parse_authorization
from hubsim.api.exceptions import APIError, AuthenticationError

__all__ = [
    "APIError",
    "AuthGate",
    "AuthenticationError",
    "create_app",
    "parse_authorization",
]
