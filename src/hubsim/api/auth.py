"""Credential check applied before every handler."""

from __future__ import annotations

import logging
import re
import threading
from dataclasses import dataclass, field

from hubsim.api.exceptions import AuthenticationError
from hubsim.logging import sanitize_for_log

logger = logging.getLogger("hubsim.auth")

DEFAULT_REJECTED_TOKENS = ("invalid_token",)

_SCHEME_RE = re.compile(r"^(?P<scheme>token|bearer)\s+(?P<credential>\S+)\s*$", re.IGNORECASE)


def parse_authorization(header: str | None) -> str | None:
    """Extract the credential from ``token <x>`` or ``Bearer <x>``.

    Returns None for an absent header or any other form.
    """
    if not header:
        return None
    match = _SCHEME_RE.match(header.strip())
    if match is None:
        return None
    return match.group("credential")


@dataclass
class AuthSettings:
    """Snapshot of the gate's configuration.

    Attributes:
        expected_token: When set, only this credential is accepted.
        reject_invalid: When True, a missing or unparseable credential, or one
            listed in ``rejected_tokens``, is rejected.
        rejected_tokens: Credentials treated as known-bad in reject mode.
    """

    expected_token: str | None = None
    reject_invalid: bool = False
    rejected_tokens: tuple[str, ...] = field(default=DEFAULT_REJECTED_TOKENS)


class AuthGate:
    """Validates the Authorization header of every request.

    The two modes are independent and combine: both must pass. With neither
    enabled every request is accepted. Settings can change while the server
    is running.
    """

    def __init__(
        self,
        expected_token: str | None = None,
        reject_invalid: bool = False,
        rejected_tokens: tuple[str, ...] = DEFAULT_REJECTED_TOKENS,
    ) -> None:
        self._lock = threading.Lock()
        self._settings = AuthSettings(
            expected_token=expected_token or None,
            reject_invalid=reject_invalid,
            rejected_tokens=tuple(rejected_tokens),
        )

    @property
    def settings(self) -> AuthSettings:
        with self._lock:
            return AuthSettings(
                expected_token=self._settings.expected_token,
                reject_invalid=self._settings.reject_invalid,
                rejected_tokens=self._settings.rejected_tokens,
            )

    def configure(
        self,
        *,
        expected_token: str | None = None,
        reject_invalid: bool | None = None,
        rejected_tokens: tuple[str, ...] | None = None,
    ) -> None:
        """Change settings. ``expected_token=""`` disables exact mode;
        other None arguments leave the setting as is."""
        with self._lock:
            if expected_token is not None:
                self._settings.expected_token = expected_token or None
            if reject_invalid is not None:
                self._settings.reject_invalid = reject_invalid
            if rejected_tokens is not None:
                self._settings.rejected_tokens = tuple(rejected_tokens)

    def reset(self) -> None:
        """Disable both modes."""
        with self._lock:
            self._settings = AuthSettings()

    def is_authorized(self, header: str | None) -> bool:
        settings = self.settings
        credential = parse_authorization(header)

        if settings.reject_invalid and (
            credential is None or credential in settings.rejected_tokens
        ):
            return False
        if settings.expected_token is not None and credential != settings.expected_token:
            return False
        return True

    def check(self, header: str | None) -> None:
        """Validate an Authorization header value.

        Raises:
            AuthenticationError: If the credential is rejected.
        """
        if not self.is_authorized(header):
            logger.info("Rejected credential %s", sanitize_for_log(header or "<none>"))
            raise AuthenticationError()
