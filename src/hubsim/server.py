"""MockServer - Runs the emulator on a real socket in a background thread."""

from __future__ import annotations

import socket
import threading
import time
from typing import TYPE_CHECKING

import uvicorn

from hubsim.api.app import create_app
from hubsim.api.auth import AuthGate
from hubsim.logging import get_logger
from hubsim.store import StateStore

if TYPE_CHECKING:
    from types import TracebackType

    from fastapi import FastAPI

    from hubsim.config import ScenarioConfig

logger = get_logger("server")

DEFAULT_HOST = "127.0.0.1"
STARTUP_TIMEOUT = 10.0
SHUTDOWN_TIMEOUT = 5.0
_POLL_INTERVAL = 0.01


class ServerStartError(Exception):
    """Raised when the server does not come up in time."""


class MockServer:
    """Emulator bound to a local socket.

    The socket is bound in the constructor, so the URL is known (and the port
    is reserved) before any client is configured. Port 0 picks a free port.

    Example::

        with MockServer() as server:
            server.store.set_issues([Issue(number=1, title="Bug")])
            httpx.get(f"{server.url}/repos/o/r/issues/1")
    """

    def __init__(
        self,
        host: str = DEFAULT_HOST,
        port: int = 0,
        store: StateStore | None = None,
        auth: AuthGate | None = None,
        log_level: str = "warning",
        startup_timeout: float = STARTUP_TIMEOUT,
    ) -> None:
        self.store = store if store is not None else StateStore()
        self.auth = auth if auth is not None else AuthGate()
        self.app: FastAPI = create_app(self.store, self.auth)

        self._socket = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        self._socket.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        try:
            self._socket.bind((host, port))
        except OSError:
            self._socket.close()
            raise
        self.host, self.port = self._socket.getsockname()[:2]

        config = uvicorn.Config(self.app, log_level=log_level)
        self._server = uvicorn.Server(config)
        self._thread = threading.Thread(
            target=self._server.run,
            kwargs={"sockets": [self._socket]},
            name=f"hubsim-{self.port}",
            daemon=True,
        )
        self._closed = False
        self._start(startup_timeout)

    def _start(self, timeout: float) -> None:
        self._thread.start()
        deadline = time.monotonic() + timeout
        while not self._server.started:
            if not self._thread.is_alive() or time.monotonic() > deadline:
                self.close()
                raise ServerStartError(f"Server on {self.url} did not start within {timeout}s")
            time.sleep(_POLL_INTERVAL)
        logger.info("Listening on %s", self.url)

    @property
    def url(self) -> str:
        """Base URL for REST calls."""
        return f"http://{self.host}:{self.port}"

    @property
    def graphql_url(self) -> str:
        return f"{self.url}/graphql"

    def apply_scenario(self, scenario: ScenarioConfig) -> None:
        """Reset the store and auth gate to a scenario's state."""
        scenario.apply(self.store, self.auth)

    def reset(self) -> None:
        """Discard all state and disable authentication checks."""
        self.store.reset()
        self.auth.reset()

    def close(self) -> None:
        """Stop serving and release the socket. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        self._server.should_exit = True
        if self._thread.is_alive():
            self._thread.join(timeout=SHUTDOWN_TIMEOUT)
        self._socket.close()
        logger.info("Stopped server on %s", self.url)

    def __enter__(self) -> MockServer:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()
