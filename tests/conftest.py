"""Shared pytest fixtures and configuration."""

import pytest
from fastapi.testclient import TestClient

from hubsim.api.app import create_app
from hubsim.api.auth import AuthGate
from hubsim.store import Column, Issue, StateStore


# Register custom markers
def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for test categorization."""
    config.addinivalue_line("markers", "unit: fast tests with no external dependencies")
    config.addinivalue_line("markers", "integration: real server and socket tests")


# Shared fixtures

BOARD_COLUMNS = [
    Column(id="COL1", name="Backlog"),
    Column(id="COL2", name="Todo"),
    Column(id="COL3", name="In Progress"),
    Column(id="COL4", name="Done"),
]


@pytest.fixture
def store() -> StateStore:
    """A fresh, empty store."""
    return StateStore()


@pytest.fixture
def auth() -> AuthGate:
    """An auth gate with both modes disabled."""
    return AuthGate()


@pytest.fixture
def client(store: StateStore, auth: AuthGate) -> TestClient:
    """Test client over an app backed by the store and auth fixtures."""
    app = create_app(store, auth)
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def seeded_store(store: StateStore) -> StateStore:
    """Store with four issues and project 1 holding issues 1 and 2."""
    store.set_issues(
        [
            Issue(number=1, title="First", body="one", labels=["bug"]),
            Issue(number=2, title="Second", labels=["bug", "urgent"], assignee="alice"),
            Issue(number=3, title="Third", state="closed", labels=["urgent"]),
            Issue(number=4, title="Fourth"),
        ]
    )
    store.set_project(1, "Board", BOARD_COLUMNS)
    store.set_project_item(1, 1, "COL1")
    store.set_project_item(1, 2, "COL2")
    return store
