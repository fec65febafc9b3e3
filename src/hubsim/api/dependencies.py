"""FastAPI dependencies for dependency injection."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from hubsim.api.auth import AuthGate
from hubsim.graphql import GraphQLExecutor
from hubsim.store import StateStore


def get_store(request: Request) -> StateStore:
    """Dependency that provides the app's StateStore."""
    store: StateStore = request.app.state.store
    return store


# Type alias for dependency injection
StoreDep = Annotated[StateStore, Depends(get_store)]


def get_auth_gate(request: Request) -> AuthGate:
    """Dependency that provides the app's AuthGate."""
    gate: AuthGate = request.app.state.auth
    return gate


# Type alias for dependency injection
AuthGateDep = Annotated[AuthGate, Depends(get_auth_gate)]


def get_executor(request: Request) -> GraphQLExecutor:
    """Dependency that provides the app's GraphQLExecutor."""
    executor: GraphQLExecutor = request.app.state.executor
    return executor


# Type alias for dependency injection
ExecutorDep = Annotated[GraphQLExecutor, Depends(get_executor)]

