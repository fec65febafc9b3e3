"""FastAPI application setup."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from hubsim import __version__
from hubsim.api.auth import AuthGate
from hubsim.api.exceptions import APIError, AuthenticationError
from hubsim.api.models import ErrorResponse
from hubsim.api.routes import comments, graphql, issues, labels, repos, users
from hubsim.graphql import GraphQLExecutor
from hubsim.store import IssueNotFoundError, StateStore, StoreError

logger = logging.getLogger("hubsim.api")

ENTERPRISE_PREFIX = "/api/v3"
REST_ROOTS = ("/user", "/repos")

_STATUS_MESSAGES = {
    status.HTTP_404_NOT_FOUND: "Not Found",
    status.HTTP_405_METHOD_NOT_ALLOWED: "Method Not Allowed",
}


def error_json(status_code: int, message: str) -> JSONResponse:
    """JSON error response in the host's ``{message, documentation_url}`` shape."""
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(message=message).model_dump(),
    )


def is_rest_path(path: str) -> bool:
    """True for paths served by the REST routers, with or without the enterprise prefix."""
    path = path.removeprefix(ENTERPRISE_PREFIX)
    return any(path == root or path.startswith(f"{root}/") for root in REST_ROOTS)


def _create_auth_middleware(gate: AuthGate) -> Any:
    """Reject REST requests with bad credentials before any routing happens."""

    async def dispatch(request: Request, call_next: Any) -> Any:
        if is_rest_path(request.url.path):
            try:
                gate.check(request.headers.get("Authorization"))
            except AuthenticationError as e:
                return error_json(e.status_code, e.message)
        return await call_next(request)

    return dispatch


def create_app(store: StateStore | None = None, auth: AuthGate | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        store: Domain store backing both protocols. A fresh one if omitted.
        auth: Auth gate checked before every handler. Accepts everything if
            omitted.
    """
    app = FastAPI(
        title="hubsim",
        description="Stateful emulator of the GitHub issues REST API and Projects v2 GraphQL API",
        version=__version__,
    )

    app.state.store = store if store is not None else StateStore()
    app.state.auth = auth if auth is not None else AuthGate()
    app.state.executor = GraphQLExecutor(app.state.store)

    # Exception handlers
    @app.exception_handler(IssueNotFoundError)
    async def issue_not_found_handler(_request: Request, exc: IssueNotFoundError) -> JSONResponse:
        logger.info("REST lookup failed: %s", exc)
        return error_json(status.HTTP_404_NOT_FOUND, "Not Found")

    @app.exception_handler(APIError)
    async def api_error_handler(_request: Request, exc: APIError) -> JSONResponse:
        return error_json(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        _request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        errors = exc.errors()
        if any(e.get("type") == "json_invalid" for e in errors):
            return error_json(status.HTTP_400_BAD_REQUEST, "Problems parsing JSON")
        logger.info("Rejected request: %s", errors)
        return error_json(status.HTTP_400_BAD_REQUEST, "Validation Failed")

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(_request: Request, exc: StarletteHTTPException) -> JSONResponse:
        message = _STATUS_MESSAGES.get(exc.status_code, str(exc.detail))
        response = error_json(exc.status_code, message)
        if exc.headers:
            response.headers.update(exc.headers)
        return response

    @app.exception_handler(StoreError)
    async def store_error_handler(_request: Request, exc: StoreError) -> JSONResponse:
        logger.error("Unhandled store error: %s", exc)
        return error_json(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")

    # Auth middleware
    app.add_middleware(BaseHTTPMiddleware, dispatch=_create_auth_middleware(app.state.auth))

    # Include routers
    for prefix in ("", ENTERPRISE_PREFIX):
        app.include_router(users.router, prefix=prefix)
        app.include_router(repos.router, prefix=prefix)
        app.include_router(issues.router, prefix=prefix)
        app.include_router(comments.router, prefix=prefix)
        app.include_router(labels.router, prefix=prefix)
    app.include_router(graphql.router)

    return app
