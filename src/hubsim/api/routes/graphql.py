"""GraphQL endpoint."""

import json
import logging
from typing import Annotated, Any

from fastapi import APIRouter, Header, Request
from starlette.concurrency import run_in_threadpool

from hubsim.api.dependencies import AuthGateDep, ExecutorDep
from hubsim.graphql import InvalidInputError, UnauthorizedError, error_response
from hubsim.logging import truncate_output

logger = logging.getLogger("hubsim.api.graphql")

router = APIRouter(tags=["graphql"])

PARSE_ERROR_MESSAGE = "Problems parsing JSON"


@router.post("/graphql")
@router.post("/api/graphql")
async def graphql(
    request: Request,
    gate: AuthGateDep,
    executor: ExecutorDep,
    authorization: Annotated[str | None, Header()] = None,
) -> dict[str, Any]:
    """Answer a GraphQL request.

    Errors at the GraphQL level, including rejected credentials, are reported
    in the body with status 200.
    """
    if not gate.is_authorized(authorization):
        logger.info("Rejected GraphQL request")
        return error_response(UnauthorizedError())

    raw = await request.body()
    logger.debug("GraphQL request: %s", truncate_output(raw.decode("utf-8", "replace")))
    try:
        payload = json.loads(raw)
    except (UnicodeDecodeError, json.JSONDecodeError):
        return error_response(InvalidInputError(PARSE_ERROR_MESSAGE))
    if not isinstance(payload, dict):
        return error_response(InvalidInputError(PARSE_ERROR_MESSAGE))

    return await run_in_threadpool(
        executor.execute, payload.get("query"), payload.get("variables")
    )
