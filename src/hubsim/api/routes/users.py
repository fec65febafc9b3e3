"""Authenticated user endpoint."""

from fastapi import APIRouter

from hubsim.api.dependencies import StoreDep
from hubsim.api.models import UserResponse

router = APIRouter(tags=["users"])


@router.get("/user", response_model=UserResponse)
def get_authenticated_user(store: StoreDep) -> UserResponse:
    """Get the user the request is authenticated as."""
    return UserResponse(login=store.authenticated_user)
