"""Issue comment endpoints."""

from fastapi import APIRouter, status

from hubsim.api.dependencies import StoreDep
from hubsim.api.models import CommentCreate, CommentResponse, comment_to_response

router = APIRouter(prefix="/repos/{owner}/{repo}/issues/{number:int}/comments", tags=["comments"])


@router.get("", response_model=list[CommentResponse])
def list_comments(number: int, store: StoreDep) -> list[CommentResponse]:
    """List comments of an issue in creation order."""
    return [comment_to_response(c) for c in store.list_comments(number)]


@router.post("", response_model=CommentResponse, status_code=status.HTTP_201_CREATED)
def create_comment(number: int, comment: CommentCreate, store: StoreDep) -> CommentResponse:
    """Comment on an issue as the authenticated user."""
    created = store.add_comment(number, comment.body)
    return comment_to_response(created)
