"""Repository descriptor endpoint."""

from fastapi import APIRouter

from hubsim.api.models import RepositoryResponse, repository_to_response

router = APIRouter(prefix="/repos", tags=["repos"])


@router.get("/{owner}/{repo}", response_model=RepositoryResponse)
def get_repository(owner: str, repo: str) -> RepositoryResponse:
    """Get a repository. Any owner and name exist."""
    return repository_to_response(owner, repo)
