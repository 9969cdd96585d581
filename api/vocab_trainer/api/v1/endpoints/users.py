"""
User endpoints.
"""
from fastapi import APIRouter, Depends

from vocab_trainer.schemas.auth import StudyTimeRequest, UserResponse, UsersResponse
from vocab_trainer.services.repository import StudyRepository, get_repository
from vocab_trainer.services.study_service import StudyService
from vocab_trainer.services.user_service import get_user_or_404, list_users, require_admin
from vocab_trainer.api.v1.endpoints.utils import user_response

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=UsersResponse)
async def get_users(
    user_id: str,
    repository: StudyRepository = Depends(get_repository)
):
    """List all users (admin only)."""
    require_admin(repository, user_id)
    return UsersResponse(users=[user_response(user) for user in list_users(repository)])


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: str,
    repository: StudyRepository = Depends(get_repository)
):
    """Get a user's profile and counters."""
    return user_response(get_user_or_404(repository, user_id))


@router.post("/{user_id}/study-time", response_model=UserResponse)
async def add_study_time(
    user_id: str,
    request: StudyTimeRequest,
    repository: StudyRepository = Depends(get_repository)
):
    """Add elapsed study time measured by the client."""
    user = StudyService(repository).record_study_time(user_id, request.elapsed_ms)
    return user_response(user)
