"""
Word set endpoints.
"""
from fastapi import APIRouter, Depends, status

from vocab_trainer.schemas.word_set import (
    CreateWordSetRequest,
    DeleteWordSetResponse,
    WordSetResponse,
    WordSetsResponse,
)
from vocab_trainer.services import content_service
from vocab_trainer.services.repository import StudyRepository, get_repository
from vocab_trainer.services.user_service import require_admin

router = APIRouter(prefix="/sets", tags=["sets"])


@router.get("", response_model=WordSetsResponse)
async def get_sets(
    repository: StudyRepository = Depends(get_repository)
):
    """Get all sets, most recent first, with their card counts."""
    return WordSetsResponse(sets=[
        WordSetResponse(**word_set.model_dump(), card_count=count)
        for word_set, count in content_service.list_sets_with_counts(repository)
    ])


@router.post("", response_model=WordSetResponse, status_code=status.HTTP_201_CREATED)
async def create_set(
    request: CreateWordSetRequest,
    repository: StudyRepository = Depends(get_repository)
):
    """Create a set titled '<book> • Unit <unit>' (admin only)."""
    require_admin(repository, request.user_id)
    word_set = content_service.create_set(repository, request.book, request.unit)
    return WordSetResponse(**word_set.model_dump(), card_count=0)


@router.delete("/{set_id}", response_model=DeleteWordSetResponse)
async def delete_set(
    set_id: str,
    user_id: str,
    repository: StudyRepository = Depends(get_repository)
):
    """Delete a set together with its cards and their progress (admin only)."""
    require_admin(repository, user_id)
    cards_deleted = content_service.delete_set(repository, set_id)
    return DeleteWordSetResponse(message="Set deleted successfully", cards_deleted=cards_deleted)
