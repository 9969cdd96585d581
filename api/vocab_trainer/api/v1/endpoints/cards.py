"""
Card endpoints.
"""
from fastapi import APIRouter, Depends, status
from typing import Optional

from vocab_trainer.schemas.card import CardResponse, CardsResponse, CreateCardRequest, ForceDueRequest
from vocab_trainer.schemas.study import StudyContext
from vocab_trainer.services import content_service
from vocab_trainer.services.repository import StudyRepository, get_repository
from vocab_trainer.services.study_service import StudyService
from vocab_trainer.services.user_service import get_user_or_404, require_admin
from vocab_trainer.utils.time_utils import now_ms
from vocab_trainer.api.v1.endpoints.utils import card_response, set_titles

router = APIRouter(prefix="/cards", tags=["cards"])


@router.get("", response_model=CardsResponse)
async def get_cards(
    user_id: str,
    set_id: Optional[str] = None,
    repository: StudyRepository = Depends(get_repository)
):
    """Cards in view (one set, or all sets when set_id is omitted) with the user's progress."""
    get_user_or_404(repository, user_id)
    ctx = StudyContext(user_id=user_id, now=now_ms(), set_id=set_id)
    titles = set_titles(repository)
    cards = StudyService(repository).cards_in_view(ctx)
    return CardsResponse(cards=[card_response(card, titles) for card in cards])


@router.post("", response_model=CardResponse, status_code=status.HTTP_201_CREATED)
async def create_card(
    request: CreateCardRequest,
    repository: StudyRepository = Depends(get_repository)
):
    """Add a word to a set (admin only). New words are due immediately."""
    require_admin(repository, request.user_id)
    card = content_service.add_card(
        repository,
        set_id=request.set_id,
        term=request.term,
        definition=request.definition,
        example=request.example,
        language=request.language,
        now=now_ms(),
    )
    return card_response(card, set_titles(repository))


@router.post("/{card_id}/force-due", response_model=CardResponse)
async def force_card_due(
    card_id: str,
    request: ForceDueRequest,
    repository: StudyRepository = Depends(get_repository)
):
    """Make a card due now for a student, keeping its box (admin only)."""
    require_admin(repository, request.user_id)
    ctx = StudyContext(user_id=request.user_id, now=now_ms())
    card = StudyService(repository).force_due(ctx, card_id, student_id=request.student_id)
    return card_response(card, set_titles(repository))
