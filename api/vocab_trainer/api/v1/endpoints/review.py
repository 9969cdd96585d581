"""
Review endpoints: the seeded queue of due cards and grading.
"""
from fastapi import APIRouter, Depends
from typing import Optional

from vocab_trainer.schemas.study import GradeRequest, GradeResponse, ReviewQueueResponse, StudyContext
from vocab_trainer.services.repository import StudyRepository, get_repository
from vocab_trainer.services.study_service import StudyService
from vocab_trainer.services.user_service import get_user_or_404
from vocab_trainer.utils.time_utils import now_ms
from vocab_trainer.api.v1.endpoints.utils import card_response, set_titles, user_response

router = APIRouter(prefix="/review", tags=["review"])


@router.get("/queue", response_model=ReviewQueueResponse)
async def get_review_queue(
    user_id: str,
    set_id: Optional[str] = None,
    seed: int = 0,
    repository: StudyRepository = Depends(get_repository)
):
    """
    Get the due cards in session order.

    The order is determined by the seed: the same seed gives the same order,
    seed + 1 gives a fresh shuffle. An empty queue means nothing is due.
    """
    get_user_or_404(repository, user_id)
    ctx = StudyContext(user_id=user_id, now=now_ms(), set_id=set_id, seed=seed)
    titles = set_titles(repository)
    queue = [card_response(card, titles) for card in StudyService(repository).review_queue(ctx)]
    return ReviewQueueResponse(
        seed=seed,
        due_count=len(queue),
        current=queue[0] if queue else None,
        queue=queue,
    )


@router.post("/grade", response_model=GradeResponse)
async def grade_card(
    request: GradeRequest,
    repository: StudyRepository = Depends(get_repository)
):
    """Grade a card as easy (promote, +10 coins) or hard (back to box 1)."""
    ctx = StudyContext(user_id=request.user_id, now=now_ms())
    outcome = StudyService(repository).grade_card(ctx, request.card_id, request.is_easy)
    return GradeResponse(
        card=card_response(outcome.card, set_titles(repository)),
        coins_awarded=outcome.coins_awarded,
        user=user_response(outcome.user),
    )
