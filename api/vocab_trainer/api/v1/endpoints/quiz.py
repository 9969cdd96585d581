"""
Quiz endpoints.
"""
from fastapi import APIRouter, Depends
from typing import Optional

from vocab_trainer.schemas.quiz import QuizAnswerRequest, QuizAnswerResponse, QuizResponse
from vocab_trainer.schemas.study import StudyContext
from vocab_trainer.services.repository import StudyRepository, get_repository
from vocab_trainer.services.study_service import StudyService
from vocab_trainer.services.user_service import get_user_or_404
from vocab_trainer.utils.time_utils import now_ms
from vocab_trainer.api.v1.endpoints.utils import user_response

router = APIRouter(prefix="/quiz", tags=["quiz"])


@router.get("", response_model=QuizResponse)
async def get_quiz(
    user_id: str,
    set_id: Optional[str] = None,
    seed: int = 0,
    due_only: bool = False,
    repository: StudyRepository = Depends(get_repository)
):
    """
    Generate a multiple-choice quiz (at most 15 questions).

    Uses every card in view unless due_only is set. The seed fixes distractors
    and option order, so "try again" means requesting a new seed.
    """
    get_user_or_404(repository, user_id)
    ctx = StudyContext(user_id=user_id, now=now_ms(), set_id=set_id, seed=seed)
    questions = StudyService(repository).quiz(ctx, due_only=due_only)
    return QuizResponse(seed=seed, questions=questions, total=len(questions))


@router.post("/answer", response_model=QuizAnswerResponse)
async def answer_quiz(
    request: QuizAnswerRequest,
    repository: StudyRepository = Depends(get_repository)
):
    """Check an answer to a question of the quiz with request.seed; a correct one earns 10 coins."""
    ctx = StudyContext(user_id=request.user_id, now=now_ms(), seed=request.seed)
    outcome = StudyService(repository).answer_quiz(ctx, request.card_id, request.choice)
    return QuizAnswerResponse(
        correct=outcome.correct,
        answer=outcome.answer,
        coins_awarded=outcome.coins_awarded,
        user=user_response(outcome.user),
    )
