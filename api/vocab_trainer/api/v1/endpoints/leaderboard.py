"""
Leaderboard endpoint.
"""
from fastapi import APIRouter, Depends

from vocab_trainer.schemas.study import LeaderboardEntry, LeaderboardResponse
from vocab_trainer.services.repository import StudyRepository, get_repository
from vocab_trainer.services.study_service import StudyService
from vocab_trainer.utils.time_utils import minutes_from_ms

router = APIRouter(prefix="/leaderboard", tags=["leaderboard"])


@router.get("", response_model=LeaderboardResponse)
async def get_leaderboard(
    repository: StudyRepository = Depends(get_repository)
):
    """Users ranked by coins."""
    users = StudyService(repository).leaderboard()
    return LeaderboardResponse(entries=[
        LeaderboardEntry(
            rank=rank,
            user_id=user.id,
            name=user.name,
            coins=user.coins,
            correct=user.correct,
            study_minutes=minutes_from_ms(user.time_ms),
        )
        for rank, user in enumerate(users, 1)
    ])
