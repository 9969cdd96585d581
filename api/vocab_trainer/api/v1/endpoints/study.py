"""
Study statistics and server-timed study sessions.

A study session runs a StudyTimer per user that adds elapsed time to the
user's total every tick. Stopping it flushes the partial tick.
"""
from fastapi import APIRouter, Depends
from threading import Lock
from typing import Dict, Optional
import logging

from vocab_trainer.core.config import settings
from vocab_trainer.schemas.study import StudyContext, StudySessionResponse, StudyStatsResponse
from vocab_trainer.services.repository import StudyRepository, get_repository, open_repository
from vocab_trainer.services.reward_service import StudyTimer
from vocab_trainer.services.study_service import StudyService
from vocab_trainer.services.user_service import get_user_or_404
from vocab_trainer.utils.time_utils import now_ms

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/study", tags=["study"])

# Running study timers by user id
study_timers: Dict[str, StudyTimer] = {}
timer_lock = Lock()


def _flush_study_time(user_id: str, elapsed_ms: int) -> None:
    """Persist one slice of study time in its own unit of work."""
    with open_repository() as repository:
        StudyService(repository).record_study_time(user_id, elapsed_ms)


def stop_all_study_sessions() -> int:
    """Stop every running timer, flushing its partial tick. Used on shutdown."""
    with timer_lock:
        timers = list(study_timers.items())
        study_timers.clear()

    for user_id, timer in timers:
        flushed = timer.stop()
        logger.info(f"Stopped study session for user {user_id} on shutdown ({flushed} ms flushed)")
    return len(timers)


@router.get("/stats", response_model=StudyStatsResponse)
async def get_study_stats(
    user_id: str,
    set_id: Optional[str] = None,
    repository: StudyRepository = Depends(get_repository)
):
    """Due count, words in view, mastered count, coins and study minutes."""
    ctx = StudyContext(user_id=user_id, now=now_ms(), set_id=set_id)
    return StudyService(repository).stats(ctx)


# The session endpoints open the repository only briefly: a running timer
# flushes through open_repository() and the local store lock is not reentrant.
@router.post("/sessions/start", response_model=StudySessionResponse)
def start_study_session(user_id: str):
    """Start timing a study session for a user."""
    with open_repository() as repository:
        get_user_or_404(repository, user_id)

    with timer_lock:
        if user_id in study_timers:
            return StudySessionResponse(
                user_id=user_id, running=True, flushed_ms=0,
                message="Study session already running",
            )
        timer = StudyTimer(
            on_elapsed=lambda elapsed: _flush_study_time(user_id, elapsed),
            interval_ms=settings.study_tick_ms,
        )
        study_timers[user_id] = timer
        timer.start()

    logger.info(f"Started study session for user {user_id}")
    return StudySessionResponse(user_id=user_id, running=True, flushed_ms=0, message="Study session started")


@router.post("/sessions/stop", response_model=StudySessionResponse)
def stop_study_session(user_id: str):
    """Stop a user's study session and record the remaining time."""
    with timer_lock:
        timer = study_timers.pop(user_id, None)

    if timer is None:
        return StudySessionResponse(
            user_id=user_id, running=False, flushed_ms=0,
            message="No study session running",
        )

    flushed = timer.stop()
    logger.info(f"Stopped study session for user {user_id} ({timer.total_ms} ms total)")
    return StudySessionResponse(user_id=user_id, running=False, flushed_ms=flushed, message="Study session stopped")
