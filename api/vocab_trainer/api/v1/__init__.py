"""
API v1 router aggregation.
"""
from fastapi import APIRouter
from vocab_trainer.api.v1.endpoints import (
    auth, users, sets, cards, review, quiz, leaderboard, study
)

api_router = APIRouter()

# Each router defines its own prefix
api_router.include_router(auth.router)
api_router.include_router(users.router)
api_router.include_router(sets.router)
api_router.include_router(cards.router)
api_router.include_router(review.router)
api_router.include_router(quiz.router)
api_router.include_router(leaderboard.router)
api_router.include_router(study.router)
