"""Version 1 API endpoints."""

from .endpoints import (
    ingestion_router,
    problem_sets_router,
    questions_router,
    reputation_router,
    votes_router,
)

__all__ = [
    "ingestion_router",
    "problem_sets_router",
    "questions_router",
    "reputation_router",
    "votes_router",
]
