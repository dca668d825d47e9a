"""API endpoint modules for version 1."""

from .ingestion import router as ingestion_router
from .problem_sets import router as problem_sets_router
from .questions import router as questions_router
from .reputation import router as reputation_router
from .votes import router as votes_router

__all__ = [
    "ingestion_router",
    "problem_sets_router",
    "questions_router",
    "reputation_router",
    "votes_router",
]
