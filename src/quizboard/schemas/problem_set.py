"""Pydantic schemas for problem sets."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from quizboard.models.enums import Difficulty


class ProblemSetDraft(BaseModel):
    """Input for creating a problem set from existing questions."""

    title: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    difficulty_level: Difficulty | None = None
    question_ids: list[int] = Field(default_factory=list)
    tag_ids: list[int] = Field(default_factory=list)


class ProblemSetResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    author_id: int | None
    title: str
    description: str | None
    difficulty_level: Difficulty | None
    upvote_count: int
    downvote_count: int
    view_count: int
    question_count: int
    question_ids: list[int]
    is_verified: bool
    created_at: datetime
