"""Pydantic schemas for question drafts and responses."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from quizboard.models.enums import Difficulty, QuestionType


class McqOptionDraft(BaseModel):
    option_text: str = Field(..., min_length=1)
    is_correct: bool = False


class FillBlankAnswerDraft(BaseModel):
    correct_answer: str = Field(..., min_length=1)
    is_case_sensitive: bool = False
    accepts_partial_match: bool = False


class QuestionDraft(BaseModel):
    """Input for creating a question.

    Multiple-choice drafts carry ``options``; fill-in-the-blank drafts carry
    ``fill_blank_answers``. Cross-field rules are checked by the issuance
    service so that direct callers get the same errors as API clients.
    """

    title: str = Field(..., min_length=1, max_length=255)
    question_text: str = Field(..., min_length=1)
    question_type: QuestionType
    difficulty_level: Difficulty | None = None
    explanation: str | None = None
    options: list[McqOptionDraft] = Field(default_factory=list)
    fill_blank_answers: list[FillBlankAnswerDraft] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list, description="Tag names, created on demand")


class McqOptionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    option_text: str
    option_order: int


class QuestionResponse(BaseModel):
    """Serialized question without its answer key."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    author_id: int | None
    title: str
    question_text: str
    question_type: QuestionType
    difficulty_level: Difficulty | None
    explanation: str | None
    upvote_count: int
    downvote_count: int
    view_count: int
    is_verified: bool
    created_at: datetime
    options: list[McqOptionResponse] = Field(default_factory=list)


class ViewCount(BaseModel):
    """View counter after a recorded view."""

    view_count: int
