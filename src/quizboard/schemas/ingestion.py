"""Normalized question records accepted from external providers."""

from __future__ import annotations

from pydantic import BaseModel, Field

from quizboard.models.enums import Difficulty, QuestionType


class NormalizedOption(BaseModel):
    text: str = Field(..., min_length=1)
    is_correct: bool = False


class NormalizedQuestion(BaseModel):
    """Provider-neutral question record.

    Translating a provider's payload into this shape is the provider
    adapter's job; the core only accepts records that already match it.
    """

    title: str = Field(..., min_length=1, max_length=255)
    text: str = Field(..., min_length=1)
    type: QuestionType
    difficulty: Difficulty | None = None
    explanation: str | None = None
    options: list[NormalizedOption] = Field(default_factory=list)
    correct_answers: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    source: str = Field(..., min_length=1, max_length=64)
    source_id: str = Field(..., min_length=1, max_length=128)


class IngestionRequest(BaseModel):
    records: list[NormalizedQuestion]
    auto_verify: bool = False


class IngestionReport(BaseModel):
    created: list[int] = Field(default_factory=list)
    skipped: list[str] = Field(default_factory=list)
