"""Schemas for submitting answers to questions."""

from pydantic import BaseModel, Field


class AnswerSubmit(BaseModel):
    """An attempt at a question.

    For multiple-choice questions ``submitted_answer`` is the chosen option id.
    """

    submitted_answer: str
    time_taken: int | None = Field(None, ge=0, description="Milliseconds spent on the attempt")


class AnswerResult(BaseModel):
    correct: bool
    correct_answer: str | None = None
    explanation: str | None = None
    attempt_id: int
    reputation_awarded: int = 0
