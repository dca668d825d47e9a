"""Grading of answer attempts.

Every attempt is logged. Only the first correct attempt by a user at a
given question earns reputation.
"""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from quizboard.core.errors import NotFoundError, UserNotFoundError
from quizboard.core.settings import settings
from quizboard.db.session import atomic
from quizboard.models import (
    FillBlankAnswer,
    Question,
    QuestionType,
    ReferenceType,
    ReputationReason,
    UserAnswer,
)
from quizboard.repositories import LedgerRepository
from quizboard.schemas.answer import AnswerResult
from quizboard.services.reputation import ReputationLedger

logger = logging.getLogger(__name__)


def _matches(accepted: FillBlankAnswer, submitted: str) -> bool:
    expected = accepted.correct_answer.strip()
    candidate = submitted.strip()
    if not accepted.is_case_sensitive:
        expected = expected.casefold()
        candidate = candidate.casefold()
    if candidate == expected:
        return True
    return accepted.accepts_partial_match and bool(expected) and expected in candidate


def grade(question: Question, submitted_answer: str) -> tuple[bool, str | None]:
    """Return whether an answer is correct and the canonical correct answer.

    Multiple-choice answers are the id of the chosen option; an id that is
    not one of the question's options is simply wrong.
    """
    if question.question_type is QuestionType.MCQ:
        correct_options = [option for option in question.options if option.is_correct]
        canonical = correct_options[0].option_text if correct_options else None
        try:
            option_id = int(submitted_answer)
        except (TypeError, ValueError):
            return False, canonical
        return any(option.id == option_id for option in correct_options), canonical

    accepted = question.fill_blank_answers
    canonical = accepted[0].correct_answer if accepted else None
    return any(_matches(answer, submitted_answer) for answer in accepted), canonical


def submit_answer(
    db: Session,
    user_id: int,
    question_id: int,
    submitted_answer: str,
    time_taken: int | None = None,
) -> AnswerResult:
    """Grade and record an attempt, crediting the first correct one.

    Raises:
        UserNotFoundError: If the user is missing or inactive.
        NotFoundError: If the question is missing or inactive.
    """
    repo = LedgerRepository(db)
    with atomic(db):
        # The user lock serializes concurrent first-correct checks.
        user = repo.get_user(user_id, lock=True, active_only=True)
        if user is None:
            raise UserNotFoundError("User not found")
        question = repo.get_active(Question, question_id)
        if question is None:
            raise NotFoundError("Question not found")

        correct, canonical = grade(question, submitted_answer)
        first_correct = correct and not repo.has_correct_answer(user.id, question.id)

        attempt = UserAnswer(
            user_id=user.id,
            question_id=question.id,
            submitted_answer=submitted_answer,
            is_correct=correct,
            time_taken=time_taken,
        )
        db.add(attempt)
        db.flush()

        awarded = 0
        if first_correct:
            awarded = settings.question_answered_points
            ReputationLedger.apply_delta(
                db,
                user.id,
                awarded,
                ReputationReason.QUESTION_ANSWERED,
                question.id,
                ReferenceType.QUESTION,
            )

    logger.debug(
        "User %s answered question %s: correct=%s awarded=%d",
        user_id,
        question_id,
        correct,
        awarded,
    )
    return AnswerResult(
        correct=correct,
        correct_answer=canonical,
        explanation=question.explanation,
        attempt_id=attempt.id,
        reputation_awarded=awarded,
    )
