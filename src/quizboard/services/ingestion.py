"""Ingestion of normalized question records from external providers.

Provider adapters (quiz APIs, AI categorizers) translate their payloads
into ``NormalizedQuestion`` records; this module only accepts that shape.
Each record is created through the issuance gate as its own unit of work,
so one bad record never blocks the rest of a batch.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from quizboard.core.errors import ForbiddenError, InternalError, UserNotFoundError, ValidationError
from quizboard.models import QuestionType
from quizboard.repositories import LedgerRepository
from quizboard.schemas.ingestion import IngestionReport, NormalizedQuestion
from quizboard.schemas.question import FillBlankAnswerDraft, McqOptionDraft, QuestionDraft
from quizboard.services.issuance import create_question

logger = logging.getLogger(__name__)


def to_draft(record: NormalizedQuestion) -> QuestionDraft:
    """Convert a normalized record into a question draft.

    For multiple-choice records ``correct_answers`` may name correct
    options by text instead of flagging them on the options themselves.
    """
    if record.type is QuestionType.MCQ:
        correct_texts = {answer.strip().casefold() for answer in record.correct_answers}
        options = [
            McqOptionDraft(
                option_text=option.text,
                is_correct=option.is_correct or option.text.strip().casefold() in correct_texts,
            )
            for option in record.options
        ]
        answers: list[FillBlankAnswerDraft] = []
    else:
        options = []
        answers = [
            FillBlankAnswerDraft(correct_answer=answer.strip())
            for answer in record.correct_answers
            if answer.strip()
        ]

    return QuestionDraft(
        title=record.title,
        question_text=record.text,
        question_type=record.type,
        difficulty_level=record.difficulty,
        explanation=record.explanation,
        options=options,
        fill_blank_answers=answers,
        tags=record.tags,
    )


def ingest_questions(
    db: Session,
    records: Iterable[NormalizedQuestion],
    author_id: int | None = None,
    auto_verify: bool = False,
) -> IngestionReport:
    """Create questions from normalized records, skipping known and invalid ones.

    Args:
        db: Database session
        records: Normalized provider records
        author_id: Owner of the created questions; None for system-owned.
            A non-admin author pays one voucher per created question.
        auto_verify: Create the questions already verified; admins only.

    Raises:
        UserNotFoundError: If ``author_id`` does not resolve to a user.
        ForbiddenError: If a non-admin asks for auto-verification.
        InsufficientVouchersError: If a non-admin author runs out of
            vouchers; records created before that point stay created.
    """
    repo = LedgerRepository(db)
    if author_id is not None:
        author = repo.get_user(author_id, active_only=True)
        if author is None:
            raise UserNotFoundError("User not found")
        if auto_verify and not author.is_admin:
            raise ForbiddenError("Only admins can import pre-verified questions")

    report = IngestionReport()
    for record in records:
        key = f"{record.source}:{record.source_id}"
        if repo.question_by_source(record.source, record.source_id) is not None:
            report.skipped.append(f"{key} already exists")
            continue
        try:
            question = create_question(
                db,
                author_id,
                to_draft(record),
                source=record.source,
                external_id=record.source_id,
                verified=auto_verify,
            )
        except ValidationError as err:
            logger.warning("Skipping ingested record %s: %s", key, err.message)
            report.skipped.append(f"{key} invalid: {err.message}")
            continue
        except InternalError as err:
            # Only a clash on (source, external_id) means the record exists.
            if not isinstance(err.__cause__, IntegrityError):
                raise
            if repo.question_by_source(record.source, record.source_id) is None:
                raise
            logger.warning("Skipping ingested record %s: inserted concurrently", key)
            report.skipped.append(f"{key} already exists")
            continue
        report.created.append(question.id)

    logger.info(
        "Ingestion finished: %d created, %d skipped",
        len(report.created),
        len(report.skipped),
    )
    return report
