"""Content issuance: creating questions and problem sets against vouchers.

Creating content costs the author one question voucher. The voucher is
debited in the same unit of work that inserts the entity and its child
rows, so a failed creation never costs a voucher and never leaves orphans.
Admins are exempt; that capability check runs before the gate and the gate
itself never looks at roles.
"""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from quizboard.core.errors import (
    AuthorNotFoundError,
    InsufficientVouchersError,
    InvalidMembershipError,
    NotFoundError,
    ValidationError,
)
from quizboard.core.settings import settings
from quizboard.db.session import atomic
from quizboard.models import (
    FillBlankAnswer,
    McqOption,
    ProblemSet,
    ProblemSetQuestion,
    Question,
    QuestionType,
    User,
)
from quizboard.repositories import LedgerRepository
from quizboard.schemas.problem_set import ProblemSetDraft
from quizboard.schemas.question import QuestionDraft

logger = logging.getLogger(__name__)


class VoucherGate:
    """Spends question vouchers."""

    @staticmethod
    def consume(user: User) -> int:
        """Debit exactly one voucher from a locked user row.

        Returns:
            The remaining voucher balance.

        Raises:
            InsufficientVouchersError: If the user has no vouchers left.
        """
        if user.question_vouchers <= 0:
            raise InsufficientVouchersError("No question vouchers available")
        user.question_vouchers -= 1
        return user.question_vouchers


def _charge_author(repo: LedgerRepository, author_id: int | None) -> User | None:
    if author_id is None:
        return None
    author = repo.get_user(author_id, lock=True, active_only=True)
    if author is None:
        raise AuthorNotFoundError("Author not found")
    if author.is_admin:
        logger.debug("Admin %s creates content without a voucher", author.id)
        return author
    remaining = VoucherGate.consume(author)
    logger.debug("User %s spent a voucher, %d left", author.id, remaining)
    return author


def validate_question_draft(draft: QuestionDraft) -> None:
    """Check the cross-field rules of a question draft.

    Raises:
        ValidationError: If the answer key does not fit the question type.
    """
    if draft.question_type is QuestionType.MCQ:
        if draft.fill_blank_answers:
            raise ValidationError("Multiple-choice questions do not take fill-in-the-blank answers")
        if len(draft.options) < 2:
            raise ValidationError("Multiple-choice questions need at least 2 options")
        if not any(option.is_correct for option in draft.options):
            raise ValidationError("Multiple-choice questions need at least one correct option")
    else:
        if draft.options:
            raise ValidationError("Fill-in-the-blank questions do not take options")
        if not draft.fill_blank_answers:
            raise ValidationError("Fill-in-the-blank questions need at least one accepted answer")


def create_question(
    db: Session,
    author_id: int | None,
    draft: QuestionDraft,
    *,
    source: str | None = None,
    external_id: str | None = None,
    verified: bool = False,
) -> Question:
    """Create a question, its answer key and tags, spending one voucher.

    Args:
        db: Database session
        author_id: ID of the author; None for system-owned content
        draft: Validated question payload
        source: Provider name for ingested questions
        external_id: Provider-side identifier for ingested questions
        verified: Create the question already verified (ingestion only)

    Raises:
        ValidationError: If the draft's answer key is inconsistent.
        AuthorNotFoundError: If the author does not exist.
        InsufficientVouchersError: If a non-admin author has no vouchers.
    """
    validate_question_draft(draft)

    repo = LedgerRepository(db)
    with atomic(db):
        author = _charge_author(repo, author_id)

        question = Question(
            author_id=author.id if author is not None else None,
            title=draft.title,
            question_text=draft.question_text,
            question_type=draft.question_type,
            difficulty_level=draft.difficulty_level,
            explanation=draft.explanation,
            is_verified=verified,
            source=source,
            external_id=external_id,
        )
        question.options = [
            McqOption(option_text=option.option_text, is_correct=option.is_correct, option_order=index)
            for index, option in enumerate(draft.options, start=1)
        ]
        question.fill_blank_answers = [
            FillBlankAnswer(
                correct_answer=answer.correct_answer,
                is_case_sensitive=answer.is_case_sensitive,
                accepts_partial_match=answer.accepts_partial_match,
            )
            for answer in draft.fill_blank_answers
        ]
        question.tags = repo.get_or_create_tags(draft.tags)
        db.add(question)
        db.flush()

    logger.info("Created question %s for author %s", question.id, author_id)
    return question


def create_problem_set(db: Session, author_id: int | None, draft: ProblemSetDraft) -> ProblemSet:
    """Create a problem set from existing questions, spending one voucher.

    Raises:
        InvalidMembershipError: If fewer than the minimum number of distinct
            questions are given, or any of them is missing or inactive.
        NotFoundError: If a referenced tag does not exist.
        AuthorNotFoundError: If the author does not exist.
        InsufficientVouchersError: If a non-admin author has no vouchers.
    """
    question_ids = list(draft.question_ids)
    if len(set(question_ids)) != len(question_ids):
        raise InvalidMembershipError("Problem set questions must be distinct")
    if len(question_ids) < settings.problem_set_min_questions:
        raise InvalidMembershipError(
            f"Problem set must contain at least {settings.problem_set_min_questions} questions"
        )

    repo = LedgerRepository(db)
    with atomic(db):
        author = _charge_author(repo, author_id)

        found = {question.id for question in repo.active_questions(question_ids)}
        missing = [question_id for question_id in question_ids if question_id not in found]
        if missing:
            raise InvalidMembershipError(f"Questions not found or inactive: {missing}")

        tag_ids = list(dict.fromkeys(draft.tag_ids))
        tags = repo.tags_by_ids(tag_ids)
        if len(tags) != len(tag_ids):
            raise NotFoundError("One or more tags not found")

        problem_set = ProblemSet(
            author_id=author.id if author is not None else None,
            title=draft.title,
            description=draft.description,
            difficulty_level=draft.difficulty_level,
            question_count=len(question_ids),
        )
        problem_set.memberships = [
            ProblemSetQuestion(question_id=question_id, question_order=index)
            for index, question_id in enumerate(question_ids, start=1)
        ]
        problem_set.tags = tags
        db.add(problem_set)
        db.flush()

    logger.info(
        "Created problem set %s with %d questions for author %s",
        problem_set.id,
        problem_set.question_count,
        author_id,
    )
    return problem_set
