"""Question endpoints: creation, answering and admin verification."""

from fastapi import APIRouter, status
from sqlalchemy.orm import Session

from quizboard.api.v1.dependencies import AdminUserDep, CurrentUserDep, SessionDep, to_http_error
from quizboard.core.errors import QuizboardError
from quizboard.models import TargetType
from quizboard.schemas.answer import AnswerResult, AnswerSubmit
from quizboard.schemas.question import QuestionDraft, QuestionResponse, ViewCount
from quizboard.services.answers import submit_answer
from quizboard.services.issuance import create_question
from quizboard.services.verification import set_verification
from quizboard.services.views import record_view

router = APIRouter(prefix="/questions", tags=["questions"])


@router.post("/", response_model=QuestionResponse, status_code=status.HTTP_201_CREATED)
def create_question_endpoint(
    draft: QuestionDraft,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> QuestionResponse:
    """Create a question, spending one of the caller's vouchers."""
    try:
        question = create_question(db, current_user.id, draft)
    except QuizboardError as err:
        raise to_http_error(err) from err
    return QuestionResponse.model_validate(question)


@router.post("/{question_id}/answers", response_model=AnswerResult)
def submit_answer_endpoint(
    question_id: int,
    answer: AnswerSubmit,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> AnswerResult:
    """Grade an attempt at a question."""
    try:
        return submit_answer(
            db,
            current_user.id,
            question_id,
            answer.submitted_answer,
            answer.time_taken,
        )
    except QuizboardError as err:
        raise to_http_error(err) from err


def _set_verified(db: Session, admin_id: int, question_id: int, verified: bool) -> QuestionResponse:
    try:
        question = set_verification(db, admin_id, TargetType.QUESTION, question_id, verified)
    except QuizboardError as err:
        raise to_http_error(err) from err
    return QuestionResponse.model_validate(question)


@router.post("/{question_id}/verify", response_model=QuestionResponse)
def verify_question(question_id: int, admin: AdminUserDep, db: SessionDep) -> QuestionResponse:
    """Mark a question as verified (admin only)."""
    return _set_verified(db, admin.id, question_id, True)


@router.post("/{question_id}/unverify", response_model=QuestionResponse)
def unverify_question(question_id: int, admin: AdminUserDep, db: SessionDep) -> QuestionResponse:
    """Clear a question's verified flag (admin only)."""
    return _set_verified(db, admin.id, question_id, False)


@router.post("/{question_id}/view", response_model=ViewCount)
def record_question_view(question_id: int, db: SessionDep) -> ViewCount:
    """Count a view of a question."""
    try:
        return ViewCount(view_count=record_view(db, TargetType.QUESTION, question_id))
    except QuizboardError as err:
        raise to_http_error(err) from err
