"""Problem set endpoints: creation and admin verification."""

from fastapi import APIRouter, status
from sqlalchemy.orm import Session

from quizboard.api.v1.dependencies import AdminUserDep, CurrentUserDep, SessionDep, to_http_error
from quizboard.core.errors import QuizboardError
from quizboard.models import TargetType
from quizboard.schemas.problem_set import ProblemSetDraft, ProblemSetResponse
from quizboard.schemas.question import ViewCount
from quizboard.services.issuance import create_problem_set
from quizboard.services.verification import set_verification
from quizboard.services.views import record_view

router = APIRouter(prefix="/problem-sets", tags=["problem-sets"])


@router.post("/", response_model=ProblemSetResponse, status_code=status.HTTP_201_CREATED)
def create_problem_set_endpoint(
    draft: ProblemSetDraft,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> ProblemSetResponse:
    """Create a problem set from existing questions, spending one voucher."""
    try:
        problem_set = create_problem_set(db, current_user.id, draft)
    except QuizboardError as err:
        raise to_http_error(err) from err
    return ProblemSetResponse.model_validate(problem_set)


def _set_verified(db: Session, admin_id: int, problem_set_id: int, verified: bool) -> ProblemSetResponse:
    try:
        problem_set = set_verification(db, admin_id, TargetType.PROBLEMSET, problem_set_id, verified)
    except QuizboardError as err:
        raise to_http_error(err) from err
    return ProblemSetResponse.model_validate(problem_set)


@router.post("/{problem_set_id}/verify", response_model=ProblemSetResponse)
def verify_problem_set(problem_set_id: int, admin: AdminUserDep, db: SessionDep) -> ProblemSetResponse:
    """Verify a problem set and credit its author (admin only)."""
    return _set_verified(db, admin.id, problem_set_id, True)


@router.post("/{problem_set_id}/unverify", response_model=ProblemSetResponse)
def unverify_problem_set(problem_set_id: int, admin: AdminUserDep, db: SessionDep) -> ProblemSetResponse:
    """Unverify a problem set and revoke the author's credit (admin only)."""
    return _set_verified(db, admin.id, problem_set_id, False)


@router.post("/{problem_set_id}/view", response_model=ViewCount)
def record_problem_set_view(problem_set_id: int, db: SessionDep) -> ViewCount:
    """Count a view of a problem set."""
    try:
        return ViewCount(view_count=record_view(db, TargetType.PROBLEMSET, problem_set_id))
    except QuizboardError as err:
        raise to_http_error(err) from err
