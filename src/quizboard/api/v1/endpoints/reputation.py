"""Reputation endpoints: balances, history and admin adjustments."""

from fastapi import APIRouter, Query

from quizboard.api.v1.dependencies import AdminUserDep, SessionDep, to_http_error
from quizboard.core.errors import QuizboardError
from quizboard.models import ReputationEntry, ReputationReason
from quizboard.schemas.reputation import (
    ReputationAdjust,
    ReputationChange,
    ReputationEntryResponse,
    ReputationSummary,
)
from quizboard.services.reputation import ReputationLedger

router = APIRouter(prefix="/reputation", tags=["reputation"])


@router.get("/users/{user_id}", response_model=ReputationSummary)
def get_reputation(user_id: int, db: SessionDep) -> ReputationSummary:
    """Return a user's reputation and progress towards the next voucher."""
    try:
        return ReputationLedger.get_user_reputation(db, user_id)
    except QuizboardError as err:
        raise to_http_error(err) from err


@router.get("/users/{user_id}/history", response_model=list[ReputationEntryResponse])
def get_reputation_history(
    user_id: int,
    db: SessionDep,
    limit: int | None = Query(None, ge=1, description="Maximum number of entries to return"),
) -> list[ReputationEntry]:
    """Return a user's reputation ledger, newest first."""
    try:
        return list(ReputationLedger.get_history(db, user_id, limit))
    except QuizboardError as err:
        raise to_http_error(err) from err


@router.post("/users/{user_id}/adjust", response_model=ReputationChange)
def adjust_reputation(
    user_id: int,
    adjustment: ReputationAdjust,
    admin: AdminUserDep,
    db: SessionDep,
) -> ReputationChange:
    """Apply a manual reputation adjustment (admin only)."""
    try:
        return ReputationLedger.apply_delta(
            db,
            user_id,
            adjustment.points,
            ReputationReason.ADMIN_ADJUSTMENT,
            adjustment.reference_id,
            adjustment.reference_type,
        )
    except QuizboardError as err:
        raise to_http_error(err) from err
