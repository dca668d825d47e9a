"""Reputation-related Pydantic schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from quizboard.models.enums import ReferenceType, ReputationReason


class ReputationChange(BaseModel):
    """Outcome of applying one delta to a user's reputation."""

    new_reputation: int
    vouchers_earned: int
    current_vouchers: int


class ReputationSummary(BaseModel):
    """Cached reputation and voucher progress for a user."""

    reputation_score: int
    question_vouchers: int
    next_voucher_at: int
    points_to_next_voucher: int


class ReputationEntryResponse(BaseModel):
    """Serialized ledger entry."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    points_delta: int
    reason: ReputationReason
    reference_id: int | None = None
    reference_type: ReferenceType | None = None
    created_at: datetime


class ReputationAdjust(BaseModel):
    """Manual adjustment requested by an admin."""

    points: int = Field(..., description="Signed number of points to apply")
    reference_id: int | None = None
    reference_type: ReferenceType | None = None
