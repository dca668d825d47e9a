"""Append-only audit trail of reputation changes."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, Integer
from sqlalchemy.orm import Mapped, mapped_column

from quizboard.db.session import Base
from quizboard.db.time import utcnow

from .enums import ReferenceType, ReputationReason, enum_column


class ReputationEntry(Base):
    """One requested change to a user's reputation.

    ``points_delta`` records the raw requested value, even when the cached
    score was clamped at zero. Rows are never updated or deleted.
    """

    __tablename__ = "reputation_entries"
    __table_args__ = (Index("ix_reputation_entries_user_created", "user_id", "created_at"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    points_delta: Mapped[int] = mapped_column(Integer, nullable=False)
    reason: Mapped[ReputationReason] = mapped_column(enum_column(ReputationReason), nullable=False)
    reference_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    reference_type: Mapped[ReferenceType | None] = mapped_column(
        enum_column(ReferenceType),
        nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
