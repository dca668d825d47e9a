"""SQLAlchemy models for platform users."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import Boolean, CheckConstraint, DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from quizboard.db.session import Base
from quizboard.db.time import utcnow

from .enums import UserRole, enum_column


class User(Base):
    """Registered user carrying the cached reputation and voucher balance.

    ``reputation_score`` is a cache of the reputation ledger and is only
    written by the reputation service; ``question_vouchers`` is written by
    the reputation service (grants) and the issuance gate (spending).
    """

    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint("reputation_score >= 0", name="ck_users_reputation_non_negative"),
        CheckConstraint("question_vouchers >= 0", name="ck_users_vouchers_non_negative"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    role: Mapped[UserRole] = mapped_column(
        enum_column(UserRole),
        nullable=False,
        default=UserRole.USER,
    )
    reputation_score: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    question_vouchers: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    # Deactivation is handled outside the core; rows are never hard-deleted here.
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    @property
    def is_admin(self) -> bool:
        """Return True when the user holds the admin role."""
        return self.role == UserRole.ADMIN
