"""SQLAlchemy models for curated problem sets."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from quizboard.db.session import Base
from quizboard.db.time import utcnow

from .enums import Difficulty, enum_column
from .tag import Tag, problem_set_tags


class ProblemSet(Base):
    """Ordered collection of questions that is itself votable."""

    __tablename__ = "problem_sets"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    author_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    difficulty_level: Mapped[Difficulty | None] = mapped_column(
        enum_column(Difficulty),
        nullable=True,
    )

    upvote_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    downvote_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    view_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    # Denormalized size of the membership below.
    question_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    is_verified: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    verified_by: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )
    verified_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    memberships: Mapped[list[ProblemSetQuestion]] = relationship(
        "ProblemSetQuestion",
        back_populates="problem_set",
        cascade="all, delete-orphan",
        order_by="ProblemSetQuestion.question_order",
    )
    tags: Mapped[list[Tag]] = relationship(Tag, secondary=problem_set_tags)

    @property
    def question_ids(self) -> list[int]:
        """Return member question ids in set order."""
        return [membership.question_id for membership in self.memberships]


class ProblemSetQuestion(Base):
    """Membership of a question in a problem set, with its 1-based position."""

    __tablename__ = "problem_set_questions"

    problem_set_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("problem_sets.id", ondelete="CASCADE"),
        primary_key=True,
    )
    question_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("questions.id", ondelete="CASCADE"),
        primary_key=True,
    )
    question_order: Mapped[int] = mapped_column(Integer, nullable=False)

    problem_set: Mapped[ProblemSet] = relationship("ProblemSet", back_populates="memberships")
