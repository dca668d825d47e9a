"""SQLAlchemy models for questions and their answer keys."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import (
    Boolean,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from quizboard.db.session import Base
from quizboard.db.time import utcnow

from .enums import Difficulty, QuestionType, enum_column
from .tag import Tag, question_tags


class Question(Base):
    """A quiz question authored by a user or ingested from an external source.

    ``upvote_count`` and ``downvote_count`` mirror the rows in
    ``question_votes`` and are written only by the vote engine.
    """

    __tablename__ = "questions"
    __table_args__ = (
        UniqueConstraint("source", "external_id", name="uq_questions_source_external_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    # Weak reference: removing the author keeps the question.
    author_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    question_text: Mapped[str] = mapped_column(Text, nullable=False)
    question_type: Mapped[QuestionType] = mapped_column(enum_column(QuestionType), nullable=False)
    difficulty_level: Mapped[Difficulty | None] = mapped_column(
        enum_column(Difficulty),
        nullable=True,
    )
    explanation: Mapped[str | None] = mapped_column(Text, nullable=True)

    upvote_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    downvote_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    view_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    is_verified: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    # NULL when verification came from votes rather than an admin.
    verified_by: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )
    verified_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    # Provenance for ingested questions; both NULL for user-authored ones.
    source: Mapped[str | None] = mapped_column(String(64), nullable=True)
    external_id: Mapped[str | None] = mapped_column(String(128), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    options: Mapped[list[McqOption]] = relationship(
        "McqOption",
        back_populates="question",
        cascade="all, delete-orphan",
        order_by="McqOption.option_order",
    )
    fill_blank_answers: Mapped[list[FillBlankAnswer]] = relationship(
        "FillBlankAnswer",
        back_populates="question",
        cascade="all, delete-orphan",
    )
    tags: Mapped[list[Tag]] = relationship(Tag, secondary=question_tags)


class McqOption(Base):
    """One choice of a multiple-choice question."""

    __tablename__ = "mcq_options"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    question_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("questions.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    option_text: Mapped[str] = mapped_column(Text, nullable=False)
    is_correct: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    option_order: Mapped[int] = mapped_column(Integer, nullable=False)

    question: Mapped[Question] = relationship("Question", back_populates="options")


class FillBlankAnswer(Base):
    """An accepted answer for a fill-in-the-blank question."""

    __tablename__ = "fill_blank_answers"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    question_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("questions.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    correct_answer: Mapped[str] = mapped_column(Text, nullable=False)
    is_case_sensitive: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    accepts_partial_match: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    question: Mapped[Question] = relationship("Question", back_populates="fill_blank_answers")
