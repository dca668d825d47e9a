"""Models capturing per-user votes on questions, comments and problem sets."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, Integer
from sqlalchemy.orm import Mapped, mapped_column, synonym

from quizboard.db.session import Base
from quizboard.db.time import utcnow

from .enums import VoteType, enum_column


class VoteMixin:
    """Columns shared by every vote table.

    Each table keys on (target, user_id), so a user holds at most one vote
    per target. Rows are created, updated and deleted only by the vote
    engine.
    """

    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    )
    vote_type: Mapped[VoteType] = mapped_column(enum_column(VoteType), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )


class QuestionVote(VoteMixin, Base):
    """Vote on a question."""

    __tablename__ = "question_votes"
    __table_args__ = (Index("ix_question_votes_user_id", "user_id"),)

    question_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("questions.id", ondelete="CASCADE"),
        primary_key=True,
    )
    target_id = synonym("question_id")


class CommentVote(VoteMixin, Base):
    """Vote on a comment."""

    __tablename__ = "comment_votes"
    __table_args__ = (Index("ix_comment_votes_user_id", "user_id"),)

    comment_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("comments.id", ondelete="CASCADE"),
        primary_key=True,
    )
    target_id = synonym("comment_id")


class ProblemSetVote(VoteMixin, Base):
    """Vote on a problem set."""

    __tablename__ = "problem_set_votes"
    __table_args__ = (Index("ix_problem_set_votes_user_id", "user_id"),)

    problem_set_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("problem_sets.id", ondelete="CASCADE"),
        primary_key=True,
    )
    target_id = synonym("problem_set_id")
