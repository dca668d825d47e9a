"""Closed value sets shared by models, schemas and services."""

from __future__ import annotations

import enum

from sqlalchemy import Enum as SAEnum


class UserRole(str, enum.Enum):
    USER = "user"
    ADMIN = "admin"


class QuestionType(str, enum.Enum):
    MCQ = "mcq"
    FILL_IN_BLANK = "fill_in_blank"


class Difficulty(str, enum.Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class VoteType(str, enum.Enum):
    UPVOTE = "upvote"
    DOWNVOTE = "downvote"


class TargetType(str, enum.Enum):
    """Kinds of content that accept votes."""

    QUESTION = "question"
    COMMENT = "comment"
    PROBLEMSET = "problemset"


class ReputationReason(str, enum.Enum):
    QUESTION_ANSWERED = "question_answered"
    QUESTION_UPVOTED = "question_upvoted"
    QUESTION_UPVOTE_REMOVED = "question_upvoted_removed"
    COMMENT_UPVOTED = "comment_upvoted"
    COMMENT_UPVOTE_REMOVED = "comment_upvoted_removed"
    PROBLEMSET_UPVOTED = "problemset_upvoted"
    PROBLEMSET_UPVOTE_REMOVED = "problemset_upvoted_removed"
    PROBLEMSET_VERIFIED = "problemset_verified"
    PROBLEMSET_UNVERIFIED = "problemset_unverified"
    ADMIN_ADJUSTMENT = "admin_adjustment"
    VOUCHER_EARNED = "voucher_earned"


class ReferenceType(str, enum.Enum):
    QUESTION = "question"
    COMMENT = "comment"
    PROBLEMSET = "problemset"
    ANSWER = "answer"
    VOUCHER = "voucher"


def enum_column(enum_cls: type[enum.Enum]) -> SAEnum:
    """Store an enum by value in a portable VARCHAR column."""
    return SAEnum(
        enum_cls,
        native_enum=False,
        length=32,
        validate_strings=True,
        values_callable=lambda members: [member.value for member in members],
    )
