"""SQLAlchemy models for the Quizboard application."""

from .answer import UserAnswer
from .comment import Comment
from .enums import (
    Difficulty,
    QuestionType,
    ReferenceType,
    ReputationReason,
    TargetType,
    UserRole,
    VoteType,
)
from .problem_set import ProblemSet, ProblemSetQuestion
from .question import FillBlankAnswer, McqOption, Question
from .reputation import ReputationEntry
from .tag import Tag, problem_set_tags, question_tags
from .user import User
from .vote import CommentVote, ProblemSetVote, QuestionVote

__all__ = [
    "Comment",
    "CommentVote",
    "Difficulty",
    "FillBlankAnswer",
    "McqOption",
    "ProblemSet", "ProblemSetQuestion", "ProblemSetVote",
    "Question", "QuestionType", "QuestionVote",
    "ReferenceType", "ReputationEntry", "ReputationReason",
    "Tag", "TargetType",
    "User", "UserAnswer", "UserRole",
    "VoteType",
    "problem_set_tags", "question_tags",
]
