"""Business logic services for the Quizboard application."""

from .answers import submit_answer
from .ingestion import ingest_questions
from .issuance import VoucherGate, create_problem_set, create_question
from .reputation import ReputationLedger
from .verification import auto_verify, unverify, verify
from .views import record_view
from .votes import cast_vote, get_user_vote, get_vote_counts

__all__ = [
    "ReputationLedger",
    "VoucherGate",
    "auto_verify",
    "cast_vote",
    "create_problem_set",
    "create_question",
    "get_user_vote",
    "get_vote_counts",
    "ingest_questions",
    "record_view",
    "submit_answer",
    "unverify",
    "verify",
]
