"""
Pydantic schemas for service inputs and API request/response models.
"""

from .answer import AnswerResult, AnswerSubmit
from .ingestion import IngestionReport, IngestionRequest, NormalizedOption, NormalizedQuestion
from .problem_set import ProblemSetDraft, ProblemSetResponse
from .question import FillBlankAnswerDraft, McqOptionDraft, QuestionDraft, QuestionResponse, ViewCount
from .reputation import ReputationAdjust, ReputationChange, ReputationEntryResponse, ReputationSummary
from .vote import MyVoteResponse, VoteCounts, VoteCreate, VoteResult

__all__ = [
    "AnswerResult", "AnswerSubmit",
    "FillBlankAnswerDraft", "McqOptionDraft",
    "IngestionReport", "IngestionRequest", "NormalizedOption", "NormalizedQuestion",
    "MyVoteResponse",
    "ProblemSetDraft", "ProblemSetResponse",
    "QuestionDraft", "QuestionResponse",
    "ViewCount",
    "ReputationAdjust", "ReputationChange", "ReputationEntryResponse", "ReputationSummary",
    "VoteCounts", "VoteCreate", "VoteResult",
]
