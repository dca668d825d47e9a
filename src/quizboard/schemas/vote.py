"""Vote-related Pydantic schemas."""

from pydantic import BaseModel, Field

from quizboard.models.enums import VoteType


class VoteCreate(BaseModel):
    """Schema for casting or toggling a vote."""

    vote_type: VoteType = Field(..., description="upvote or downvote")


class VoteResult(BaseModel):
    """Counters and caller state after a vote has been applied."""

    upvote_count: int
    downvote_count: int
    user_vote: VoteType | None = Field(None, description="Caller's vote after the call, if any")
    is_verified: bool | None = None
    reputation_delta: int = Field(0, description="Points applied to the content author")


class MyVoteResponse(BaseModel):
    """The caller's current vote on a target."""

    user_vote: VoteType | None = None


class VoteCounts(BaseModel):
    """Public vote counters of a target."""

    upvote_count: int
    downvote_count: int
