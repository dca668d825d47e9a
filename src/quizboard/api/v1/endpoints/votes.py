"""Vote-related endpoints for the Quizboard API."""

from fastapi import APIRouter, status

from quizboard.api.v1.dependencies import CurrentUserDep, SessionDep, to_http_error
from quizboard.core.errors import QuizboardError
from quizboard.models import TargetType
from quizboard.schemas.vote import MyVoteResponse, VoteCounts, VoteCreate, VoteResult
from quizboard.services.votes import cast_vote, get_user_vote, get_vote_counts

router = APIRouter(prefix="/votes", tags=["votes"])


@router.post("/{target_type}/{target_id}", response_model=VoteResult, status_code=status.HTTP_200_OK)
def cast_vote_endpoint(
    target_type: TargetType,
    target_id: int,
    vote_data: VoteCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> VoteResult:
    """Cast, switch or withdraw the caller's vote on a target."""
    try:
        return cast_vote(db, target_type, target_id, current_user.id, vote_data.vote_type)
    except QuizboardError as err:
        raise to_http_error(err) from err


@router.get("/{target_type}/{target_id}/my-vote", response_model=MyVoteResponse)
def get_my_vote(
    target_type: TargetType,
    target_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> MyVoteResponse:
    """Get the current user's vote on a target."""
    return MyVoteResponse(user_vote=get_user_vote(db, target_type, target_id, current_user.id))


@router.get("/{target_type}/{target_id}", response_model=VoteCounts)
def get_votes(target_type: TargetType, target_id: int, db: SessionDep) -> VoteCounts:
    """Get the vote counters of a question, comment or problem set."""
    try:
        return get_vote_counts(db, target_type, target_id)
    except QuizboardError as err:
        raise to_http_error(err) from err
