"""Vote engine for questions, comments and problem sets.

Voting is a toggle: casting the same vote twice removes it, casting the
opposite vote switches it. Every call runs as one unit of work covering the
vote row, the target's counters, the author's reputation and, for
questions, auto-verification.

Authors earn reputation only for upvotes they hold. Switching or removing a
vote moves the author by the difference in held credit, so a downvote never
costs the author anything beyond losing an earlier upvote credit.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, TypeVar

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from quizboard.core.errors import (
    ConflictError,
    InvalidVoteTypeError,
    NotFoundError,
    SelfVoteForbiddenError,
    UserNotFoundError,
)
from quizboard.core.settings import settings
from quizboard.db.session import atomic
from quizboard.models import (
    Comment,
    CommentVote,
    ProblemSet,
    ProblemSetVote,
    Question,
    QuestionVote,
    ReferenceType,
    ReputationReason,
    TargetType,
    VoteType,
)
from quizboard.repositories import LedgerRepository
from quizboard.schemas.vote import VoteCounts, VoteResult
from quizboard.services.reputation import ReputationLedger
from quizboard.services.verification import auto_verify

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Enum)


@dataclass(frozen=True)
class VoteTarget:
    """How one kind of votable content is stored and credited."""

    label: str
    model: Any
    vote_model: Any
    reference_type: ReferenceType
    upvoted_reason: ReputationReason
    upvote_removed_reason: ReputationReason
    auto_verifies: bool = False
    tracks_verification: bool = False


TARGETS: dict[TargetType, VoteTarget] = {
    TargetType.QUESTION: VoteTarget(
        label="Question",
        model=Question,
        vote_model=QuestionVote,
        reference_type=ReferenceType.QUESTION,
        upvoted_reason=ReputationReason.QUESTION_UPVOTED,
        upvote_removed_reason=ReputationReason.QUESTION_UPVOTE_REMOVED,
        auto_verifies=True,
        tracks_verification=True,
    ),
    TargetType.COMMENT: VoteTarget(
        label="Comment",
        model=Comment,
        vote_model=CommentVote,
        reference_type=ReferenceType.COMMENT,
        upvoted_reason=ReputationReason.COMMENT_UPVOTED,
        upvote_removed_reason=ReputationReason.COMMENT_UPVOTE_REMOVED,
    ),
    TargetType.PROBLEMSET: VoteTarget(
        label="Problem set",
        model=ProblemSet,
        vote_model=ProblemSetVote,
        reference_type=ReferenceType.PROBLEMSET,
        upvoted_reason=ReputationReason.PROBLEMSET_UPVOTED,
        upvote_removed_reason=ReputationReason.PROBLEMSET_UPVOTE_REMOVED,
        tracks_verification=True,
    ),
}


def _coerce(enum_cls: type[E], value: E | str, label: str) -> E:
    try:
        return enum_cls(value)
    except ValueError as err:
        raise InvalidVoteTypeError(f"Invalid {label}: {value!r}") from err


def _held_credit(vote_type: VoteType | None) -> int:
    """Points an author holds because of a single vote."""
    return settings.vote_upvote_points if vote_type is VoteType.UPVOTE else 0


def reputation_delta(previous: VoteType | None, current: VoteType | None) -> int:
    """Return the author's reputation change for a vote transition."""
    return _held_credit(current) - _held_credit(previous)


def _bump(target: Any, vote_type: VoteType, step: int) -> None:
    if vote_type is VoteType.UPVOTE:
        target.upvote_count += step
    else:
        target.downvote_count += step


def _find_vote(db: Session, spec: VoteTarget, target_id: int, user_id: int) -> Any:
    return LedgerRepository(db).get_vote(spec.vote_model, target_id, user_id)


def _insert_vote(
    db: Session,
    spec: VoteTarget,
    target_id: int,
    user_id: int,
    vote_type: VoteType,
) -> bool:
    """Insert a new vote row inside a savepoint.

    Returns False when a concurrent request inserted the same
    (target, user) row first; the savepoint is rolled back and the outer
    unit of work stays usable.
    """
    try:
        with db.begin_nested():
            db.add(spec.vote_model(target_id=target_id, user_id=user_id, vote_type=vote_type))
    except IntegrityError:
        logger.warning(
            "Concurrent vote insert on %s %s by user %s; retrying as update",
            spec.label.lower(),
            target_id,
            user_id,
        )
        return False
    return True


def cast_vote(
    db: Session,
    target_type: TargetType | str,
    target_id: int,
    user_id: int,
    vote_type: VoteType | str,
) -> VoteResult:
    """Apply an upvote/downvote toggle to a target.

    Args:
        db: Database session
        target_type: question, comment or problemset
        target_id: ID of the voted content
        user_id: ID of the voter
        vote_type: upvote or downvote

    Returns:
        Final counters, the caller's resulting vote and the author's
        reputation change.

    Raises:
        InvalidVoteTypeError: If ``target_type`` or ``vote_type`` is unknown.
        NotFoundError: If the target is missing or inactive.
        UserNotFoundError: If the voter is missing or inactive.
        SelfVoteForbiddenError: If the voter authored the target.
        ConflictError: If a concurrent insert could not be reconciled.
    """
    kind = _coerce(TargetType, target_type, "target type")
    vote_type = _coerce(VoteType, vote_type, "vote type")
    spec = TARGETS[kind]
    repo = LedgerRepository(db)

    with atomic(db):
        # Locking the target serializes concurrent votes on its counters.
        target = repo.get_active(spec.model, target_id, lock=True)
        if target is None:
            raise NotFoundError(f"{spec.label} not found")
        voter = repo.get_user(user_id, active_only=True)
        if voter is None:
            raise UserNotFoundError("User not found")
        if target.author_id is not None and target.author_id == voter.id:
            raise SelfVoteForbiddenError(f"Cannot vote on your own {spec.label.lower()}")

        vote = _find_vote(db, spec, target_id, user_id)
        if vote is None and _insert_vote(db, spec, target_id, user_id, vote_type):
            previous, current = None, vote_type
        else:
            if vote is None:
                vote = _find_vote(db, spec, target_id, user_id)
                if vote is None:
                    raise ConflictError("Vote changed concurrently; try again")
            previous = vote.vote_type
            if previous is vote_type:
                db.delete(vote)
                current = None
            else:
                vote.vote_type = vote_type
                current = vote_type

        if previous is not None:
            _bump(target, previous, -1)
        if current is not None:
            _bump(target, current, 1)

        delta = reputation_delta(previous, current)
        if delta and target.author_id is not None:
            ReputationLedger.apply_delta(
                db,
                target.author_id,
                delta,
                spec.upvoted_reason if delta > 0 else spec.upvote_removed_reason,
                target.id,
                spec.reference_type,
            )

        if spec.auto_verifies:
            verified = auto_verify(target.upvote_count, target.downvote_count, target.is_verified)
            if verified and not target.is_verified:
                target.is_verified = True
                logger.info(
                    "%s %s auto-verified at %d/%d votes",
                    spec.label,
                    target.id,
                    target.upvote_count,
                    target.downvote_count,
                )
        db.flush()

    logger.debug(
        "Vote on %s %s by user %s: %s -> %s",
        kind.value,
        target_id,
        user_id,
        previous.value if previous else None,
        current.value if current else None,
    )
    return VoteResult(
        upvote_count=target.upvote_count,
        downvote_count=target.downvote_count,
        user_vote=current,
        is_verified=target.is_verified if spec.tracks_verification else None,
        reputation_delta=delta if target.author_id is not None else 0,
    )


def get_user_vote(
    db: Session,
    target_type: TargetType | str,
    target_id: int,
    user_id: int,
) -> VoteType | None:
    """Return the user's current vote on a target, or None."""
    spec = TARGETS[_coerce(TargetType, target_type, "target type")]
    vote = _find_vote(db, spec, target_id, user_id)
    return vote.vote_type if vote is not None else None


def get_vote_counts(db: Session, target_type: TargetType | str, target_id: int) -> VoteCounts:
    """Return the counters of an active target.

    Raises:
        InvalidVoteTypeError: If ``target_type`` is unknown.
        NotFoundError: If the target is missing or inactive.
    """
    spec = TARGETS[_coerce(TargetType, target_type, "target type")]
    target = LedgerRepository(db).get_active(spec.model, target_id)
    if target is None:
        raise NotFoundError(f"{spec.label} not found")
    return VoteCounts(upvote_count=target.upvote_count, downvote_count=target.downvote_count)
