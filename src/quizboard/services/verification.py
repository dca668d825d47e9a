"""Verification rules for questions and problem sets.

Questions are promoted automatically once their net upvotes reach the
configured threshold; the vote engine evaluates ``auto_verify`` inside its
own unit of work and never demotes. Admins can verify or unverify questions
and problem sets explicitly; for problem sets that also moves a flat
reputation point to or from the author.
"""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from quizboard.core.errors import (
    ForbiddenError,
    InvalidVoteTypeError,
    NotFoundError,
    UserNotFoundError,
    ValidationError,
)
from quizboard.core.settings import settings
from quizboard.db.session import atomic
from quizboard.db.time import utcnow
from quizboard.models import (
    ProblemSet,
    Question,
    ReferenceType,
    ReputationReason,
    TargetType,
)
from quizboard.repositories import LedgerRepository
from quizboard.services.reputation import ReputationLedger

logger = logging.getLogger(__name__)

_VERIFIABLE: dict[TargetType, type[Question] | type[ProblemSet]] = {
    TargetType.QUESTION: Question,
    TargetType.PROBLEMSET: ProblemSet,
}


def auto_verify(upvote_count: int, downvote_count: int, is_verified: bool) -> bool:
    """Return the verification flag after applying the net-upvote rule.

    The rule is one way: a verified target stays verified whatever its
    counters say.
    """
    if is_verified:
        return True
    return upvote_count - downvote_count >= settings.auto_verify_threshold


def set_verification(
    db: Session,
    admin_id: int,
    target_type: TargetType | str,
    target_id: int,
    verified: bool,
) -> Question | ProblemSet:
    """Verify or unverify a question or problem set on behalf of an admin.

    Raises:
        ForbiddenError: If the acting user is not an admin.
        NotFoundError: If the target is missing or inactive.
        ValidationError: If the target already has the requested state, or
            its type cannot be verified.
    """
    try:
        kind = TargetType(target_type)
    except ValueError as err:
        raise InvalidVoteTypeError(f"Unknown target type: {target_type!r}") from err
    model = _VERIFIABLE.get(kind)
    if model is None:
        raise ValidationError(f"{kind.value} targets cannot be verified")

    repo = LedgerRepository(db)
    with atomic(db):
        admin = repo.get_user(admin_id, active_only=True)
        if admin is None:
            raise UserNotFoundError("User not found")
        if not admin.is_admin:
            raise ForbiddenError("Only admins can change verification")

        target = repo.get_active(model, target_id, lock=True)
        if target is None:
            raise NotFoundError(f"{kind.value.capitalize()} not found")
        if target.is_verified == verified:
            state = "verified" if verified else "not verified"
            raise ValidationError(f"{kind.value.capitalize()} is already {state}")

        target.is_verified = verified
        target.verified_by = admin.id if verified else None
        target.verified_at = utcnow() if verified else None

        author_id = target.author_id
        if kind is TargetType.PROBLEMSET and author_id is not None and author_id != admin.id:
            points = settings.problem_set_verified_points
            ReputationLedger.apply_delta(
                db,
                author_id,
                points if verified else -points,
                ReputationReason.PROBLEMSET_VERIFIED if verified else ReputationReason.PROBLEMSET_UNVERIFIED,
                target.id,
                ReferenceType.PROBLEMSET,
            )
        db.flush()

    logger.info(
        "Admin %s %s %s %s",
        admin_id,
        "verified" if verified else "unverified",
        kind.value,
        target_id,
    )
    return target


def verify(db: Session, admin_id: int, target_type: TargetType | str, target_id: int) -> Question | ProblemSet:
    """Mark a question or problem set as verified."""
    return set_verification(db, admin_id, target_type, target_id, True)


def unverify(db: Session, admin_id: int, target_type: TargetType | str, target_id: int) -> Question | ProblemSet:
    """Clear the verified flag on a question or problem set."""
    return set_verification(db, admin_id, target_type, target_id, False)
