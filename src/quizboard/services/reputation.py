"""Reputation ledger: point deltas, cached scores and voucher milestones."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from sqlalchemy.orm import Session

from quizboard.core.errors import UserNotFoundError, ValidationError
from quizboard.core.settings import settings
from quizboard.db.session import atomic
from quizboard.models import ReferenceType, ReputationEntry, ReputationReason
from quizboard.repositories import LedgerRepository
from quizboard.schemas.reputation import ReputationChange, ReputationSummary

logger = logging.getLogger(__name__)


def voucher_count(score: int) -> int:
    """Return how many vouchers a score has earned in total."""
    return max(score, 0) // settings.voucher_milestone


def next_voucher_at(score: int) -> int:
    """Return the next score that grants a voucher."""
    return (voucher_count(score) + 1) * settings.voucher_milestone


def replay_score(deltas: Iterable[int]) -> int:
    """Rebuild a cached score from an oldest-first sequence of ledger deltas.

    Clamping is applied after every step, exactly as ``apply_delta`` does
    when the entries are written.
    """
    score = 0
    for delta in deltas:
        score = max(0, score + delta)
    return score


class ReputationLedger:
    """Service owning writes to ``User.reputation_score`` and voucher grants."""

    @staticmethod
    def apply_delta(
        db: Session,
        user_id: int,
        points: int,
        reason: ReputationReason | str,
        reference_id: int | None = None,
        reference_type: ReferenceType | str | None = None,
    ) -> ReputationChange:
        """Apply a signed point delta to a user.

        Args:
            db: Database session. When called inside another unit of work the
                change joins it; otherwise it commits on its own.
            user_id: ID of the user whose reputation changes
            points: Signed delta; recorded verbatim in the ledger
            reason: Why the points were applied
            reference_id: Optional ID of the content that caused the change
            reference_type: Kind of content ``reference_id`` points at

        Returns:
            The clamped new score, vouchers granted by this call and the
            resulting voucher balance.

        Raises:
            UserNotFoundError: If the user does not exist.
            ValidationError: If ``reason`` or ``reference_type`` is unknown.
        """
        try:
            reason = ReputationReason(reason)
            if reference_type is not None:
                reference_type = ReferenceType(reference_type)
        except ValueError as err:
            raise ValidationError(str(err)) from err

        repo = LedgerRepository(db)
        with atomic(db):
            user = repo.get_user(user_id, lock=True)
            if user is None:
                raise UserNotFoundError("User not found")

            old_reputation = user.reputation_score
            new_reputation = max(0, old_reputation + points)
            user.reputation_score = new_reputation
            repo.add_entry(
                ReputationEntry(
                    user_id=user.id,
                    points_delta=points,
                    reason=reason,
                    reference_id=reference_id,
                    reference_type=reference_type,
                )
            )

            # Grants only ever go up; a later drop below a milestone keeps them.
            vouchers_earned = max(0, voucher_count(new_reputation) - voucher_count(old_reputation))
            if vouchers_earned:
                user.question_vouchers += vouchers_earned
                repo.add_entry(
                    ReputationEntry(
                        user_id=user.id,
                        points_delta=0,
                        reason=ReputationReason.VOUCHER_EARNED,
                        reference_id=vouchers_earned,
                        reference_type=ReferenceType.VOUCHER,
                    )
                )
                logger.info(
                    "User %s earned %d voucher(s) at %d reputation",
                    user.id,
                    vouchers_earned,
                    new_reputation,
                )
            db.flush()

        logger.debug(
            "Reputation for user %s: %d -> %d (%+d, %s)",
            user_id,
            old_reputation,
            new_reputation,
            points,
            reason.value,
        )
        return ReputationChange(
            new_reputation=new_reputation,
            vouchers_earned=vouchers_earned,
            current_vouchers=user.question_vouchers,
        )

    @staticmethod
    def get_user_reputation(db: Session, user_id: int) -> ReputationSummary:
        """Return reputation and voucher progress from the cached user row."""
        user = LedgerRepository(db).get_user(user_id)
        if user is None:
            raise UserNotFoundError("User not found")

        target = next_voucher_at(user.reputation_score)
        return ReputationSummary(
            reputation_score=user.reputation_score,
            question_vouchers=user.question_vouchers,
            next_voucher_at=target,
            points_to_next_voucher=target - user.reputation_score,
        )

    @staticmethod
    def get_history(db: Session, user_id: int, limit: int | None = None) -> Sequence[ReputationEntry]:
        """Return a user's ledger entries, newest first.

        ``limit`` defaults to the configured page size and is clamped to the
        configured maximum.
        """
        repo = LedgerRepository(db)
        if repo.get_user(user_id) is None:
            raise UserNotFoundError("User not found")

        if limit is None:
            limit = settings.reputation_history_default_limit
        limit = min(max(limit, 1), settings.reputation_history_max_limit)
        return repo.history(user_id, limit)

    @staticmethod
    def replay(db: Session, user_id: int) -> int:
        """Recompute a user's score from the full ledger."""
        return replay_score(entry.points_delta for entry in LedgerRepository(db).ledger(user_id))
