"""Consistency audit for cached reputation scores and vote counters.

Cached values are only ever written inside the same unit of work as the
rows they summarize, so any mismatch reported here points at writes that
bypassed the services.
"""
from __future__ import annotations

import argparse
import sys

from sqlalchemy.orm import Session

from quizboard.db.session import SessionLocal
from quizboard.models import User
from quizboard.repositories import LedgerRepository
from quizboard.services.reputation import ReputationLedger
from quizboard.services.votes import TARGETS


def audit_reputation(db: Session) -> list[str]:
    """Return one message per user whose cached score differs from the ledger replay."""
    problems: list[str] = []
    for user in db.query(User).order_by(User.id):
        replayed = ReputationLedger.replay(db, user.id)
        if replayed != user.reputation_score:
            problems.append(
                f"user {user.id}: cached reputation {user.reputation_score} != ledger {replayed}"
            )
    return problems


def audit_vote_counters(db: Session) -> list[str]:
    """Return one message per target whose counters differ from its vote rows."""
    repo = LedgerRepository(db)
    problems: list[str] = []
    for kind, spec in TARGETS.items():
        for target in db.query(spec.model).order_by(spec.model.id):
            rows = repo.count_votes(spec.vote_model, target.id)
            counted = target.upvote_count + target.downvote_count
            if rows != counted:
                problems.append(f"{kind.value} {target.id}: counters total {counted} != {rows} vote rows")
    return problems


def main() -> None:
    parser = argparse.ArgumentParser(description="Check cached reputation and vote counters")
    parser.add_argument(
        "--skip-votes",
        action="store_true",
        help="Only audit reputation scores.",
    )
    args = parser.parse_args()

    with SessionLocal() as db:
        problems = audit_reputation(db)
        if not args.skip_votes:
            problems.extend(audit_vote_counters(db))

    for problem in problems:
        print(f"[audit] {problem}", file=sys.stderr)
    if problems:
        sys.exit(1)
    print("[audit] no inconsistencies found")


if __name__ == "__main__":
    main()
