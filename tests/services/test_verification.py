"""Tests for auto-verification and admin verification."""

from __future__ import annotations

import pytest

from quizboard.core.errors import ForbiddenError, NotFoundError, ValidationError
from quizboard.models import ProblemSet, ReputationEntry, ReputationReason
from quizboard.services.verification import auto_verify, unverify, verify
from quizboard.services.votes import cast_vote


@pytest.mark.parametrize(
    ("up", "down", "verified", "expected"),
    [
        (10, 0, False, True),
        (9, 0, False, False),
        (12, 2, False, True),
        (12, 3, False, False),
        (0, 7, True, True),
    ],
)
def test_auto_verify_rule(up, down, verified, expected) -> None:
    assert auto_verify(up, down, verified) is expected


def test_tenth_net_upvote_verifies_question(db_session, make_user, question) -> None:
    voters = [make_user() for _ in range(10)]
    for voter in voters[:9]:
        result = cast_vote(db_session, "question", question.id, voter.id, "upvote")
    assert result.is_verified is False

    result = cast_vote(db_session, "question", question.id, voters[9].id, "upvote")

    assert result.is_verified is True
    db_session.refresh(question)
    assert question.is_verified is True
    assert question.verified_by is None


def test_auto_verification_is_never_revoked(db_session, make_user, question) -> None:
    voters = [make_user() for _ in range(10)]
    for voter in voters:
        cast_vote(db_session, "question", question.id, voter.id, "upvote")

    for voter in voters[:5]:
        result = cast_vote(db_session, "question", question.id, voter.id, "downvote")

    assert (result.upvote_count, result.downvote_count) == (5, 5)
    assert result.is_verified is True


def test_problem_sets_are_not_auto_verified(db_session, make_user, problem_set) -> None:
    for _ in range(10):
        result = cast_vote(db_session, "problemset", problem_set.id, make_user().id, "upvote")

    assert result.upvote_count == 10
    assert result.is_verified is False


def test_admin_verifies_problem_set_and_credits_author(db_session, admin, author, problem_set) -> None:
    verified = verify(db_session, admin.id, "problemset", problem_set.id)

    assert verified.is_verified is True
    assert verified.verified_by == admin.id
    assert verified.verified_at is not None
    db_session.refresh(author)
    assert author.reputation_score == 1

    unverified = unverify(db_session, admin.id, "problemset", problem_set.id)

    assert unverified.is_verified is False
    assert unverified.verified_by is None
    db_session.refresh(author)
    assert author.reputation_score == 0
    reasons = [
        entry.reason
        for entry in db_session.query(ReputationEntry).order_by(ReputationEntry.id)
    ]
    assert reasons == [ReputationReason.PROBLEMSET_VERIFIED, ReputationReason.PROBLEMSET_UNVERIFIED]


def test_admin_verifying_own_problem_set_earns_nothing(db_session, admin) -> None:
    problem_set = ProblemSet(author_id=admin.id, title="Admin set", question_count=0)
    db_session.add(problem_set)
    db_session.commit()

    verify(db_session, admin.id, "problemset", problem_set.id)

    db_session.refresh(admin)
    assert admin.reputation_score == 0
    assert db_session.query(ReputationEntry).count() == 0


def test_admin_verifies_question_without_reputation(db_session, admin, author, question) -> None:
    verify(db_session, admin.id, "question", question.id)

    db_session.refresh(question)
    db_session.refresh(author)
    assert question.is_verified is True
    assert question.verified_by == admin.id
    assert author.reputation_score == 0


def test_non_admin_cannot_verify(db_session, voter, question) -> None:
    with pytest.raises(ForbiddenError):
        verify(db_session, voter.id, "question", question.id)


def test_verifying_twice_is_rejected(db_session, admin, question) -> None:
    verify(db_session, admin.id, "question", question.id)

    with pytest.raises(ValidationError):
        verify(db_session, admin.id, "question", question.id)


def test_unverifying_unverified_is_rejected(db_session, admin, problem_set) -> None:
    with pytest.raises(ValidationError):
        unverify(db_session, admin.id, "problemset", problem_set.id)


def test_comments_cannot_be_verified(db_session, admin, comment) -> None:
    with pytest.raises(ValidationError):
        verify(db_session, admin.id, "comment", comment.id)


def test_verify_missing_target(db_session, admin) -> None:
    with pytest.raises(NotFoundError):
        verify(db_session, admin.id, "question", 9999)
