"""Tests for answer grading and first-correct reputation."""

from __future__ import annotations

import pytest

from quizboard.core.errors import NotFoundError, UserNotFoundError
from quizboard.models import (
    FillBlankAnswer,
    Question,
    QuestionType,
    ReputationEntry,
    ReputationReason,
    UserAnswer,
)
from quizboard.services.answers import grade, submit_answer
from quizboard.services.votes import cast_vote


def _option_id(question, text: str) -> str:
    return str(next(option.id for option in question.options if option.option_text == text))


def test_first_correct_answer_earns_a_point(db_session, question, voter) -> None:
    result = submit_answer(db_session, voter.id, question.id, _option_id(question, "Paris"), 1200)

    assert result.correct is True
    assert result.correct_answer == "Paris"
    assert result.reputation_awarded == 1
    db_session.refresh(voter)
    assert voter.reputation_score == 1
    attempt = db_session.get(UserAnswer, result.attempt_id)
    assert attempt.time_taken == 1200
    [entry] = db_session.query(ReputationEntry).all()
    assert entry.reason is ReputationReason.QUESTION_ANSWERED
    assert entry.reference_id == question.id


def test_repeat_correct_answer_earns_nothing(db_session, question, voter) -> None:
    answer = _option_id(question, "Paris")
    submit_answer(db_session, voter.id, question.id, answer)

    result = submit_answer(db_session, voter.id, question.id, answer)

    assert result.correct is True
    assert result.reputation_awarded == 0
    db_session.refresh(voter)
    assert voter.reputation_score == 1
    assert db_session.query(UserAnswer).count() == 2


def test_wrong_answer_is_logged_without_reputation(db_session, question, voter) -> None:
    result = submit_answer(db_session, voter.id, question.id, _option_id(question, "Lyon"))

    assert result.correct is False
    assert result.reputation_awarded == 0
    assert db_session.query(UserAnswer).filter(UserAnswer.is_correct.is_(False)).count() == 1
    assert db_session.query(ReputationEntry).count() == 0


def test_correct_after_wrong_still_counts_as_first(db_session, question, voter) -> None:
    submit_answer(db_session, voter.id, question.id, _option_id(question, "Lyon"))

    result = submit_answer(db_session, voter.id, question.id, _option_id(question, "Paris"))

    assert result.reputation_awarded == 1


@pytest.mark.parametrize("submitted", ["not-a-number", "", "99999"])
def test_mcq_garbage_is_wrong(question, submitted) -> None:
    correct, canonical = grade(question, submitted)

    assert correct is False
    assert canonical == "Paris"


def test_fill_blank_is_case_insensitive_by_default(db_session, fill_blank_question, voter) -> None:
    result = submit_answer(db_session, voter.id, fill_blank_question.id, "  au ")

    assert result.correct is True
    assert result.correct_answer == "Au"
    assert result.explanation == "From the Latin aurum."


@pytest.mark.parametrize(
    ("accepted", "submitted", "expected"),
    [
        (FillBlankAnswer(correct_answer="Au", is_case_sensitive=True), "au", False),
        (FillBlankAnswer(correct_answer="Au", is_case_sensitive=True), "Au", True),
        (FillBlankAnswer(correct_answer="Newton", accepts_partial_match=True), "isaac newton", True),
        (FillBlankAnswer(correct_answer="Newton"), "isaac newton", False),
        (FillBlankAnswer(correct_answer="Newton", accepts_partial_match=True), "Newt", False),
    ],
)
def test_fill_blank_matching_rules(accepted, submitted, expected) -> None:
    question = Question(question_type=QuestionType.FILL_IN_BLANK, fill_blank_answers=[accepted])

    correct, _ = grade(question, submitted)

    assert correct is expected


def test_answer_on_inactive_question(db_session, question, voter) -> None:
    question.is_active = False
    db_session.commit()

    with pytest.raises(NotFoundError):
        submit_answer(db_session, voter.id, question.id, _option_id(question, "Paris"))
    assert db_session.query(UserAnswer).count() == 0


def test_answer_by_unknown_user(db_session, question) -> None:
    with pytest.raises(UserNotFoundError):
        submit_answer(db_session, 9999, question.id, "1")


def test_answers_and_votes_share_one_ledger(db_session, make_user, make_question, author, question) -> None:
    """Answering, then gaining and losing an upvote, moves 1 -> 2 -> 1 -> 1."""
    other = make_user()
    foreign = make_question(other)
    voter = make_user()

    submit_answer(db_session, author.id, foreign.id, _option_id(foreign, "Paris"))
    db_session.refresh(author)
    assert author.reputation_score == 1

    cast_vote(db_session, "question", question.id, voter.id, "upvote")
    db_session.refresh(author)
    assert author.reputation_score == 2

    cast_vote(db_session, "question", question.id, voter.id, "downvote")
    db_session.refresh(author)
    assert author.reputation_score == 1

    cast_vote(db_session, "question", question.id, voter.id, "downvote")
    db_session.refresh(author)
    assert author.reputation_score == 1
