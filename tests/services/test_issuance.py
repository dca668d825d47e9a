"""Tests for voucher-gated question and problem set creation."""

from __future__ import annotations

import pytest

from quizboard.core.errors import (
    AuthorNotFoundError,
    InsufficientVouchersError,
    InvalidMembershipError,
    NotFoundError,
    ValidationError,
)
from quizboard.models import (
    McqOption,
    ProblemSet,
    ProblemSetQuestion,
    Question,
    QuestionType,
    Tag,
)
from quizboard.schemas import FillBlankAnswerDraft, McqOptionDraft, ProblemSetDraft, QuestionDraft
from quizboard.services.issuance import create_problem_set, create_question, validate_question_draft


def _mcq_draft(**overrides) -> QuestionDraft:
    fields = {
        "title": "Largest planet",
        "question_text": "Which planet is the largest?",
        "question_type": QuestionType.MCQ,
        "options": [
            McqOptionDraft(option_text="Jupiter", is_correct=True),
            McqOptionDraft(option_text="Mars"),
        ],
    }
    fields.update(overrides)
    return QuestionDraft(**fields)


def test_create_question_spends_one_voucher(db_session, make_user) -> None:
    user = make_user(question_vouchers=2)

    question = create_question(db_session, user.id, _mcq_draft(tags=["Space", "space ", "planets"]))

    db_session.refresh(user)
    assert user.question_vouchers == 1
    assert question.author_id == user.id
    assert [option.option_text for option in question.options] == ["Jupiter", "Mars"]
    assert [option.option_order for option in question.options] == [1, 2]
    assert sorted(tag.name for tag in question.tags) == ["planets", "space"]


def test_create_question_without_vouchers(db_session, make_user) -> None:
    user = make_user(question_vouchers=0)

    with pytest.raises(InsufficientVouchersError):
        create_question(db_session, user.id, _mcq_draft())

    assert db_session.query(Question).count() == 0
    db_session.refresh(user)
    assert user.question_vouchers == 0


def test_last_voucher_allows_exactly_one_question(db_session, make_user) -> None:
    user = make_user(question_vouchers=1)

    create_question(db_session, user.id, _mcq_draft())
    with pytest.raises(InsufficientVouchersError):
        create_question(db_session, user.id, _mcq_draft(title="Another"))

    assert db_session.query(Question).count() == 1


def test_admin_creates_without_vouchers(db_session, admin) -> None:
    question = create_question(db_session, admin.id, _mcq_draft())

    db_session.refresh(admin)
    assert question.id is not None
    assert admin.question_vouchers == 0


def test_system_question_has_no_author(db_session) -> None:
    question = create_question(db_session, None, _mcq_draft())

    assert question.author_id is None


def test_unknown_author(db_session) -> None:
    with pytest.raises(AuthorNotFoundError):
        create_question(db_session, 9999, _mcq_draft())


def test_invalid_draft_keeps_voucher(db_session, make_user) -> None:
    user = make_user(question_vouchers=1)
    draft = _mcq_draft(options=[McqOptionDraft(option_text="A"), McqOptionDraft(option_text="B")])

    with pytest.raises(ValidationError):
        create_question(db_session, user.id, draft)

    db_session.refresh(user)
    assert user.question_vouchers == 1
    assert db_session.query(McqOption).count() == 0


@pytest.mark.parametrize(
    "draft",
    [
        _mcq_draft(options=[McqOptionDraft(option_text="Only", is_correct=True)]),
        _mcq_draft(fill_blank_answers=[FillBlankAnswerDraft(correct_answer="x")]),
        QuestionDraft(
            title="Blank",
            question_text="2 + 2 = ___",
            question_type=QuestionType.FILL_IN_BLANK,
        ),
        QuestionDraft(
            title="Blank",
            question_text="2 + 2 = ___",
            question_type=QuestionType.FILL_IN_BLANK,
            fill_blank_answers=[FillBlankAnswerDraft(correct_answer="4")],
            options=[McqOptionDraft(option_text="4", is_correct=True)],
        ),
    ],
)
def test_validate_question_draft_rejects(draft) -> None:
    with pytest.raises(ValidationError):
        validate_question_draft(draft)


def test_create_fill_blank_question(db_session, make_user) -> None:
    user = make_user(question_vouchers=1)
    draft = QuestionDraft(
        title="Arithmetic",
        question_text="2 + 2 = ___",
        question_type=QuestionType.FILL_IN_BLANK,
        fill_blank_answers=[FillBlankAnswerDraft(correct_answer="4"), FillBlankAnswerDraft(correct_answer="four")],
    )

    question = create_question(db_session, user.id, draft)

    assert [answer.correct_answer for answer in question.fill_blank_answers] == ["4", "four"]
    assert question.options == []


def test_create_problem_set(db_session, make_user, make_question) -> None:
    user = make_user(question_vouchers=1)
    first = make_question(user)
    second = make_question(user)
    tag = Tag(name="geography")
    db_session.add(tag)
    db_session.commit()

    problem_set = create_problem_set(
        db_session,
        user.id,
        ProblemSetDraft(title="Capitals", question_ids=[second.id, first.id], tag_ids=[tag.id]),
    )

    db_session.refresh(user)
    assert user.question_vouchers == 0
    assert problem_set.question_count == 2
    assert problem_set.question_ids == [second.id, first.id]
    assert [membership.question_order for membership in problem_set.memberships] == [1, 2]
    assert [t.name for t in problem_set.tags] == ["geography"]


def test_problem_set_with_missing_question_rolls_back(db_session, make_user, make_question) -> None:
    user = make_user(question_vouchers=1)
    existing = make_question(user)

    with pytest.raises(InvalidMembershipError):
        create_problem_set(
            db_session,
            user.id,
            ProblemSetDraft(title="Broken", question_ids=[existing.id, 9999]),
        )

    db_session.refresh(user)
    assert user.question_vouchers == 1
    assert db_session.query(ProblemSet).count() == 0
    assert db_session.query(ProblemSetQuestion).count() == 0


def test_problem_set_rejects_inactive_question(db_session, make_user, make_question) -> None:
    user = make_user(question_vouchers=1)
    active = make_question(user)
    inactive = make_question(user, is_active=False)

    with pytest.raises(InvalidMembershipError):
        create_problem_set(
            db_session,
            user.id,
            ProblemSetDraft(title="Stale", question_ids=[active.id, inactive.id]),
        )


@pytest.mark.parametrize("question_ids", [[], [1], [1, 1]])
def test_problem_set_needs_distinct_questions(db_session, make_user, question_ids) -> None:
    user = make_user(question_vouchers=1)

    with pytest.raises(InvalidMembershipError):
        create_problem_set(db_session, user.id, ProblemSetDraft(title="Tiny", question_ids=question_ids))


def test_problem_set_unknown_tag_keeps_voucher(db_session, make_user, make_question) -> None:
    user = make_user(question_vouchers=1)
    ids = [make_question(user).id, make_question(user).id]

    with pytest.raises(NotFoundError):
        create_problem_set(db_session, user.id, ProblemSetDraft(title="Tagged", question_ids=ids, tag_ids=[42]))

    db_session.refresh(user)
    assert user.question_vouchers == 1


def test_problem_set_without_vouchers(db_session, make_user, make_question) -> None:
    user = make_user()
    ids = [make_question(user).id, make_question(user).id]

    with pytest.raises(InsufficientVouchersError):
        create_problem_set(db_session, user.id, ProblemSetDraft(title="Free ride", question_ids=ids))
