# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Generator, Iterator
from itertools import count
from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from jose import jwt
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("SECRET_KEY", "test-secret-key")

from quizboard.core.settings import settings
from quizboard.db.session import Base, configure_sqlite
from quizboard.db.session import get_db as app_get_session
from quizboard.main import app as fastapi_app
from quizboard.models import (
    Comment,
    FillBlankAnswer,
    McqOption,
    ProblemSet,
    ProblemSetQuestion,
    Question,
    QuestionType,
    User,
    UserRole,
)

TEST_DB_URL = "sqlite://"

_USER_COUNTER = count(1)


@pytest.fixture(scope="session")
def engine() -> Generator[Engine, None, None]:
    engine = configure_sqlite(
        create_engine(
            TEST_DB_URL,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    SessionLocal = sessionmaker(
        bind=engine,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()

        # Services commit their own units of work, so wipe every table.
        with engine.begin() as cleanup_conn:
            for table in reversed(Base.metadata.sorted_tables):
                cleanup_conn.execute(table.delete())


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def make_user(db_session: Session) -> Callable[..., User]:
    """Return a factory that persists users with the given balances."""

    def _make_user(
        *,
        role: UserRole = UserRole.USER,
        reputation_score: int = 0,
        question_vouchers: int = 0,
        is_active: bool = True,
    ) -> User:
        n = next(_USER_COUNTER)
        user = User(
            username=f"user{n}",
            email=f"user{n}@example.com",
            role=role,
            reputation_score=reputation_score,
            question_vouchers=question_vouchers,
            is_active=is_active,
        )
        db_session.add(user)
        db_session.commit()
        return user

    return _make_user


@pytest.fixture()
def author(make_user: Callable[..., User]) -> User:
    """Create the author of the content used in tests."""
    return make_user(question_vouchers=1)


@pytest.fixture()
def voter(make_user: Callable[..., User]) -> User:
    return make_user()


@pytest.fixture()
def admin(make_user: Callable[..., User]) -> User:
    return make_user(role=UserRole.ADMIN)


@pytest.fixture()
def make_question(db_session: Session) -> Callable[..., Question]:
    """Return a factory for multiple-choice questions with two options."""

    def _make_question(author: User | None, **fields: Any) -> Question:
        question = Question(
            author_id=author.id if author is not None else None,
            title=fields.pop("title", "Capital of France"),
            question_text=fields.pop("question_text", "What is the capital of France?"),
            question_type=QuestionType.MCQ,
            **fields,
        )
        question.options = [
            McqOption(option_text="Paris", is_correct=True, option_order=1),
            McqOption(option_text="Lyon", is_correct=False, option_order=2),
        ]
        db_session.add(question)
        db_session.commit()
        return question

    return _make_question


@pytest.fixture()
def question(make_question: Callable[..., Question], author: User) -> Question:
    return make_question(author)


@pytest.fixture()
def fill_blank_question(db_session: Session, author: User) -> Question:
    question = Question(
        author_id=author.id,
        title="Chemistry",
        question_text="The chemical symbol for gold is ___.",
        question_type=QuestionType.FILL_IN_BLANK,
        explanation="From the Latin aurum.",
    )
    question.fill_blank_answers = [FillBlankAnswer(correct_answer="Au")]
    db_session.add(question)
    db_session.commit()
    return question


@pytest.fixture()
def comment(db_session: Session, question: Question, author: User) -> Comment:
    comment = Comment(question_id=question.id, author_id=author.id, comment_text="Nice one")
    db_session.add(comment)
    db_session.commit()
    return comment


@pytest.fixture()
def problem_set(
    db_session: Session,
    make_question: Callable[..., Question],
    author: User,
) -> ProblemSet:
    first = make_question(author, title="First")
    second = make_question(author, title="Second")
    problem_set = ProblemSet(author_id=author.id, title="Warm-up", question_count=2)
    problem_set.memberships = [
        ProblemSetQuestion(question_id=first.id, question_order=1),
        ProblemSetQuestion(question_id=second.id, question_order=2),
    ]
    db_session.add(problem_set)
    db_session.commit()
    return problem_set


@pytest.fixture()
def auth_headers() -> Callable[[User], dict[str, str]]:
    """Return a factory of bearer headers signed with the test secret."""

    def _auth_headers(user: User) -> dict[str, str]:
        token = jwt.encode({"sub": str(user.id)}, settings.secret_key, algorithm=settings.jwt_algorithm)
        return {"Authorization": f"Bearer {token}"}

    return _auth_headers
