"""Data access helpers for users, votable content and the reputation ledger."""
from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import TypeVar

from sqlalchemy.orm import Query, Session

from quizboard.models import Question, ReputationEntry, Tag, User, UserAnswer

__all__ = ["LedgerRepository"]

T = TypeVar("T")


class LedgerRepository:
    """Thin wrapper around database access used by the core services.

    Reads made with ``lock=True`` are issued as ``SELECT ... FOR UPDATE`` and
    refresh any copy already held in the session, so the caller works on the
    committed row for the rest of its unit of work.
    """

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def _first(self, query: Query[T], *, lock: bool) -> T | None:
        if lock:
            # Push pending changes first; populate_existing would discard them.
            self.session.flush()
            query = query.with_for_update().populate_existing()
        return query.first()

    def get_user(self, user_id: int, *, lock: bool = False, active_only: bool = False) -> User | None:
        """Return a user by primary key."""
        query = self.session.query(User).filter(User.id == user_id)
        if active_only:
            query = query.filter(User.is_active.is_(True))
        return self._first(query, lock=lock)

    def get_active(self, model: type[T], entity_id: int, *, lock: bool = False) -> T | None:
        """Return a non-deleted question, comment or problem set."""
        query = self.session.query(model).filter(
            model.id == entity_id,  # type: ignore[attr-defined]
            model.is_active.is_(True),  # type: ignore[attr-defined]
        )
        return self._first(query, lock=lock)

    def get_vote(self, vote_model: type[T], target_id: int, user_id: int) -> T | None:
        """Return the user's vote on a target, if any."""
        return (
            self.session.query(vote_model)
            .filter(
                vote_model.target_id == target_id,  # type: ignore[attr-defined]
                vote_model.user_id == user_id,  # type: ignore[attr-defined]
            )
            .first()
        )

    def count_votes(self, vote_model: type[T], target_id: int) -> int:
        """Return the number of vote rows on a target."""
        return (
            self.session.query(vote_model)
            .filter(vote_model.target_id == target_id)  # type: ignore[attr-defined]
            .count()
        )

    def active_questions(self, question_ids: Iterable[int]) -> list[Question]:
        """Return the active questions among ``question_ids``."""
        ids = list(question_ids)
        if not ids:
            return []
        return (
            self.session.query(Question)
            .filter(Question.id.in_(ids), Question.is_active.is_(True))
            .all()
        )

    def question_by_source(self, source: str, external_id: str) -> Question | None:
        """Return a previously ingested question by provider identity."""
        return (
            self.session.query(Question)
            .filter(Question.source == source, Question.external_id == external_id)
            .first()
        )

    def tags_by_ids(self, tag_ids: Iterable[int]) -> list[Tag]:
        ids = list(tag_ids)
        if not ids:
            return []
        return self.session.query(Tag).filter(Tag.id.in_(ids)).all()

    def get_or_create_tags(self, names: Iterable[str]) -> list[Tag]:
        """Resolve tag names (case-insensitively), creating missing tags."""
        wanted: list[str] = []
        for name in names:
            normalized = name.strip().lower()
            if normalized and normalized not in wanted:
                wanted.append(normalized)
        if not wanted:
            return []

        existing = {tag.name: tag for tag in self.session.query(Tag).filter(Tag.name.in_(wanted))}
        tags: list[Tag] = []
        for name in wanted:
            tag = existing.get(name)
            if tag is None:
                tag = Tag(name=name)
                self.session.add(tag)
            tags.append(tag)
        return tags

    def has_correct_answer(self, user_id: int, question_id: int) -> bool:
        """Return True when the user already answered the question correctly."""
        return (
            self.session.query(UserAnswer.id)
            .filter(
                UserAnswer.user_id == user_id,
                UserAnswer.question_id == question_id,
                UserAnswer.is_correct.is_(True),
            )
            .first()
            is not None
        )

    def add_entry(self, entry: ReputationEntry) -> ReputationEntry:
        """Append an entry to the reputation ledger."""
        self.session.add(entry)
        return entry

    def history(self, user_id: int, limit: int) -> Sequence[ReputationEntry]:
        """Return ledger entries for a user, newest first."""
        return (
            self.session.query(ReputationEntry)
            .filter(ReputationEntry.user_id == user_id)
            .order_by(ReputationEntry.created_at.desc(), ReputationEntry.id.desc())
            .limit(limit)
            .all()
        )

    def ledger(self, user_id: int) -> Sequence[ReputationEntry]:
        """Return every ledger entry for a user, oldest first."""
        return (
            self.session.query(ReputationEntry)
            .filter(ReputationEntry.user_id == user_id)
            .order_by(ReputationEntry.created_at.asc(), ReputationEntry.id.asc())
            .all()
        )
