"""View counters for questions and problem sets."""

from __future__ import annotations

import logging

from sqlalchemy import update
from sqlalchemy.orm import Session

from quizboard.core.errors import InvalidVoteTypeError, NotFoundError, ValidationError
from quizboard.db.session import atomic
from quizboard.models import ProblemSet, Question, TargetType

logger = logging.getLogger(__name__)

_VIEWABLE: dict[TargetType, type[Question] | type[ProblemSet]] = {
    TargetType.QUESTION: Question,
    TargetType.PROBLEMSET: ProblemSet,
}


def record_view(db: Session, target_type: TargetType | str, target_id: int) -> int:
    """Count one view of an active question or problem set.

    The increment is a single ``UPDATE ... SET view_count = view_count + 1``
    so concurrent views never overwrite each other.

    Returns:
        The view count after this view.

    Raises:
        InvalidVoteTypeError: If ``target_type`` is unknown.
        ValidationError: If the target kind has no view counter.
        NotFoundError: If the target is missing or inactive.
    """
    try:
        kind = TargetType(target_type)
    except ValueError as err:
        raise InvalidVoteTypeError(f"Unknown target type: {target_type!r}") from err
    model = _VIEWABLE.get(kind)
    if model is None:
        raise ValidationError(f"{kind.value} targets do not track views")

    with atomic(db):
        result = db.execute(
            update(model)
            .where(model.id == target_id, model.is_active.is_(True))
            .values(view_count=model.view_count + 1)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            raise NotFoundError(f"{kind.value.capitalize()} not found")
        view_count = db.query(model.view_count).filter(model.id == target_id).scalar()

    logger.debug("%s %s viewed, %d views", kind.value, target_id, view_count)
    return view_count
