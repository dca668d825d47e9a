"""Admin endpoint accepting normalized questions from provider adapters."""

from fastapi import APIRouter

from quizboard.api.v1.dependencies import AdminUserDep, SessionDep, to_http_error
from quizboard.core.errors import QuizboardError
from quizboard.schemas.ingestion import IngestionReport, IngestionRequest
from quizboard.services.ingestion import ingest_questions

router = APIRouter(prefix="/ingestion", tags=["ingestion"])


@router.post("/questions", response_model=IngestionReport)
def ingest_questions_endpoint(
    request: IngestionRequest,
    admin: AdminUserDep,
    db: SessionDep,
) -> IngestionReport:
    """Import normalized questions owned by the calling admin."""
    try:
        return ingest_questions(db, request.records, admin.id, request.auto_verify)
    except QuizboardError as err:
        raise to_http_error(err) from err
