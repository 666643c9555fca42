"""Versioned delta query: which of the client's questions changed since it last looked."""

from uuid import UUID

from sqlalchemy import and_, or_
from sqlalchemy.orm import Session

from app.core.app_exceptions import TransportError, UnknownTypeError
from app.core.logging import get_logger
from app.questions.builder import assemble_question_detail
from app.questions.completion import is_complete
from app.questions.updator import QuestionUpdator
from app.schemas.question import QuestionDetail, VersionCheck

logger = get_logger(__name__)

# Bound on OR-ed (id, version) predicates per SELECT
DELTA_BATCH_SIZE = 200


def get_changed_since(db: Session, updator: QuestionUpdator, checks: list[VersionCheck]) -> list[QuestionDetail]:
    """
    Return aggregates whose stored version is greater than the one supplied.

    An id whose cache entry exists at exactly the known version is treated as
    unchanged and never reaches the database. The rest are loaded with one
    `(id = ? AND version > ?) OR ...` query per batch, rebuilt, cached and
    returned most recently created first.
    """
    domain = updator.domain
    model = domain.parent_model

    pending: dict[UUID, int] = {}
    for check in checks:
        if check.id in pending:
            continue
        if updator.cache_sync.has_version(check.id, check.version):
            continue
        pending[check.id] = check.version

    if not pending:
        return []

    items = list(pending.items())
    rows = []
    for start in range(0, len(items), DELTA_BATCH_SIZE):
        chunk = items[start : start + DELTA_BATCH_SIZE]
        conditions = [and_(model.id == qid, model.version > version) for qid, version in chunk]
        rows.extend(db.query(model).filter(or_(*conditions)).order_by(model.created_at.desc()).all())
    if len(items) > DELTA_BATCH_SIZE:
        rows.sort(key=lambda row: row.created_at, reverse=True)

    details: list[QuestionDetail] = []
    for row in rows:
        try:
            detail = assemble_question_detail(db, domain, row)
        except UnknownTypeError:
            continue
        details.append(detail)
        try:
            updator.cache_sync.sync(detail, is_complete(domain, detail))
        except TransportError as e:
            logger.warning(
                "question_cache_sync_failed",
                extra={"event": "question_cache_sync_failed", "question_id": str(detail.id), "error": e.message},
            )
    return details
