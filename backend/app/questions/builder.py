"""Aggregate builder: parent row + the variant payload for its recorded type."""

from typing import Any
from uuid import UUID

from sqlalchemy.orm import Session

from app.core.app_exceptions import NotFoundError, UnknownTypeError
from app.core.logging import get_logger
from app.questions.registry import SkillDomain
from app.schemas.question import QuestionDetail

logger = get_logger(__name__)


def _plain(value: Any) -> Any:
    # Copy so the detail never aliases the row's JSON value
    return list(value) if isinstance(value, list) else value


def get_parent_or_404(db: Session, domain: SkillDomain, question_id: UUID) -> Any:
    question = db.get(domain.parent_model, question_id)
    if question is None:
        raise NotFoundError(f"{domain.name} question not found", details={"id": str(question_id)})
    return question


def assemble_question_detail(db: Session, domain: SkillDomain, question: Any) -> QuestionDetail:
    """Compose the aggregate for an already-loaded parent row.

    Raises UnknownTypeError when the stored discriminator has no registered
    variant. A variant with no child rows yet yields payload=None.
    """
    try:
        spec = domain.variant(question.type)
    except UnknownTypeError:
        logger.error(
            "unknown_question_type",
            extra={
                "event": "unknown_question_type",
                "domain": domain.name,
                "question_id": str(question.id),
                "type": question.type,
            },
        )
        raise

    payload = spec.loader(db, question.id)
    extra = {name: _plain(getattr(question, name)) for name in domain.parent_fields}
    return domain.detail_model(
        id=question.id,
        type=question.type,
        topic=list(question.topic or []),
        instruction=question.instruction,
        image_urls=list(question.image_urls or []),
        max_time=question.max_time,
        version=question.version,
        created_at=question.created_at,
        updated_at=question.updated_at,
        payload=payload,
        **extra,
    )


def build_question_detail(db: Session, domain: SkillDomain, question_id: UUID) -> QuestionDetail:
    question = get_parent_or_404(db, domain, question_id)
    return assemble_question_detail(db, domain, question)
