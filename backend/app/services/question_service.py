"""Parent question service: create, field updates, reads, delta, search, purge."""

import json
from typing import Any
from uuid import UUID

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.orm import Session

from app.core.app_exceptions import TransportError, UnknownTypeError, ValidationError
from app.core.logging import get_logger
from app.db.session import transaction
from app.questions.builder import assemble_question_detail, build_question_detail, get_parent_or_404
from app.questions.completion import is_complete
from app.questions.delta import get_changed_since
from app.questions.updator import QuestionUpdator
from app.questions.versioning import apply_field_update
from app.schemas.question import (
    QuestionCreate,
    QuestionDetail,
    QuestionSearchFilter,
    QuestionSearchPage,
    VersionCheck,
)

logger = get_logger(__name__)


def validate_input(model: type[BaseModel], data: Any) -> Any:
    """Coerce a dict (or pass through an instance) and map pydantic errors to ValidationError."""
    if isinstance(data, model):
        return data
    try:
        return model.model_validate(data)
    except PydanticValidationError as e:
        raise ValidationError(
            f"invalid {model.__name__}",
            details=json.loads(e.json(include_url=False)),
        ) from e


class QuestionService:
    """Operations on one skill domain's parent questions."""

    def __init__(self, updator: QuestionUpdator):
        self.updator = updator
        self.domain = updator.domain

    def _cache_quietly(self, detail: QuestionDetail) -> None:
        try:
            self.updator.cache_sync.sync(detail, is_complete(self.domain, detail))
        except TransportError as e:
            logger.warning(
                "question_cache_sync_failed",
                extra={"event": "question_cache_sync_failed", "question_id": str(detail.id), "error": e.message},
            )

    def create_question(self, db: Session, data: QuestionCreate | dict[str, Any]) -> QuestionDetail:
        """Insert at version 1, then publish. A search failure is raised after the commit."""
        payload = validate_input(self.domain.create_model, data)
        if not self.domain.has_kind(payload.type):
            raise ValidationError(
                f"invalid {self.domain.name} question type: {payload.type}",
                details={"type": payload.type, "allowed": self.domain.kinds},
            )

        question = self.domain.parent_model(**payload.model_dump(), version=1)
        with transaction(db):
            db.add(question)
            db.flush()

        logger.info(
            "question_created",
            extra={"event": "question_created", "domain": self.domain.name, "question_id": str(question.id)},
        )
        result = self.updator.update_cache_and_search(db, question.id, raise_on_search_error=True)
        return result.detail

    def update_question_field(self, db: Session, question_id: UUID, field: str, value: Any) -> QuestionDetail:
        with transaction(db):
            question = get_parent_or_404(db, self.domain, question_id)
            apply_field_update(question, field, value, self.domain.field_validators())
            db.flush()

        result = self.updator.update_cache_and_search(db, question_id)
        return result.detail

    def delete_question(self, db: Session, question_id: UUID) -> None:
        with transaction(db):
            question = get_parent_or_404(db, self.domain, question_id)
            db.delete(question)

        self.updator.remove(question_id)
        logger.info(
            "question_deleted",
            extra={"event": "question_deleted", "domain": self.domain.name, "question_id": str(question_id)},
        )

    def get_question_detail(self, db: Session, question_id: UUID) -> QuestionDetail:
        """Cache first; on miss or undecodable entry rebuild from the DB and re-cache."""
        cached = self.updator.cache_sync.read(question_id)
        if cached is not None:
            return cached

        detail = build_question_detail(db, self.domain, question_id)
        self._cache_quietly(detail)
        return detail

    def get_questions_by_ids(self, db: Session, question_ids: list[UUID]) -> list[QuestionDetail]:
        """Batched read in input order. Unknown ids are omitted; unbuildable rows are skipped."""
        ordered = list(dict.fromkeys(question_ids))
        found: dict[UUID, QuestionDetail] = {}
        missing: list[UUID] = []
        for question_id in ordered:
            cached = self.updator.cache_sync.read(question_id)
            if cached is not None:
                found[question_id] = cached
            else:
                missing.append(question_id)

        if missing:
            model = self.domain.parent_model
            for question in db.query(model).filter(model.id.in_(missing)).all():
                try:
                    detail = assemble_question_detail(db, self.domain, question)
                except UnknownTypeError:
                    continue
                found[question.id] = detail
                self._cache_quietly(detail)

        return [found[qid] for qid in ordered if qid in found]

    def get_changed_since(self, db: Session, checks: list[VersionCheck | dict[str, Any]]) -> list[QuestionDetail]:
        parsed = [validate_input(VersionCheck, check) for check in checks]
        return get_changed_since(db, self.updator, parsed)

    def search_questions(self, search_filter: QuestionSearchFilter | dict[str, Any]) -> QuestionSearchPage:
        parsed = validate_input(QuestionSearchFilter, search_filter)
        return self.updator.search_sync.search(parsed)

    def purge_domain(self, db: Session) -> dict[str, Any]:
        """Admin reset: every row, cache key and the search index for this domain."""
        model = self.domain.parent_model
        with transaction(db):
            for spec in self.domain.specs:
                for child_model in reversed(spec.child_models):
                    db.query(child_model).delete(synchronize_session=False)
            deleted = db.query(model).delete(synchronize_session=False)
        db.expire_all()

        cache_keys = self.updator.cache_sync.purge()
        index_dropped = self.updator.search_sync.drop()
        logger.warning(
            "question_domain_purged",
            extra={
                "event": "question_domain_purged",
                "domain": self.domain.name,
                "questions": deleted,
                "cache_keys": cache_keys,
            },
        )
        return {"questions": deleted, "cache_keys": cache_keys, "index_dropped": index_dropped}
