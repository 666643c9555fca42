"""Child-entity services: one transaction per mutation, then republish the owning question."""

from typing import Any
from uuid import UUID

from pydantic import BaseModel
from sqlalchemy.orm import Session

from app.core.app_exceptions import ValidationError
from app.core.config import settings
from app.core.logging import get_logger
from app.db.session import transaction
from app.questions.builder import get_parent_or_404
from app.questions.updator import QuestionUpdator
from app.questions.versioning import bump_version
from app.schemas.writing import check_word_range
from app.services.question_service import validate_input
from app.services.variant_store import VariantStore

logger = get_logger(__name__)


class ChildService:
    """CRUD for one child table.

    `parent_store` is set for rows that hang off an intermediate singleton
    (answers under a blank-question, options under a choice-question, QA lines
    under a conversation); the owning question is resolved through it.
    """

    def __init__(
        self,
        updator: QuestionUpdator,
        store: VariantStore,
        create_schema: type[BaseModel],
        update_schema: type[BaseModel],
        out_schema: type[BaseModel],
        parent_store: VariantStore | None = None,
    ):
        self.updator = updator
        self.domain = updator.domain
        self.store = store
        self.create_schema = create_schema
        self.update_schema = update_schema
        self.out_schema = out_schema
        self.parent_store = parent_store
        self.allowed_types = self.domain.kind_for_child(store.model)

    def _question_for(self, db: Session, parent_ref: UUID, check_type: bool = True) -> Any:
        if self.parent_store is None:
            question = get_parent_or_404(db, self.domain, parent_ref)
        else:
            parent_row = self.parent_store.get_or_404(db, parent_ref)
            question = get_parent_or_404(db, self.domain, getattr(parent_row, self.parent_store.parent_field))

        if check_type and question.type not in self.allowed_types:
            raise ValidationError(
                f"{self.store.name} cannot be attached to a {question.type} question",
                details={"question_id": str(question.id), "type": question.type, "allowed": self.allowed_types},
            )
        return question

    def _touch_question(self, question: Any) -> None:
        if settings.BUMP_VERSION_ON_CHILD_MUTATION:
            bump_version(question)

    def _create_row(self, db: Session, values: dict[str, Any]) -> Any:
        return self.store.create(db, values)

    def _update_row(self, db: Session, row: Any, values: dict[str, Any]) -> Any:
        return self.store.update(db, row, values)

    def _update_values(self, payload: BaseModel) -> dict[str, Any]:
        """Explicitly sent fields; None only where the column accepts NULL."""
        columns = self.store.model.__table__.columns
        return {
            key: value
            for key, value in payload.model_dump(exclude_unset=True).items()
            if value is not None or columns[key].nullable
        }

    def _sync(self, db: Session, question_id: UUID) -> None:
        self.updator.update_cache_and_search(db, question_id)

    def create(self, db: Session, data: BaseModel | dict[str, Any]) -> Any:
        payload = validate_input(self.create_schema, data)
        values = payload.model_dump()
        with transaction(db):
            question = self._question_for(db, values[self.store.parent_field])
            row = self._create_row(db, values)
            self._touch_question(question)
            question_id = question.id
        out = self.out_schema.model_validate(row)

        self._sync(db, question_id)
        return out

    def get(self, db: Session, row_id: UUID) -> Any:
        return self.out_schema.model_validate(self.store.get_or_404(db, row_id))

    def list_by_parent(self, db: Session, parent_id: UUID) -> list[Any]:
        return [self.out_schema.model_validate(row) for row in self.store.list_by_parent(db, parent_id)]

    def update(self, db: Session, row_id: UUID, data: BaseModel | dict[str, Any]) -> Any:
        payload = validate_input(self.update_schema, data)
        values = self._update_values(payload)
        with transaction(db):
            row = self.store.get_or_404(db, row_id)
            question = self._question_for(db, getattr(row, self.store.parent_field))
            self._update_row(db, row, values)
            self._touch_question(question)
            question_id = question.id
        out = self.out_schema.model_validate(row)

        self._sync(db, question_id)
        return out

    def delete(self, db: Session, row_id: UUID) -> None:
        with transaction(db):
            row = self.store.get_or_404(db, row_id)
            question = self._question_for(db, getattr(row, self.store.parent_field), check_type=False)
            self.store.delete(db, row)
            self._touch_question(question)
            question_id = question.id

        self._sync(db, question_id)


class ChoiceOneOptionService(ChildService):
    """Options of a choice-one question; at most one may be marked correct.

    Setting an option correct first clears the flag on any other option of
    the same question, inside the same transaction. Concurrent writers are
    resolved last-writer-wins by the database isolation level.
    """

    def _clear_correct(self, db: Session, choice_question_id: UUID, keep_id: UUID | None = None) -> None:
        model = self.store.model
        current = (
            db.query(model)
            .filter(getattr(model, self.store.parent_field) == choice_question_id, model.is_correct.is_(True))
            .all()
        )
        for option in current:
            if option.id != keep_id:
                self.store.update(db, option, {"is_correct": False})

    def _create_row(self, db: Session, values: dict[str, Any]) -> Any:
        if values.get("is_correct"):
            self._clear_correct(db, values[self.store.parent_field])
        return super()._create_row(db, values)

    def _update_row(self, db: Session, row: Any, values: dict[str, Any]) -> Any:
        if values.get("is_correct"):
            self._clear_correct(db, getattr(row, self.store.parent_field), keep_id=row.id)
        return super()._update_row(db, row, values)


class WordRangeService(ChildService):
    """Writing rows with a min_words/max_words pair.

    Create schemas check the pair up front; a partial update is checked
    against the stored row so max_words never drops below min_words.
    """

    def _update_row(self, db: Session, row: Any, values: dict[str, Any]) -> Any:
        min_words = values.get("min_words", row.min_words)
        max_words = values.get("max_words", row.max_words)
        try:
            check_word_range(min_words, max_words)
        except ValueError as e:
            raise ValidationError(
                str(e), details={"id": str(row.id), "min_words": min_words, "max_words": max_words}
            ) from e
        return super()._update_row(db, row, values)
