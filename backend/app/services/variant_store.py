"""Generic CRUD over one child table, keyed by its parent id column."""

from typing import Any
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.app_exceptions import ConflictError, NotFoundError
from app.core.logging import get_logger
from app.models.question import utcnow

logger = get_logger(__name__)


class VariantStore:
    """Typed create/get/update/delete/list for a child model.

    Callers own the transaction; every write is flushed so ids and
    constraint violations surface immediately.
    """

    def __init__(self, model: type, parent_field: str, singleton: bool = False):
        self.model = model
        self.parent_field = parent_field
        self.singleton = singleton

    @property
    def name(self) -> str:
        return self.model.__tablename__

    def _parent_column(self):
        return getattr(self.model, self.parent_field)

    def create(self, db: Session, values: dict[str, Any]) -> Any:
        parent_id = values.get(self.parent_field)
        if self.singleton and parent_id is not None and self.first_by_parent(db, parent_id) is not None:
            raise ConflictError(
                f"{self.name} already exists for parent",
                details={"parent_id": str(parent_id)},
            )

        row = self.model(**values)
        db.add(row)
        try:
            db.flush()
        except IntegrityError as e:
            raise ConflictError(f"{self.name} violates a uniqueness rule", details={"error": str(e.orig)}) from e
        return row

    def get_by_id(self, db: Session, row_id: UUID) -> Any | None:
        return db.get(self.model, row_id)

    def get_or_404(self, db: Session, row_id: UUID) -> Any:
        row = self.get_by_id(db, row_id)
        if row is None:
            raise NotFoundError(f"{self.name} not found", details={"id": str(row_id)})
        return row

    def update(self, db: Session, row: Any, values: dict[str, Any]) -> Any:
        for field, value in values.items():
            setattr(row, field, value)
        if hasattr(row, "updated_at"):
            row.updated_at = utcnow()
        db.flush()
        return row

    def delete(self, db: Session, row: Any) -> None:
        db.delete(row)
        db.flush()

    def list_by_parent(self, db: Session, parent_id: UUID) -> list[Any]:
        """All rows for a parent, oldest first (id breaks ties)."""
        return (
            db.query(self.model)
            .filter(self._parent_column() == parent_id)
            .order_by(self.model.created_at.asc(), self.model.id.asc())
            .all()
        )

    def first_by_parent(self, db: Session, parent_id: UUID) -> Any | None:
        return (
            db.query(self.model)
            .filter(self._parent_column() == parent_id)
            .order_by(self.model.created_at.asc(), self.model.id.asc())
            .first()
        )

