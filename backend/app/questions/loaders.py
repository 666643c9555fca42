"""Payload loader factories shared by the skill domains."""

from uuid import UUID

from sqlalchemy.orm import Session

from app.questions.registry import PayloadLoader
from app.services.variant_store import VariantStore


def list_loader(store: VariantStore, out_model: type, payload_model: type) -> PayloadLoader:
    """List variants always produce a payload; an empty list is simply incomplete."""

    def load(db: Session, question_id: UUID):
        rows = store.list_by_parent(db, question_id)
        return payload_model(items=[out_model.model_validate(r) for r in rows])

    return load


def header_loader(
    header_store: VariantStore,
    row_store: VariantStore,
    header_out: type,
    row_out: type,
    payload_model: type,
    rows_field: str,
) -> PayloadLoader:
    """Singleton header (blank or choice question) plus its rows; None until the header exists."""

    def load(db: Session, question_id: UUID):
        header = header_store.first_by_parent(db, question_id)
        if header is None:
            return None
        rows = row_store.list_by_parent(db, header.id)
        return payload_model(
            question=header_out.model_validate(header),
            **{rows_field: [row_out.model_validate(r) for r in rows]},
        )

    return load
