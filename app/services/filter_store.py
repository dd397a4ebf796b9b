from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from sqlalchemy.orm import Session

from app.models.common import utcnow
from app.models.filter import Filter as FilterRow
from app.schemas.filters import Filter
from app.services.filter_engine import apply_filters
from app.services.filter_validation import prepare_filter_for_save

_LOG = logging.getLogger("app.filters")


def _iso(value) -> str | None:
    return value.isoformat() if value is not None else None


def serialize_filter(row: FilterRow) -> dict[str, Any]:
    return {
        "id": row.id,
        "name": row.name,
        "category": row.category,
        "criteria": row.criteria,
        "is_active": bool(row.is_active),
        "user_id": row.user_id,
        "created_at": _iso(row.created_at),
        "updated_at": _iso(row.updated_at),
    }


def _normalize_category(category: str | None) -> str | None:
    text = str(category or "").strip()
    return text or None


def list_filter_rows(db: Session, user_id: str, category: str | None = None) -> list[FilterRow]:
    q = db.query(FilterRow).filter(FilterRow.user_id == user_id)
    category = _normalize_category(category)
    if category:
        q = q.filter(FilterRow.category == category)
    return q.order_by(FilterRow.id.asc()).all()


def list_filters(db: Session, user_id: str, category: str | None = None) -> list[Filter]:
    """Stored filters owned by ``user_id``, validated back into their typed form."""
    return [Filter.model_validate(serialize_filter(row)) for row in list_filter_rows(db, user_id, category)]


def create_filter(db: Session, user_id: str, payload: Mapping[str, Any] | None) -> FilterRow:
    draft = prepare_filter_for_save(payload)
    now = utcnow()
    row = FilterRow(
        user_id=user_id,
        name=draft.name,
        category=draft.category,
        criteria=draft.criteria.model_dump(mode="json"),
        is_active=draft.is_active,
        created_at=now,
        updated_at=now,
    )
    db.add(row)
    db.commit()
    db.refresh(row)
    _LOG.info("filter created id=%s user_id=%s category=%s", row.id, user_id, row.category)
    return row


def apply_user_filters(
    db: Session,
    user_id: str,
    records: Iterable[Any],
    category: str | None = None,
) -> list[Any]:
    return apply_filters(records, list_filters(db, user_id, category))
