from __future__ import annotations

import logging
import re
from typing import Any

from sqlalchemy.orm import Session

from app.models.common import utcnow
from app.models.keyword import Keyword
from app.models.keyword_category import KeywordCategory

_LOG = logging.getLogger("app.keywords")

CATEGORY_OPPORTUNITY = "opportunity_keywords"
CATEGORY_TARGET_PERSONAS = "target_personas"

SCOPE_COMPANY = "company"
SCOPE_AUTHORITY = "authority"
SCOPE_PERSONA = "persona"

KIND_TITLE = "title"
KIND_DEPARTMENT = "department"

_WHITESPACE_RE = re.compile(r"\s+")


class InvalidKeywordError(ValueError):
    pass


def persona_slug(persona: str) -> str:
    return _WHITESPACE_RE.sub("_", str(persona or "").strip()).lower()


def keyword_category_for(scope: str, kind: str, persona: str | None = None) -> str:
    """Category code under which a wizard step stores its keyword list.

    Company profile keywords use ``kind`` ``opportunity`` or ``personas``;
    authority and persona steps use ``title`` or ``department``.
    """
    if scope == SCOPE_COMPANY:
        if kind == "opportunity":
            return CATEGORY_OPPORTUNITY
        if kind == "personas":
            return CATEGORY_TARGET_PERSONAS
        raise InvalidKeywordError(f"Unknown company keyword kind: {kind}")
    if kind not in {KIND_TITLE, KIND_DEPARTMENT}:
        raise InvalidKeywordError(f"Unknown keyword kind: {kind}")
    if scope == SCOPE_AUTHORITY:
        return f"authority_{kind}_filters"
    if scope == SCOPE_PERSONA:
        slug = persona_slug(persona or "")
        if not slug:
            raise InvalidKeywordError("Persona is required for persona keywords")
        return f"persona_{kind}_filters_{slug}"
    raise InvalidKeywordError(f"Unknown keyword scope: {scope}")


def resolve_category(
    category: str | None = None,
    scope: str | None = None,
    kind: str | None = None,
    persona: str | None = None,
) -> str | None:
    """An explicit category wins; otherwise derive it from the wizard step, if one is given."""
    text = str(category or "").strip()
    if text:
        return text
    if not scope and not kind:
        return None
    return keyword_category_for(str(scope or ""), str(kind or ""), persona)


def serialize_keyword(row: Keyword) -> dict[str, Any]:
    return {
        "id": row.id,
        "keyword": row.keyword,
        "category": row.category,
        "created_at": row.created_at.isoformat() if row.created_at else None,
    }


def serialize_category(row: KeywordCategory) -> dict[str, Any]:
    return {"id": row.id, "code": row.code, "label": row.label, "sort_order": row.sort_order}


def list_keywords(db: Session, user_id: str, category: str | None = None) -> list[Keyword]:
    q = db.query(Keyword).filter(Keyword.user_id == user_id)
    category = str(category or "").strip()
    if category:
        q = q.filter(Keyword.category == category)
    return q.order_by(Keyword.id.asc()).all()


def add_keyword(db: Session, user_id: str, keyword: str, category: str | None) -> Keyword:
    text = str(keyword or "").strip()
    if not text:
        raise InvalidKeywordError("Keyword is required")
    category_code = str(category or "").strip()
    if not category_code:
        raise InvalidKeywordError("Category is required")
    now = utcnow()
    row = Keyword(user_id=user_id, keyword=text, category=category_code, created_at=now, updated_at=now)
    db.add(row)
    db.commit()
    db.refresh(row)
    _LOG.info("keyword added id=%s user_id=%s category=%s", row.id, user_id, category_code)
    return row


def delete_keyword(db: Session, user_id: str, keyword_id: int) -> bool:
    row = db.query(Keyword).filter(Keyword.id == keyword_id, Keyword.user_id == user_id).first()
    if row is None:
        return False
    db.delete(row)
    db.commit()
    _LOG.info("keyword deleted id=%s user_id=%s", keyword_id, user_id)
    return True


def list_categories(db: Session) -> list[KeywordCategory]:
    return db.query(KeywordCategory).order_by(KeywordCategory.sort_order.asc(), KeywordCategory.id.asc()).all()
