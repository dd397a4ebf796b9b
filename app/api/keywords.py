from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from app.core.deps import get_current_user_id
from app.db.session import get_db
from app.schemas.keywords import KeywordCreate
from app.services.keywords import (
    InvalidKeywordError,
    add_keyword,
    delete_keyword,
    list_categories,
    list_keywords,
    resolve_category,
    serialize_category,
    serialize_keyword,
)

router = APIRouter()


@router.get("")
def get_keywords(
    category: str | None = Query(None),
    scope: str | None = Query(None),
    kind: str | None = Query(None),
    persona: str | None = Query(None),
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    try:
        category_code = resolve_category(category, scope, kind, persona)
    except InvalidKeywordError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return {"keywords": [serialize_keyword(row) for row in list_keywords(db, user_id, category_code)]}


@router.get("/categories")
def get_categories(db: Session = Depends(get_db)):
    return {"categories": [serialize_category(row) for row in list_categories(db)]}


@router.post("", status_code=201)
def post_keyword(
    body: KeywordCreate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    try:
        category_code = resolve_category(body.category, body.scope, body.kind, body.persona)
        row = add_keyword(db, user_id, body.keyword, category_code)
    except InvalidKeywordError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return {"keyword": serialize_keyword(row)}


@router.delete("/{keyword_id}")
def remove_keyword(
    keyword_id: int,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    if not delete_keyword(db, user_id, keyword_id):
        raise HTTPException(status_code=404, detail="Keyword not found")
    return {"deleted": True}
