from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.deps import get_current_user_id
from app.db.session import get_db
from app.schemas.filters import FilterApplyRequest, FilterApplyResult
from app.services.filter_store import apply_user_filters, create_filter, list_filter_rows, serialize_filter
from app.services.filter_validation import InvalidFilterError, validate_filter

router = APIRouter()


def _invalid_filter(errors) -> HTTPException:
    return HTTPException(
        status_code=400,
        detail={"message": "Invalid filter", "errors": [item.model_dump() for item in errors]},
    )


@router.get("")
def get_filters(
    category: str | None = Query(None),
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    rows = list_filter_rows(db, user_id, category)
    return {"filters": [serialize_filter(row) for row in rows]}


@router.post("", status_code=201)
def post_filter(
    payload: Any = Body(None),
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    try:
        row = create_filter(db, user_id, payload)
    except InvalidFilterError as exc:
        raise _invalid_filter(exc.errors)
    return {"filter": serialize_filter(row)}


@router.post("/validate")
def post_validate_filter(payload: Any = Body(None)):
    result = validate_filter(payload)
    errors = [item.model_dump() for item in result.errors or []]
    return {"success": result.success, "errors": errors}


@router.post("/apply", response_model=FilterApplyResult)
def post_apply_filters(
    body: FilterApplyRequest,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    if len(body.records) > settings.APPLY_MAX_RECORDS:
        raise HTTPException(status_code=413, detail=f"Too many records (max {settings.APPLY_MAX_RECORDS})")
    matched = apply_user_filters(db, user_id, body.records, body.category)
    return {"records": matched, "total": len(body.records), "matched": len(matched)}
