from fastapi import APIRouter
from app.api import filters, keywords

router = APIRouter()
router.include_router(filters.router, prefix="/filters", tags=["Filters"])
router.include_router(keywords.router, prefix="/keywords", tags=["Keywords"])
