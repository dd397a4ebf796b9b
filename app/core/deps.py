import re

from fastapi import HTTPException, Request
from app.core.config import settings

_USER_ID_RE = re.compile(r"^[A-Za-z0-9._:@-]{1,64}$")

def get_current_user_id(request: Request) -> str:
    """Resolve the caller once per request; every store call receives it explicitly."""
    raw = str(request.headers.get(settings.USER_ID_HEADER) or "").strip()
    if not raw:
        return settings.ANONYMOUS_USER_ID
    if not _USER_ID_RE.fullmatch(raw):
        raise HTTPException(status_code=400, detail=f"Invalid {settings.USER_ID_HEADER} header")
    return raw
