from __future__ import annotations

import logging
import re
from time import perf_counter
from uuid import uuid4

from fastapi import FastAPI, Request, Response

from app.core.config import settings

REQUEST_ID_HEADER = "X-Request-ID"
_REQUEST_ID_RE = re.compile(r"^[A-Za-z0-9._-]{1,128}$")
_LOG = logging.getLogger("app.http")

# JSON API only; filters and keywords are per-user data.
API_RESPONSE_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "Referrer-Policy": "no-referrer",
    "Cache-Control": "no-store",
}


def _request_id_from_header(raw: str | None) -> str:
    value = str(raw or "").strip()
    if _REQUEST_ID_RE.fullmatch(value):
        return value
    return uuid4().hex


def _log_request(request: Request, response: Response, request_id: str, started_at: float) -> None:
    _LOG.info(
        "%s %s status=%s duration_ms=%.2f request_id=%s user=%s",
        request.method,
        request.url.path,
        response.status_code,
        (perf_counter() - started_at) * 1000.0,
        request_id,
        request.headers.get(settings.USER_ID_HEADER) or "anonymous",
    )


def install_http_hardening(app: FastAPI) -> None:
    @app.middleware("http")
    async def _api_headers_middleware(request: Request, call_next):
        request_id = _request_id_from_header(request.headers.get(REQUEST_ID_HEADER))
        request.state.request_id = request_id
        started_at = perf_counter()

        response = await call_next(request)

        response.headers.update(API_RESPONSE_HEADERS)
        response.headers[REQUEST_ID_HEADER] = request_id
        _log_request(request, response, request_id, started_at)
        return response
