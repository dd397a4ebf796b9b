from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from app.schemas.filters import Filter, FilterDraft, FilterError, FilterValidation

_LOG = logging.getLogger("app.filters")

DEFAULT_CRITERIA = {"conditions": [], "logic": "and"}


class InvalidFilterError(ValueError):
    def __init__(self, errors: list[FilterError]):
        self.errors = list(errors)
        payload = json.dumps([item.model_dump() for item in self.errors], ensure_ascii=False)
        super().__init__(f"Invalid filter: {payload}")


def _error_path(loc) -> str:
    return ".".join(str(part) for part in loc)


def _error_message(error: dict) -> str:
    # Custom validators raise ValueError; report their text without pydantic's prefix.
    if error.get("type") == "value_error":
        cause = (error.get("ctx") or {}).get("error")
        if cause is not None:
            return str(cause)
    return str(error.get("msg") or "Invalid value")


def collect_errors(exc: ValidationError) -> list[FilterError]:
    return [
        FilterError(path=_error_path(item.get("loc") or ()), message=_error_message(item))
        for item in exc.errors(include_url=False)
    ]


def validate_filter(candidate: Any) -> FilterValidation:
    """Validate untrusted filter data, reporting every violation with its dotted path."""
    try:
        data = Filter.model_validate(candidate)
    except ValidationError as exc:
        return FilterValidation(success=False, errors=collect_errors(exc))
    return FilterValidation(success=True, data=data)


def prepare_filter_for_save(partial: Mapping[str, Any] | None) -> FilterDraft:
    """Fill defaults for a partially populated filter and validate the result.

    Missing name and category become empty strings so that validation rejects
    them instead of persisting placeholder text.
    """
    if partial is None:
        partial = {}
    if not isinstance(partial, Mapping):
        raise InvalidFilterError([FilterError(path="", message="Filter must be an object")])

    criteria = partial.get("criteria")
    if criteria is None:
        criteria = dict(DEFAULT_CRITERIA, conditions=[])
    prepared = {
        "name": partial.get("name") or "",
        "category": partial.get("category") or "",
        "criteria": criteria,
        "is_active": partial.get("is_active", True),
    }
    try:
        return FilterDraft.model_validate(prepared)
    except ValidationError as exc:
        errors = collect_errors(exc)
        _LOG.info("filter rejected paths=%s", ",".join(item.path for item in errors))
        raise InvalidFilterError(errors) from exc
