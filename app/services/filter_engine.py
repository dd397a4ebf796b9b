from __future__ import annotations

import logging
import math
import re
from collections.abc import Iterable, Mapping
from decimal import Decimal
from typing import Any, Callable, TypeVar

from app.schemas.filters import Condition, Filter, FilterCriteria

_LOG = logging.getLogger("app.filters")

_DECIMAL_RE = re.compile(r"[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?")
_INFINITY_TEXT = {"Infinity": math.inf, "+Infinity": math.inf, "-Infinity": -math.inf}
_EXPONENT_RE = re.compile(r"e([+-])0+(?=[0-9])")

T = TypeVar("T")


class _Missing:
    """Result of a field path that does not resolve inside a record."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "MISSING"

    def __str__(self) -> str:
        return "undefined"

    def __bool__(self) -> bool:
        return False


MISSING = _Missing()


def _is_index(part: str) -> bool:
    return part.isascii() and part.isdigit() and (part == "0" or not part.startswith("0"))


def resolve_field(record: Any, path: str) -> Any:
    current = record
    for part in path.split("."):
        if isinstance(current, Mapping):
            if part not in current:
                return MISSING
            current = current[part]
        elif isinstance(current, (list, tuple)):
            if not _is_index(part):
                return MISSING
            index = int(part)
            if index >= len(current):
                return MISSING
            current = current[index]
        else:
            return MISSING
    return current


def _kind(value: Any) -> str:
    if value is MISSING:
        return "missing"
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, (int, float, Decimal)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, Mapping):
        return "mapping"
    if isinstance(value, (list, tuple)):
        return "list"
    return type(value).__name__


def strict_equals(left: Any, right: Any) -> bool:
    kind = _kind(left)
    if kind != _kind(right):
        return False
    if kind == "list":
        return list(left) == list(right)
    return left == right


def display_text(value: Any) -> str:
    if isinstance(value, str):
        return value
    if value is MISSING:
        return "undefined"
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value.is_integer() and abs(value) < 1e21:
            return str(int(value))
        return _EXPONENT_RE.sub(r"e\1", repr(value))
    if isinstance(value, (list, tuple)):
        return ",".join("" if item is None else display_text(item) for item in value)
    if isinstance(value, Mapping):
        return "[object Object]"
    return str(value)


def to_number(value: Any) -> float:
    if isinstance(value, bool):
        return 1.0 if value else 0.0
    if value is None:
        return 0.0
    if isinstance(value, (int, float, Decimal)):
        try:
            return float(value)
        except OverflowError:
            return math.inf if value > 0 else -math.inf
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return 0.0
        if text in _INFINITY_TEXT:
            return _INFINITY_TEXT[text]
        if not _DECIMAL_RE.fullmatch(text):
            return math.nan
        return float(text)
    return math.nan


def _folded(value: Any) -> str:
    return display_text(value).lower()


def _contains(actual: Any, expected: Any) -> bool:
    return _folded(expected) in _folded(actual)


def _is_member(actual: Any, expected: Any) -> bool:
    return any(strict_equals(actual, item) for item in expected)


def _is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


_OPERATORS: dict[str, Callable[[Any, Any], bool]] = {
    "equals": strict_equals,
    "not_equals": lambda actual, expected: not strict_equals(actual, expected),
    "contains": _contains,
    "not_contains": lambda actual, expected: not _contains(actual, expected),
    "starts_with": lambda actual, expected: _folded(actual).startswith(_folded(expected)),
    "ends_with": lambda actual, expected: _folded(actual).endswith(_folded(expected)),
    "greater_than": lambda actual, expected: to_number(actual) > to_number(expected),
    "less_than": lambda actual, expected: to_number(actual) < to_number(expected),
    "in": lambda actual, expected: _is_sequence(expected) and _is_member(actual, expected),
    "not_in": lambda actual, expected: _is_sequence(expected) and not _is_member(actual, expected),
}


def evaluate_condition(record: Any, condition: Condition) -> bool:
    if not isinstance(condition.field, str):
        return False
    compare = _OPERATORS.get(condition.operator) if isinstance(condition.operator, str) else None
    if compare is None:
        _LOG.debug("unknown filter operator=%r field=%s", condition.operator, condition.field)
        return False
    return compare(resolve_field(record, condition.field), condition.value)


def evaluate_criteria(record: Any, criteria: FilterCriteria) -> bool:
    results = [evaluate_condition(record, condition) for condition in criteria.conditions]
    if criteria.logic == "and":
        return all(results)
    return any(results)


def apply_filter(records: Iterable[T], filter_: Filter) -> list[T]:
    """Keep the records matching the filter's criteria, in their original order.

    The filter's active flag is not consulted here.
    """
    criteria = filter_.criteria
    return [record for record in records if evaluate_criteria(record, criteria)]


def apply_filters(records: Iterable[T], filters: Iterable[Filter]) -> list[T]:
    """Narrow records by every active filter in turn; inactive filters have no effect."""
    result = list(records)
    for filter_ in filters:
        if not filter_.is_active:
            continue
        result = apply_filter(result, filter_)
    return result
