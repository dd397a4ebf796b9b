from typing import Annotated, Any, List, Literal, Optional

from pydantic import AfterValidator, BaseModel, Field, StrictBool, StrictStr

Operator = Literal[
    "equals",
    "not_equals",
    "contains",
    "not_contains",
    "starts_with",
    "ends_with",
    "greater_than",
    "less_than",
    "in",
    "not_in",
]
Logic = Literal["and", "or"]


def is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _check_condition_value(value: Any) -> Any:
    if isinstance(value, (str, bool)) or is_number(value):
        return value
    if isinstance(value, (list, tuple)):
        items = list(value)
        if all(isinstance(item, str) for item in items) or all(is_number(item) for item in items):
            return items
    raise ValueError("Value must be a string, number, boolean, or a list of strings or numbers")


def _required_text(label: str) -> AfterValidator:
    def _check(value: str) -> str:
        if not value:
            raise ValueError(f"{label} is required")
        return value

    return AfterValidator(_check)


ConditionValue = Annotated[Any, AfterValidator(_check_condition_value)]


class Condition(BaseModel):
    field: Annotated[StrictStr, _required_text("Field")]
    operator: Operator
    value: ConditionValue


class FilterCriteria(BaseModel):
    conditions: List[Condition]
    logic: Logic = "and"


class FilterDraft(BaseModel):
    """Filter fields a caller may supply; identity and audit fields are stamped on save."""

    name: Annotated[StrictStr, _required_text("Name")]
    category: Annotated[StrictStr, _required_text("Category")]
    criteria: FilterCriteria
    is_active: StrictBool = True


class Filter(FilterDraft):
    id: Optional[int] = None
    user_id: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class FilterError(BaseModel):
    path: str
    message: str


class FilterValidation(BaseModel):
    success: bool
    data: Optional[Filter] = None
    errors: Optional[List[FilterError]] = None


class FilterApplyRequest(BaseModel):
    records: List[Any] = Field(default_factory=list)
    category: Optional[str] = None


class FilterApplyResult(BaseModel):
    records: List[Any]
    total: int
    matched: int
