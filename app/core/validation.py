# app/core/validation.py

"""
Explicit validation of request inputs.

DTOs are plain pydantic models. `validate()` runs one of them against raw
input (a JSON body, query string or path parameters) and returns a
`ValidationOutcome`: either the parsed DTO or the list of field-level
violations. Callers that want an exception use `outcome.unwrap()`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Generic, Iterable, List, Mapping, Optional, Type, TypeVar

from pydantic import BaseModel, Field, ValidationError

from app.core.badges.schemas import BadgeQuery
from app.core.errors import RequestValidationFailed
from app.core.ids import MAX_ID, MIN_ID
from app.core.user_badges.schemas import UpdateUserBadge, UserBadgeQuery
from app.core.user_levels.schemas import UserLevelIdParam, UserLevelQuery

log = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

# pydantic error type -> rule name reported to clients
_RULES: Dict[str, str] = {
    "missing": "required",
    "int_type": "integer",
    "int_parsing": "integer",
    "int_from_float": "integer",
    "greater_than_equal": "min",
    "greater_than": "min",
    "less_than_equal": "max",
    "less_than": "max",
    "bool_type": "boolean",
    "bool_parsing": "boolean",
    "string_type": "string",
    "string_too_short": "length",
    "string_too_long": "length",
    "datetime_type": "date",
    "datetime_parsing": "date",
    "datetime_from_date_parsing": "date",
}

# FastAPI prefixes error locations with where the value came from
_LOCATION_PREFIXES = {"body", "query", "path", "header"}

_NO_VALUE = object()


@dataclass(frozen=True)
class FieldViolation:
    field: str
    rule: str
    message: str
    value: Any = _NO_VALUE

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"msg": self.message, "param": self.field, "rule": self.rule}
        if self.value is not _NO_VALUE:
            out["value"] = self.value
        return out


@dataclass
class ValidationOutcome(Generic[M]):
    value: Optional[M] = None
    violations: List[FieldViolation] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.violations

    def unwrap(self) -> M:
        if self.violations:
            raise RequestValidationFailed(self.violations)
        assert self.value is not None
        return self.value


def _field_name(loc: Iterable[Any]) -> str:
    parts = [str(p) for p in loc]
    if len(parts) > 1 and parts[0] in _LOCATION_PREFIXES:
        parts = parts[1:]
    return ".".join(parts) or "input"


def violations_from_errors(errors: Iterable[Mapping[str, Any]]) -> List[FieldViolation]:
    """Converts pydantic/FastAPI error dicts into `FieldViolation`s."""
    violations: List[FieldViolation] = []
    for err in errors:
        err_type = str(err.get("type", ""))
        name = _field_name(err.get("loc", ()))
        rule = _RULES.get(err_type, "type")
        message = f"{name}: {err.get('msg', 'invalid value')}"
        if err_type == "missing":
            violations.append(FieldViolation(field=name, rule=rule, message=message))
        else:
            violations.append(FieldViolation(field=name, rule=rule, message=message, value=err.get("input")))
    return violations


def validate(model: Type[M], data: Optional[Mapping[str, Any]]) -> ValidationOutcome[M]:
    try:
        parsed = model.model_validate(dict(data or {}))
    except ValidationError as exc:
        violations = violations_from_errors(exc.errors(include_url=False))
        log.debug("Validation of %s failed: %s", model.__name__, [v.field for v in violations])
        return ValidationOutcome(violations=violations)
    return ValidationOutcome(value=parsed)


class IdParam(BaseModel):
    """Positive integer `id` taken from a path segment."""

    id: int = Field(..., ge=MIN_ID, le=MAX_ID, description="Record identifier", examples=[1])


def validate_id_param(data: Optional[Mapping[str, Any]]) -> ValidationOutcome[IdParam]:
    return validate(IdParam, data)


# --- Named validators for the resource DTOs ---

def validate_badge_query(data: Optional[Mapping[str, Any]]) -> ValidationOutcome[BadgeQuery]:
    return validate(BadgeQuery, data)


def validate_update_user_badge(data: Optional[Mapping[str, Any]]) -> ValidationOutcome[UpdateUserBadge]:
    return validate(UpdateUserBadge, data)


def validate_user_badge_query(data: Optional[Mapping[str, Any]]) -> ValidationOutcome[UserBadgeQuery]:
    return validate(UserBadgeQuery, data)


def validate_user_level_query(data: Optional[Mapping[str, Any]]) -> ValidationOutcome[UserLevelQuery]:
    return validate(UserLevelQuery, data)


def validate_user_level_id(data: Optional[Mapping[str, Any]]) -> ValidationOutcome[UserLevelIdParam]:
    return validate(UserLevelIdParam, data)
