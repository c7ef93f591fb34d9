# app/api/deps.py

"""
Path and query parameters shared by the REST routers.

Raw strings are taken from the request and run through the validation
functions, so a bad id produces the same 400 body as a bad JSON field.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Dict, Optional

from fastapi import Path, Query

from app.core.badges.schemas import BadgeQuery
from app.core.errors import RequestValidationFailed
from app.core.user_badges.schemas import UserBadgeQuery
from app.core.user_levels.schemas import UserLevelQuery
from app.core.validation import (
    validate_badge_query,
    validate_id_param,
    validate_user_badge_query,
    validate_user_level_id,
    validate_user_level_query,
)


def _present(**params: Optional[str]) -> Dict[str, str]:
    return {key: value for key, value in params.items() if value is not None}


def _positive_int(name: str, raw: str) -> int:
    outcome = validate_id_param({"id": raw})
    if not outcome.ok:
        raise RequestValidationFailed([
            replace(v, field=name, message=f"{name}:{v.message.split(':', 1)[-1]}")
            for v in outcome.violations
        ])
    return outcome.unwrap().id


def id_param(id: str = Path(..., description="Record identifier (positive integer)")) -> int:
    return validate_id_param({"id": id}).unwrap().id


def user_level_id_param(id: str = Path(..., description="User level identifier")) -> int:
    return validate_user_level_id({"id": id}).unwrap().id


def user_id_param(user_id: str = Path(..., description="User identifier")) -> int:
    return _positive_int("user_id", user_id)


def level_id_param(level_id: str = Path(..., description="Level identifier")) -> int:
    return _positive_int("level_id", level_id)


def user_badge_query(
    user_id: Optional[str] = Query(None, description="Filter by user id"),
    badge_id: Optional[str] = Query(None, description="Filter by badge id"),
) -> UserBadgeQuery:
    return validate_user_badge_query(_present(user_id=user_id, badge_id=badge_id)).unwrap()


def user_level_query(
    user_id: Optional[str] = Query(None, description="Filter by user id"),
    level_id: Optional[str] = Query(None, description="Filter by level id"),
) -> UserLevelQuery:
    return validate_user_level_query(_present(user_id=user_id, level_id=level_id)).unwrap()


def badge_query(
    level_id: Optional[str] = Query(None, description="Filter by level id"),
) -> BadgeQuery:
    return validate_badge_query(_present(level_id=level_id)).unwrap()
