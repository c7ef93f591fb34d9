import pytest

from app.core.errors import RequestValidationFailed
from app.core.validation import (
    validate_id_param,
    validate_update_user_badge,
    validate_user_level_id,
    validate_user_level_query,
    violations_from_errors,
)


# --- update-user-badge body ---

def test_update_user_badge_minimal_body_passes():
    outcome = validate_update_user_badge({"user_id": 1, "badge_id": 2})
    assert outcome.ok
    assert outcome.value.user_id == 1
    assert outcome.value.badge_id == 2
    assert outcome.value.earned_at is None


def test_update_user_badge_zero_user_id_fails_on_user_id():
    outcome = validate_update_user_badge({"user_id": 0, "badge_id": 2})
    assert not outcome.ok
    assert [v.field for v in outcome.violations] == ["user_id"]
    assert outcome.violations[0].rule == "min"
    assert outcome.violations[0].value == 0


def test_update_user_badge_with_earned_at_passes():
    outcome = validate_update_user_badge({"user_id": 1, "badge_id": 2, "earned_at": "2024-01-01"})
    assert outcome.ok


def test_update_user_badge_missing_badge_id_is_required():
    outcome = validate_update_user_badge({"user_id": 1})
    assert not outcome.ok
    violation = outcome.violations[0]
    assert violation.field == "badge_id"
    assert violation.rule == "required"
    assert "value" not in violation.to_dict()


def test_update_user_badge_numeric_strings_are_coerced():
    outcome = validate_update_user_badge({"user_id": "3", "badge_id": "4"})
    assert outcome.ok
    assert (outcome.value.user_id, outcome.value.badge_id) == (3, 4)


# --- user-level query ---

def test_user_level_query_without_filters_passes():
    outcome = validate_user_level_query({})
    assert outcome.ok
    assert outcome.value.user_id is None
    assert outcome.value.level_id is None


def test_user_level_query_none_input_passes():
    assert validate_user_level_query(None).ok


def test_user_level_query_with_user_id_passes():
    outcome = validate_user_level_query({"user_id": 1})
    assert outcome.ok
    assert outcome.value.user_id == 1


def test_user_level_query_negative_user_id_fails():
    outcome = validate_user_level_query({"user_id": -1})
    assert not outcome.ok
    assert outcome.violations[0].field == "user_id"


# --- identifiers ---

def test_user_level_id_one_passes():
    assert validate_user_level_id({"id": 1}).value.id == 1


def test_user_level_id_zero_fails():
    outcome = validate_user_level_id({"id": 0})
    assert not outcome.ok
    assert outcome.violations[0].rule == "min"


def test_user_level_id_non_numeric_fails():
    outcome = validate_user_level_id({"id": "abc"})
    assert not outcome.ok
    assert outcome.violations[0].field == "id"
    assert outcome.violations[0].rule == "integer"


def test_id_param_accepts_numeric_path_string():
    assert validate_id_param({"id": "12"}).unwrap().id == 12


# --- outcome helpers ---

def test_unwrap_raises_with_violations():
    outcome = validate_update_user_badge({"user_id": 0})
    with pytest.raises(RequestValidationFailed) as exc_info:
        outcome.unwrap()
    body = exc_info.value.to_dict()
    assert {e["param"] for e in body["errors"]} == {"user_id", "badge_id"}
    assert exc_info.value.status_code == 400


def test_violations_from_errors_strips_request_location():
    violations = violations_from_errors([
        {"type": "missing", "loc": ("body", "name"), "msg": "Field required", "input": {}},
        {"type": "int_parsing", "loc": ("query", "user_id"), "msg": "bad int", "input": "x"},
    ])
    assert [v.field for v in violations] == ["name", "user_id"]
    assert violations[0].to_dict() == {"msg": "name: Field required", "param": "name", "rule": "required"}
    assert violations[1].to_dict()["value"] == "x"


def test_ids_above_32_bit_range_fail_with_max_rule():
    outcome = validate_user_level_query({"user_id": 2**31})
    assert not outcome.ok
    assert outcome.violations[0].rule == "max"
    assert validate_id_param({"id": 2**31 - 1}).ok
    assert validate_update_user_badge({"user_id": 1, "badge_id": 2**63}).violations[0].field == "badge_id"
