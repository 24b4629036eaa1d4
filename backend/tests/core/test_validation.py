"""Input Validation — tests for sanitization and required-field checks.

Tests cover:
    - sanitize_value strips angle brackets, then trims
    - Whitespace-only and bracket-only strings become empty and count as missing
    - check_required_fields names the first missing field in declared order
    - Non-mapping payloads get the generic message
    - No type coercion in the required check; check_string_fields adds type rules
"""

from contacts_api.core.errors import ErrorCode, ValidationFailure
from contacts_api.core.validation import (
    GENERIC_MISSING_MESSAGE,
    check_required_fields,
    check_string_fields,
    is_missing,
    sanitize_payload,
    sanitize_value,
    validate_payload,
)

REQUIRED = ("name", "phone")


# ─── sanitize ────────────────────────────────────────────────────

def test_sanitize_strips_brackets_then_trims():
    assert sanitize_value("  <b>Al</b>ice  ") == "bAl/bice"


def test_sanitize_whitespace_only_becomes_empty():
    assert sanitize_value("   ") == ""


def test_sanitize_bracket_only_becomes_empty():
    assert sanitize_value(" <> ") == ""


def test_sanitize_leaves_non_strings_alone():
    assert sanitize_value(42) == 42
    assert sanitize_value(None) is None
    assert sanitize_value(["<a>"]) == ["<a>"]


def test_sanitize_payload_applies_to_every_value():
    clean = sanitize_payload({"name": " <i>Bob</i> ", "phone": "555"})
    assert clean == {"name": "iBob/i", "phone": "555"}


# ─── check_required_fields ───────────────────────────────────────

def test_all_required_present_returns_none():
    assert check_required_fields(REQUIRED, {"name": "Alice", "phone": "555-0100"}) is None


def test_absent_field_is_named():
    failure = check_required_fields(REQUIRED, {"name": "Alice"})
    assert isinstance(failure, ValidationFailure)
    assert failure.code == ErrorCode.VALIDATION_ERROR
    assert failure.message == "phone is required"
    assert failure.field == "phone"


def test_first_missing_field_wins():
    failure = check_required_fields(REQUIRED, {})
    assert failure.message == "name is required"


def test_null_and_empty_are_missing():
    assert check_required_fields(REQUIRED, {"name": None, "phone": "1"}).field == "name"
    assert check_required_fields(REQUIRED, {"name": "A", "phone": ""}).field == "phone"


def test_whitespace_only_is_missing_even_unsanitized():
    failure = check_required_fields(REQUIRED, {"name": "   ", "phone": "1"})
    assert failure.field == "name"


def test_whitespace_only_is_missing_after_sanitization():
    clean = sanitize_payload({"name": "   ", "phone": "555"})
    assert check_required_fields(REQUIRED, clean).message == "name is required"


def test_non_mapping_payload_gets_generic_message():
    for payload in (None, [], "name=Alice", 3):
        failure = check_required_fields(REQUIRED, payload)
        assert failure.message == GENERIC_MISSING_MESSAGE
        assert failure.field is None


def test_wrong_type_is_not_a_required_field_concern():
    assert check_required_fields(REQUIRED, {"name": 123, "phone": 0}) is None


def test_is_missing():
    assert is_missing(None)
    assert is_missing("")
    assert is_missing(" \t")
    assert not is_missing(0)
    assert not is_missing(False)
    assert not is_missing("x")


# ─── extra checks ────────────────────────────────────────────────

def test_string_check_rejects_numbers():
    check = check_string_fields(("name", "phone"))
    failure = check({"name": "Alice", "phone": 5550100})
    assert failure.message == "phone must be a string"


def test_string_check_ignores_absent_and_null():
    check = check_string_fields(("name", "email"))
    assert check({"name": "Alice", "email": None}) is None


def test_validate_payload_runs_required_check_first():
    check = check_string_fields(REQUIRED)
    failure = validate_payload(REQUIRED, {"name": 5}, [check])
    assert failure.message == "phone is required"


def test_validate_payload_runs_extra_checks():
    check = check_string_fields(REQUIRED)
    failure = validate_payload(REQUIRED, {"name": 5, "phone": "1"}, [check])
    assert failure.message == "name must be a string"


def test_validate_payload_success():
    assert validate_payload(REQUIRED, {"name": "A", "phone": "1"}) is None
