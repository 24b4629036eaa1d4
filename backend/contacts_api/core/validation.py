"""Input Validation — sanitization and required-field checks run before any persistence.

Invariants:
    - All functions are PURE: no IO, no async, no DB
    - Return ValidationFailure on violation, None on success
    - Sanitization runs first, so whitespace-only strings are classified as missing
    - No type coercion; type rules are added per resource as FieldChecks
"""

from collections.abc import Callable, Iterable, Mapping, Sequence
from typing import Any

from contacts_api.core.errors import ValidationFailure

GENERIC_MISSING_MESSAGE = "required field missing"

FieldCheck = Callable[[Mapping[str, Any]], ValidationFailure | None]


def sanitize_value(value: Any) -> Any:
    """Strip angle brackets, then trim. Non-strings pass through unchanged."""
    if isinstance(value, str):
        return value.replace("<", "").replace(">", "").strip()
    return value


def sanitize_payload(payload: Mapping[str, Any]) -> dict[str, Any]:
    return {key: sanitize_value(value) for key, value in payload.items()}


def is_missing(value: Any) -> bool:
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


def check_required_fields(
    required: Sequence[str], payload: Any,
) -> ValidationFailure | None:
    """First required field that is absent, null, empty or blank wins."""
    if not isinstance(payload, Mapping):
        return ValidationFailure(GENERIC_MISSING_MESSAGE)
    for name in required:
        if name not in payload or is_missing(payload[name]):
            return ValidationFailure(f"{name} is required", field=name)
    return None


def check_string_fields(fields: Iterable[str]) -> FieldCheck:
    """Build a check rejecting present, non-null values that are not strings."""
    names = tuple(fields)

    def check(payload: Mapping[str, Any]) -> ValidationFailure | None:
        for name in names:
            value = payload.get(name)
            if value is not None and not isinstance(value, str):
                return ValidationFailure(f"{name} must be a string", field=name)
        return None

    return check


def validate_payload(
    required: Sequence[str],
    payload: Any,
    checks: Iterable[FieldCheck] = (),
) -> ValidationFailure | None:
    """Chain the required-field check and any resource checks. First error wins."""
    failure = check_required_fields(required, payload)
    if failure is not None:
        return failure
    for check in checks:
        failure = check(payload)
        if failure is not None:
            return failure
    return None
