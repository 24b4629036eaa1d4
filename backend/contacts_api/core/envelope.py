"""Response Envelope — the fixed {code, msg, data} body returned by every endpoint.

Invariants:
    - code == 0 iff the operation succeeded (status 200 or 201)
    - msg is always a non-empty string
    - data is omitted from the serialized body when no payload was supplied
    - HTTP status is a pure, total function of ErrorCode (201 only for creates)
"""

from typing import Any, NamedTuple

from pydantic import BaseModel, ConfigDict, Field

from contacts_api.core.errors import ApiError, ErrorCode

HTTP_STATUS_BY_CODE: dict[ErrorCode, int] = {
    ErrorCode.SUCCESS: 200,
    ErrorCode.VALIDATION_ERROR: 400,
    ErrorCode.NOT_FOUND: 404,
    ErrorCode.DATABASE_ERROR: 500,
    ErrorCode.NETWORK_ERROR: 503,
}

# Marks "no payload" so an explicit None can still be sent as data.
_NO_DATA: Any = object()


class ResponseEnvelope(BaseModel):
    """Immutable response body."""
    model_config = ConfigDict(frozen=True)

    code: ErrorCode
    msg: str = Field(min_length=1)
    data: Any = None

    @property
    def ok(self) -> bool:
        return self.code == ErrorCode.SUCCESS

    @property
    def has_data(self) -> bool:
        return "data" in self.model_fields_set

    def to_response(self) -> dict[str, Any]:
        """JSON-ready dict; `data` key present only when a payload was given."""
        return self.model_dump(mode="json", exclude_unset=True)


class Outcome(NamedTuple):
    """Envelope plus the HTTP status it is sent with."""
    envelope: ResponseEnvelope
    status_code: int


def http_status_for(code: ErrorCode, *, created: bool = False) -> int:
    """Map an ErrorCode to its HTTP status."""
    code = ErrorCode(code)
    if code == ErrorCode.SUCCESS and created:
        return 201
    return HTTP_STATUS_BY_CODE[code]


def format_response(
    code: ErrorCode, msg: str, data: Any = _NO_DATA, *, created: bool = False,
) -> Outcome:
    """Build the envelope and pick its status. Pure."""
    fields: dict[str, Any] = {"code": ErrorCode(code), "msg": msg}
    if data is not _NO_DATA:
        fields["data"] = data
    return Outcome(ResponseEnvelope(**fields), http_status_for(code, created=created))


def success_response(msg: str, data: Any = _NO_DATA, *, created: bool = False) -> Outcome:
    return format_response(ErrorCode.SUCCESS, msg, data, created=created)


def error_response(exc: ApiError) -> Outcome:
    """Render an ApiError. Only the client-safe message and payload are used."""
    if exc.payload is None:
        return format_response(exc.code, exc.message)
    return format_response(exc.code, exc.message, exc.payload)
