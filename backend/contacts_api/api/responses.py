"""Envelope rendering — turns an Outcome into the HTTP response."""

from fastapi.responses import JSONResponse

from contacts_api.core.envelope import Outcome


def render(outcome: Outcome) -> JSONResponse:
    return JSONResponse(
        status_code=outcome.status_code,
        content=outcome.envelope.to_response(),
    )
