"""Contact Routes — HTTP surface for the contacts resource.

Invariants:
    - Handlers only extract path/query/body values and delegate to CrudService
    - Bodies are taken as raw JSON values so the service owns validation and
      can name the first missing field
    - limit is clamped to settings.list_max_limit
    - Ids and offsets outside the store's integer range are rejected as 400
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, Path, Query, Request, status
from fastapi.responses import JSONResponse

from contacts_api.api.responses import render
from contacts_api.config import Settings
from contacts_api.core.domain_types import MAX_RECORD_ID
from contacts_api.services.contacts import get_contact_service
from contacts_api.services.crud import CrudService

router = APIRouter(prefix="/api/contacts", tags=["contacts"])


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


@router.get("")
async def list_contacts(
    limit: int | None = Query(None, ge=1),
    offset: int = Query(0, ge=0, le=MAX_RECORD_ID),
    service: CrudService = Depends(get_contact_service),
    settings: Settings = Depends(get_app_settings),
) -> JSONResponse:
    """List contacts ordered by id."""
    limit = min(limit or settings.list_default_limit, settings.list_max_limit)
    return render(await service.list_records(limit=limit, offset=offset))


@router.get("/{contact_id}")
async def get_contact(
    contact_id: int = Path(ge=1, le=MAX_RECORD_ID),
    service: CrudService = Depends(get_contact_service),
) -> JSONResponse:
    return render(await service.get_record(contact_id))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_contact(
    payload: Any = Body(None),
    service: CrudService = Depends(get_contact_service),
) -> JSONResponse:
    """Create a contact. name and phone are required."""
    return render(await service.create_record(payload))


@router.post("/import", status_code=status.HTTP_201_CREATED)
async def import_contacts(
    items: Any = Body(None, embed=True),
    service: CrudService = Depends(get_contact_service),
) -> JSONResponse:
    """Insert many contacts atomically: every row or none."""
    return render(await service.import_records(items))


@router.put("/{contact_id}")
async def update_contact(
    contact_id: int = Path(ge=1, le=MAX_RECORD_ID),
    payload: Any = Body(None),
    service: CrudService = Depends(get_contact_service),
) -> JSONResponse:
    """Replace the named fields of a contact."""
    return render(await service.update_record(contact_id, payload))


@router.delete("/{contact_id}")
async def delete_contact(
    contact_id: int = Path(ge=1, le=MAX_RECORD_ID),
    service: CrudService = Depends(get_contact_service),
) -> JSONResponse:
    return render(await service.delete_record(contact_id))
