"""Contacts resource — field rules for contacts and the service dependency."""

from fastapi import Depends

from contacts_api.core.validation import check_string_fields
from contacts_api.infrastructure.database import DatabaseSessionManager, get_store
from contacts_api.models.contact import Contact
from contacts_api.schemas.contact import ContactResponse
from contacts_api.services.crud import CrudService, ResourceDefinition

CONTACT_FIELDS = ("name", "phone", "email", "address", "notes")

contact_resource = ResourceDefinition(
    name="contact",
    plural="contacts",
    model=Contact,
    schema=ContactResponse,
    required_fields=("name", "phone"),
    writable_fields=CONTACT_FIELDS,
    # All contact columns are text; reject numbers, lists, objects.
    field_checks=(check_string_fields(CONTACT_FIELDS),),
)


def get_contact_service(
    store: DatabaseSessionManager = Depends(get_store),
) -> CrudService:
    return CrudService(store, contact_resource)
