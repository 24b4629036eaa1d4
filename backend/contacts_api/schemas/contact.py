"""Contact Schemas — public representation of a stored contact.

Invariants:
    - Unset optional fields are dropped on serialization, so a record reads
      back with exactly the fields it was created with plus its id
"""

from pydantic import BaseModel, ConfigDict


class ContactResponse(BaseModel):
    """Transient copy of a contact row sent to the client."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    phone: str
    email: str | None = None
    address: str | None = None
    notes: str | None = None
