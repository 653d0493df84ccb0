from app.domains.contact.entities import ContactSubmission, ContactStatus
from app.domains.contact.schemas import (
    ContactCreate, ContactCreated, ContactStatusUpdate, ContactResponse
)

__all__ = [
    "ContactSubmission", "ContactStatus",
    "ContactCreate", "ContactCreated", "ContactStatusUpdate", "ContactResponse"
]
