import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Optional, List


class ContactStatus(str, Enum):
    """Статусы обработки заявки"""
    NEW = "NEW"
    READ = "READ"
    REPLIED = "REPLIED"
    ARCHIVED = "ARCHIVED"


class ContactSubmission:
    """Заявка с контактной формы сайта"""

    def __init__(
        self,
        uuid: uuid.UUID,
        name: str,
        email: str,
        phone_number: str,
        country: str,
        message: str,
        company_name: Optional[str] = None,
        services: Optional[List[str]] = None,
        status: ContactStatus = ContactStatus.NEW,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None
    ):
        self.uuid = uuid
        self.name = name
        self.email = email
        self.phone_number = phone_number
        self.country = country
        self.message = message
        self.company_name = company_name
        self.services = list(services or [])
        self.status = ContactStatus(status)
        self.created_at = created_at or datetime.now(timezone.utc)
        self.updated_at = updated_at or datetime.now(timezone.utc)

    def change_status(self, status: ContactStatus) -> None:
        self.status = ContactStatus(status)
        self.updated_at = datetime.now(timezone.utc)

    @classmethod
    def create_submission(cls, **fields) -> "ContactSubmission":
        """Новая заявка всегда в статусе NEW"""
        return cls(uuid=uuid.uuid4(), status=ContactStatus.NEW, **fields)

    def __repr__(self) -> str:
        return f"ContactSubmission(uuid={self.uuid}, email={self.email}, status={self.status.value})"
