import logging
from typing import Optional, List
from sqlalchemy.ext.asyncio import AsyncSession
import uuid

from app.db.repositories.contact_repository import ContactRepository
from app.domains.contact.entities import ContactSubmission, ContactStatus
from app.domains.contact.schemas import ContactCreate

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("name", "email", "phone_number", "country", "message")


class ContactService:
    """Сервис заявок с контактной формы"""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.contact_repository = ContactRepository(session)

    async def submit(self, data: ContactCreate) -> ContactSubmission:
        """Сохранение заявки со статусом NEW"""
        if any(not (getattr(data, field) or "").strip() for field in REQUIRED_FIELDS):
            raise ValueError("Missing required fields")

        submission = ContactSubmission.create_submission(
            name=data.name,
            email=data.email,
            phone_number=data.phone_number,
            company_name=data.company_name or None,
            country=data.country,
            services=data.services if isinstance(data.services, list) else [],
            message=data.message
        )

        created = await self.contact_repository.create(submission)
        logger.info(f"Contact submission {created.uuid} received")
        return created

    async def list_submissions(self, limit: int = 100, offset: int = 0) -> List[ContactSubmission]:
        return await self.contact_repository.get_all(limit, offset)

    async def change_status(self, submission_uuid: uuid.UUID, status: Optional[str]) -> ContactSubmission:
        """Смена статуса заявки"""
        try:
            new_status = ContactStatus(status)
        except ValueError:
            raise ValueError("Invalid status value")

        submission = await self.contact_repository.get_by_uuid(submission_uuid)
        if not submission:
            raise LookupError("Contact submission not found")

        submission.change_status(new_status)
        updated = await self.contact_repository.update_status(submission)
        if not updated:
            raise LookupError("Contact submission not found")

        return updated
