import json
from datetime import datetime
from typing import Optional, List
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, func
import uuid

from app.db.base import as_utc
from app.db.models.contact import ContactSubmission as ContactModel
from app.domains.contact.entities import ContactSubmission, ContactStatus


class ContactRepository:
    """Репозиторий заявок с контактной формы"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, submission: ContactSubmission) -> ContactSubmission:
        """Сохранение новой заявки"""
        db_submission = ContactModel(
            uuid=submission.uuid,
            name=submission.name,
            email=submission.email,
            phone_number=submission.phone_number,
            company_name=submission.company_name,
            country=submission.country,
            services=json.dumps(submission.services),
            message=submission.message,
            status=submission.status,
            created_at=submission.created_at,
            updated_at=submission.updated_at
        )

        self.session.add(db_submission)
        await self.session.commit()
        await self.session.refresh(db_submission)
        return self._to_domain(db_submission)

    async def get_by_uuid(self, submission_uuid: uuid.UUID) -> Optional[ContactSubmission]:
        result = await self.session.execute(
            select(ContactModel).where(ContactModel.uuid == submission_uuid)
            .execution_options(populate_existing=True)
        )
        db_submission = result.scalar_one_or_none()
        return self._to_domain(db_submission) if db_submission else None

    async def get_all(
        self,
        limit: int = 100,
        offset: int = 0,
        status: Optional[ContactStatus] = None
    ) -> List[ContactSubmission]:
        """Заявки, новые сверху"""
        query = select(ContactModel)
        if status is not None:
            query = query.where(ContactModel.status == status)

        result = await self.session.execute(
            query
            .order_by(ContactModel.created_at.desc())
            .offset(offset)
            .limit(limit)
        )
        return [self._to_domain(s) for s in result.scalars().all()]

    async def update_status(self, submission: ContactSubmission) -> Optional[ContactSubmission]:
        """Обновление статуса заявки"""
        stmt = (
            update(ContactModel)
            .where(ContactModel.uuid == submission.uuid)
            .values(status=submission.status, updated_at=submission.updated_at)
        )

        result = await self.session.execute(stmt)
        await self.session.commit()

        if result.rowcount == 0:
            return None

        return await self.get_by_uuid(submission.uuid)

    async def count(self, status: Optional[ContactStatus] = None, since: Optional[datetime] = None) -> int:
        query = select(func.count(ContactModel.uuid))
        if status is not None:
            query = query.where(ContactModel.status == status)
        if since is not None:
            query = query.where(ContactModel.created_at >= since)

        result = await self.session.execute(query)
        return result.scalar()

    def _to_domain(self, db_submission: ContactModel) -> ContactSubmission:
        """Преобразование модели БД в доменную сущность"""
        return ContactSubmission(
            uuid=db_submission.uuid,
            name=db_submission.name,
            email=db_submission.email,
            phone_number=db_submission.phone_number,
            company_name=db_submission.company_name,
            country=db_submission.country,
            services=json.loads(db_submission.services) if db_submission.services else [],
            message=db_submission.message,
            status=db_submission.status,
            created_at=as_utc(db_submission.created_at),
            updated_at=as_utc(db_submission.updated_at)
        )
