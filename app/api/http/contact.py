from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List
import uuid

from app.core.auth import require_roles
from app.core.db import get_db
from app.domains.contact.entities import ContactSubmission
from app.domains.contact.schemas import (
    ContactCreate, ContactCreated, ContactStatusUpdate, ContactResponse
)
from app.domains.contact.services import ContactService
from app.domains.identity.entities import User, CONTENT_ROLES

router = APIRouter(prefix="/api/contact", tags=["contact"])


def _to_response(submission: ContactSubmission) -> ContactResponse:
    return ContactResponse(
        id=submission.uuid,
        name=submission.name,
        email=submission.email,
        phone_number=submission.phone_number,
        company_name=submission.company_name,
        country=submission.country,
        services=submission.services,
        message=submission.message,
        status=submission.status,
        created_at=submission.created_at,
        updated_at=submission.updated_at
    )


@router.post("", response_model=ContactCreated, status_code=status.HTTP_201_CREATED)
async def submit_contact_form(
    data: ContactCreate,
    db: AsyncSession = Depends(get_db)
):
    """Заявка с контактной формы сайта"""
    contact_service = ContactService(db)

    try:
        submission = await contact_service.submit(data)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    return ContactCreated(id=submission.uuid)


@router.get("", response_model=List[ContactResponse])
async def list_contact_submissions(
    page: int = Query(1, ge=1),
    per_page: int = Query(50, ge=1, le=100),
    current_user: User = Depends(require_roles(*CONTENT_ROLES)),
    db: AsyncSession = Depends(get_db)
):
    """Заявки для дашборда, новые сверху"""
    contact_service = ContactService(db)

    offset = (page - 1) * per_page
    submissions = await contact_service.list_submissions(limit=per_page, offset=offset)

    return [_to_response(s) for s in submissions]


@router.patch("/{submission_uuid}", response_model=ContactResponse)
async def update_contact_status(
    submission_uuid: uuid.UUID,
    status_data: ContactStatusUpdate,
    current_user: User = Depends(require_roles(*CONTENT_ROLES)),
    db: AsyncSession = Depends(get_db)
):
    """Смена статуса заявки"""
    contact_service = ContactService(db)

    try:
        submission = await contact_service.change_status(submission_uuid, status_data.status)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except LookupError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

    return _to_response(submission)
