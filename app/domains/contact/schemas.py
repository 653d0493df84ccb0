from pydantic import BaseModel, Field, ConfigDict
from typing import Optional, List
import uuid
from datetime import datetime

from app.domains.contact.entities import ContactStatus


class ContactCreate(BaseModel):
    """Данные контактной формы; обязательность полей проверяет сервис"""
    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = None
    email: Optional[str] = None
    phone_number: Optional[str] = Field(default=None, alias="phoneNumber")
    company_name: Optional[str] = Field(default=None, alias="companyName")
    country: Optional[str] = None
    services: Optional[List[str]] = None
    message: Optional[str] = None


class ContactCreated(BaseModel):
    success: bool = True
    id: uuid.UUID


class ContactStatusUpdate(BaseModel):
    status: Optional[str] = None


class ContactResponse(BaseModel):
    """Заявка для дашборда"""
    model_config = ConfigDict(populate_by_name=True)

    id: uuid.UUID
    name: str
    email: str
    phone_number: str = Field(alias="phoneNumber")
    company_name: Optional[str] = Field(default=None, alias="companyName")
    country: str
    services: List[str]
    message: str
    status: ContactStatus
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")
