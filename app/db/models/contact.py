from sqlalchemy import Column, String, Text, Enum

from app.db.base import BaseModel
from app.domains.contact.entities import ContactStatus


class ContactSubmission(BaseModel):
    __tablename__ = "contact_submissions"
    
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False)
    phone_number = Column(String(64), nullable=False)
    company_name = Column(String(255), nullable=True)
    country = Column(String(128), nullable=False)
    services = Column(Text, default="[]")  # JSON-массив строк
    message = Column(Text, nullable=False)
    status = Column(Enum(ContactStatus), nullable=False, default=ContactStatus.NEW)
