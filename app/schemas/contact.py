"""Pydantic schemas for the contact-support form."""

from pydantic import EmailStr, Field

from app.schemas.common import CamelModel


class ContactRequest(CamelModel):
    name: str = Field(min_length=1, max_length=255)
    email: EmailStr
    subject: str = Field(min_length=1, max_length=500)
    message: str = Field(min_length=1, max_length=10000)
    category: str = Field(default="general", max_length=100)


class ContactResponse(CamelModel):
    message: str
    contact_id: int
