from __future__ import annotations

from pydantic import BaseModel, EmailStr, Field

from common.types.datetime import UtcDateTime

from ...models.contact_message import ContactMessage


class ContactRequest(BaseModel):
    name: str = Field(min_length=1)
    email: EmailStr
    subject: str = Field(min_length=1)
    message: str = Field(min_length=1)


class ContactSubmitResponse(BaseModel):
    success: bool
    message: str
    id: str


class ContactMessageItem(BaseModel):
    id: str
    name: str
    email: str
    subject: str
    message: str
    created_at: UtcDateTime

    @classmethod
    def from_domain(cls, contact: ContactMessage) -> "ContactMessageItem":
        assert contact.id is not None
        return cls(
            id=contact.id,
            name=contact.name,
            email=contact.email,
            subject=contact.subject,
            message=contact.message,
            created_at=contact.created_at,
        )
