from __future__ import annotations

from common.mongo.types import BaseDocument, build_document_data_from_domain
from ...models.contact_message import ContactMessage


class ContactMessageDocument(BaseDocument):
    """MongoDB contact_messages 컬렉션 도큐먼트 모델."""

    name: str
    email: str
    subject: str
    message: str

    @classmethod
    def from_domain(cls, contact: ContactMessage) -> "ContactMessageDocument":
        return cls.model_validate(build_document_data_from_domain(contact))

    def to_domain(self) -> ContactMessage:
        return ContactMessage(
            id=self.str_id,
            name=self.name,
            email=self.email,
            subject=self.subject,
            message=self.message,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )
