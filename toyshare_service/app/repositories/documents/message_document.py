from __future__ import annotations

from common.mongo.types import BaseDocument, build_document_data_from_domain
from ...models.message import Message


class MessageDocument(BaseDocument):
    """MongoDB messages 컬렉션 도큐먼트 모델."""

    sender_id: str
    receiver_id: str
    toy_id: str
    content: str
    read: bool = False

    @classmethod
    def from_domain(cls, message: Message) -> "MessageDocument":
        return cls.model_validate(build_document_data_from_domain(message))

    def to_domain(self) -> Message:
        return Message(
            id=self.str_id,
            sender_id=self.sender_id,
            receiver_id=self.receiver_id,
            toy_id=self.toy_id,
            content=self.content,
            read=self.read,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )
