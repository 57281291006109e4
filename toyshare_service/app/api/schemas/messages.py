from __future__ import annotations

from pydantic import BaseModel, Field

from common.types.datetime import UtcDateTime

from ...models.message import Message


class MessageCreateRequest(BaseModel):
    receiver_id: str
    toy_id: str
    content: str = Field(min_length=1)


class MessageItem(BaseModel):
    id: str
    sender_id: str
    receiver_id: str
    toy_id: str
    content: str
    read: bool
    created_at: UtcDateTime

    @classmethod
    def from_domain(cls, message: Message) -> "MessageItem":
        assert message.id is not None
        return cls(
            id=message.id,
            sender_id=message.sender_id,
            receiver_id=message.receiver_id,
            toy_id=message.toy_id,
            content=message.content,
            read=message.read,
            created_at=message.created_at,
        )


class UnreadCountResponse(BaseModel):
    count: int


class ConversationDeleteResponse(BaseModel):
    deleted: int
