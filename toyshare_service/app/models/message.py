from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


class Message(BaseModel):
    """특정 장난감에 대해 두 유저가 주고받는 메시지."""

    id: str | None = None
    sender_id: str
    receiver_id: str
    toy_id: str
    content: str
    read: bool = False
    created_at: datetime
    updated_at: datetime
