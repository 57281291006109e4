from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


class ContactMessage(BaseModel):
    """비로그인 사용자도 보낼 수 있는 고객지원 문의."""

    id: str | None = None
    name: str
    email: str
    subject: str
    message: str
    created_at: datetime
    updated_at: datetime
