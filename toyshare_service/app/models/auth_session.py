from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, field_validator, model_validator


class AuthSession(BaseModel):
    """쿠키/Bearer 토큰으로 식별되는 로그인 세션.

    - expires_at 이 지나면 TTL 인덱스가 도큐먼트를 삭제한다.
    - TTL 삭제는 즉시 일어나지 않으므로 조회 시점에도 만료 여부를 다시 확인한다.
    """

    token: str
    user_id: str
    expires_at: datetime
    created_at: datetime
    updated_at: datetime

    @field_validator("token", "user_id")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("must not be blank")
        return value

    @model_validator(mode="after")
    def _validate_expiry(self) -> "AuthSession":
        if self.expires_at <= self.created_at:
            raise ValueError("expires_at must be greater than created_at")
        return self

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at <= now
