from __future__ import annotations

from common.mongo.types import BaseDocument, MongoDateTime, build_document_data_from_domain
from ...models.auth_session import AuthSession


class AuthSessionDocument(BaseDocument):
    """MongoDB sessions 컬렉션 도큐먼트 모델. expires_at 에 TTL 인덱스가 걸려 있다."""

    token: str
    user_id: str
    expires_at: MongoDateTime

    @classmethod
    def from_domain(cls, session: AuthSession) -> "AuthSessionDocument":
        return cls.model_validate(build_document_data_from_domain(session))

    def to_domain(self) -> AuthSession:
        return AuthSession(
            token=self.token,
            user_id=self.user_id,
            expires_at=self.expires_at,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )
