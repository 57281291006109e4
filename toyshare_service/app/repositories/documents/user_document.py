from __future__ import annotations

from common.models.user import User
from common.mongo.types import BaseDocument, build_document_data_from_domain


class UserDocument(BaseDocument):
    """MongoDB users 컬렉션 도큐먼트 모델."""

    username: str
    email: str
    name: str
    location: str
    bio: str | None = None
    profile_picture: str | None = None
    role: str
    password_hash: str
    toys_shared: int = 0
    successful_exchanges: int = 0
    sustainability_score: int = 0
    current_badge: str

    @classmethod
    def from_domain(cls, user: User) -> "UserDocument":
        return cls.model_validate(build_document_data_from_domain(user))

    def to_domain(self) -> User:
        return User(
            id=self.str_id,
            username=self.username,
            email=self.email,
            name=self.name,
            location=self.location,
            bio=self.bio,
            profile_picture=self.profile_picture,
            role=self.role,
            password_hash=self.password_hash,
            toys_shared=self.toys_shared,
            successful_exchanges=self.successful_exchanges,
            sustainability_score=self.sustainability_score,
            current_badge=self.current_badge,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )
