from __future__ import annotations

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, Field


DEFAULT_BADGE_NAME = "Newcomer"


class UserRole(StrEnum):
    USER = "user"
    ADMIN = "admin"


class User(BaseModel):
    """유저 도메인 모델.

    - Mongo users 컬렉션과 1:1로 매핑되는 공용 모델이다.
    - username / email 은 각각 유니크하며, 로그인 식별자로 둘 다 사용할 수 있다.
    - sustainability_score / current_badge 는 toys_shared, successful_exchanges 로부터
      계산된 캐시 값이다. 직접 수정하지 않고 SustainabilityService 를 통해서만 갱신한다.
    """

    id: str | None = None
    username: str
    email: str
    name: str
    location: str
    bio: str | None = None
    profile_picture: str | None = None
    role: UserRole = UserRole.USER
    password_hash: str

    toys_shared: int = Field(default=0, ge=0)
    successful_exchanges: int = Field(default=0, ge=0)
    sustainability_score: int = Field(default=0, ge=0)
    current_badge: str = DEFAULT_BADGE_NAME

    created_at: datetime
    updated_at: datetime

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN


class UserProfile(BaseModel):
    """비밀번호 해시를 제외한 공개 프로필 모델."""

    id: str
    username: str
    email: str
    name: str
    location: str
    bio: str | None = None
    profile_picture: str | None = None
    role: UserRole
    toys_shared: int
    successful_exchanges: int
    sustainability_score: int
    current_badge: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_user(cls, user: User) -> "UserProfile":
        assert user.id is not None
        return cls(
            id=user.id,
            username=user.username,
            email=user.email,
            name=user.name,
            location=user.location,
            bio=user.bio,
            profile_picture=user.profile_picture,
            role=user.role,
            toys_shared=user.toys_shared,
            successful_exchanges=user.successful_exchanges,
            sustainability_score=user.sustainability_score,
            current_badge=user.current_badge,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


class UserRegistrationInput(BaseModel):
    """회원가입 시 서비스가 받는 입력. password 는 평문이며 저장 전에 해시한다."""

    username: str
    email: str
    password: str
    name: str
    location: str
    bio: str | None = None
    profile_picture: str | None = None


class UserProfileUpdate(BaseModel):
    """본인 프로필 수정 시 허용되는 필드 집합. None 인 필드는 변경하지 않는다."""

    name: str | None = None
    email: str | None = None
    username: str | None = None
    location: str | None = None
    bio: str | None = None
    profile_picture: str | None = None

    def changed_fields(self) -> dict[str, str]:
        return self.model_dump(exclude_none=True)
