from __future__ import annotations

from pydantic import BaseModel, EmailStr, Field

from common.models.user import UserProfile
from common.types.datetime import UtcDateTime

from ...models.badge import BadgeProgress
from ...models.sustainability import SustainabilitySummary


class RegisterRequest(BaseModel):
    username: str = Field(min_length=1)
    email: EmailStr
    password: str
    name: str
    location: str
    bio: str | None = None
    profile_picture: str | None = None


class LoginRequest(BaseModel):
    username: str = Field(description="username 또는 email")
    password: str


class UserProfileResponse(BaseModel):
    id: str
    username: str
    email: str
    name: str
    location: str
    bio: str | None
    profile_picture: str | None
    role: str
    toys_shared: int
    successful_exchanges: int
    sustainability_score: int
    current_badge: str
    created_at: UtcDateTime
    updated_at: UtcDateTime

    @classmethod
    def from_domain(cls, user: UserProfile) -> "UserProfileResponse":
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


class AuthResponse(BaseModel):
    """로그인/회원가입 응답. 쿠키를 쓰지 않는 클라이언트는 token 을 Bearer 로 보낸다."""

    user: UserProfileResponse
    token: str


class UserProfileUpdateRequest(BaseModel):
    name: str | None = None
    email: EmailStr | None = None
    username: str | None = None
    location: str | None = None
    bio: str | None = None
    profile_picture: str | None = None


class ContributionRequest(BaseModel):
    toys_shared: int = Field(default=0, ge=0)
    successful_exchanges: int = Field(default=0, ge=0)


class SustainabilityResponse(BaseModel):
    user_id: str
    score: int
    toys_shared: int
    successful_exchanges: int
    current_badge: str
    badge_icon: str
    next_badge: str | None
    progress_percent: float
    points_to_next: int
    is_terminal: bool

    @classmethod
    def from_domain(cls, summary: SustainabilitySummary) -> "SustainabilityResponse":
        progress: BadgeProgress = summary.badge
        return cls(
            user_id=summary.user_id,
            score=summary.score,
            toys_shared=summary.toys_shared,
            successful_exchanges=summary.successful_exchanges,
            current_badge=progress.current.name,
            badge_icon=progress.current.icon,
            next_badge=progress.next.name if progress.next else None,
            progress_percent=round(progress.progress_percent, 2),
            points_to_next=progress.points_to_next,
            is_terminal=progress.is_terminal,
        )
