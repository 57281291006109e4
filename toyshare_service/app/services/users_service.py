from __future__ import annotations

import logging

from fastapi import Depends

from common.models.user import User, UserProfile, UserProfileUpdate

from .dependencies import get_user_repository
from .sustainability_service import SustainabilityService, get_sustainability_service
from ..exceptions import (
    ConflictError,
    InvalidRequestError,
    NotFoundError,
    PermissionDeniedError,
)
from ..models.sustainability import SustainabilitySummary
from ..repositories.interfaces import UserRepositoryInterface


logger = logging.getLogger(__name__)


class UsersService:
    """프로필 조회/수정 비즈니스 로직.

    - Repository(UserRepositoryInterface)에만 의존하고, Mongo 세부 구현은 알지 않는다.
    - 비밀번호 해시는 UserProfile 로 변환하면서 제거된다.
    """

    def __init__(
        self,
        user_repo: UserRepositoryInterface,
        sustainability: SustainabilityService,
    ) -> None:
        self._user_repo = user_repo
        self._sustainability = sustainability

    def get_user(self, user_id: str) -> User:
        user = self._user_repo.find_by_id(user_id)
        if user is None:
            raise NotFoundError("user not found")
        return user

    def get_profile(self, user_id: str) -> UserProfile:
        return UserProfile.from_user(self.get_user(user_id))

    def update_profile(
        self, user_id: str, actor: User, update: UserProfileUpdate
    ) -> UserProfile:
        if actor.id != user_id:
            raise PermissionDeniedError("you can only update your own profile")

        fields = update.changed_fields()
        if not fields:
            raise InvalidRequestError("no fields to update")

        if "username" in fields:
            fields["username"] = fields["username"].strip()
            existing = self._user_repo.find_by_username(fields["username"])
            if existing is not None and existing.id != user_id:
                raise ConflictError("username already exists")
        if "email" in fields:
            fields["email"] = fields["email"].strip().lower()
            existing = self._user_repo.find_by_email(fields["email"])
            if existing is not None and existing.id != user_id:
                raise ConflictError("email already in use")

        updated = self._user_repo.update_profile(user_id, fields)
        if updated is None:
            raise NotFoundError("user not found")

        logger.info("profile updated fields=%s", sorted(fields), extra={"user_id": user_id})
        return UserProfile.from_user(updated)

    def get_sustainability(self, user_id: str) -> SustainabilitySummary:
        return self._sustainability.summary(user_id)

    def add_contributions(
        self,
        user_id: str,
        actor: User,
        toys_shared: int,
        exchanges: int,
    ) -> SustainabilitySummary:
        """본인 또는 관리자만 기여 카운터를 올릴 수 있다."""

        if actor.id != user_id and not actor.is_admin:
            raise PermissionDeniedError("not allowed to update this user's sustainability")

        self._sustainability.record_contribution(
            user_id, toys_shared=toys_shared, exchanges=exchanges
        )
        return self._sustainability.summary(user_id)


def get_users_service(
    user_repo: UserRepositoryInterface = Depends(get_user_repository),
    sustainability: SustainabilityService = Depends(get_sustainability_service),
) -> UsersService:
    """FastAPI DI용 UsersService 팩토리."""

    return UsersService(user_repo=user_repo, sustainability=sustainability)
