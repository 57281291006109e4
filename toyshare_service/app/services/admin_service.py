from __future__ import annotations

import logging

from fastapi import Depends

from common.models.user import User, UserProfile

from .dependencies import (
    get_auth_session_repository,
    get_favorite_repository,
    get_toy_repository,
    get_user_repository,
)
from ..exceptions import InvalidRequestError, NotFoundError
from ..models.toy import ListToysFilter, Toy
from ..repositories.interfaces import (
    AuthSessionRepositoryInterface,
    FavoriteRepositoryInterface,
    ToyRepositoryInterface,
    UserRepositoryInterface,
)


logger = logging.getLogger(__name__)


class AdminService:
    """관리자 전용 조회/삭제 기능."""

    def __init__(
        self,
        user_repo: UserRepositoryInterface,
        toy_repo: ToyRepositoryInterface,
        favorite_repo: FavoriteRepositoryInterface,
        session_repo: AuthSessionRepositoryInterface,
    ) -> None:
        self._user_repo = user_repo
        self._toy_repo = toy_repo
        self._favorite_repo = favorite_repo
        self._session_repo = session_repo

    def list_users(self, page: int, page_size: int) -> tuple[list[UserProfile], int]:
        users, total = self._user_repo.list(page, page_size)
        return [UserProfile.from_user(u) for u in users], total

    def list_toys(self, page: int, page_size: int) -> tuple[list[Toy], int]:
        return self._toy_repo.list(ListToysFilter(page=page, page_size=page_size))

    def delete_toy(self, toy_id: str, admin: User) -> None:
        if not self._toy_repo.delete(toy_id):
            raise NotFoundError("toy not found")
        logger.info("toy deleted by admin", extra={"user_id": admin.id, "toy_id": toy_id})

    def delete_user(self, user_id: str, admin: User) -> None:
        """유저와 해당 유저의 찜/세션을 삭제한다. 관리자 본인은 삭제할 수 없다."""

        if user_id == admin.id:
            raise InvalidRequestError("you cannot delete your own account")
        if self._user_repo.find_by_id(user_id) is None:
            raise NotFoundError("user not found")

        # 찜/세션은 존재하지 않아도 delete_many 결과가 0 이므로 별도 체크는 하지 않는다.
        self._favorite_repo.delete_all_by_user(user_id)
        self._session_repo.delete_all_by_user(user_id)
        if not self._user_repo.delete(user_id):
            raise NotFoundError("user not found")
        logger.info("user deleted by admin target=%s", user_id, extra={"user_id": admin.id})


def get_admin_service(
    user_repo: UserRepositoryInterface = Depends(get_user_repository),
    toy_repo: ToyRepositoryInterface = Depends(get_toy_repository),
    favorite_repo: FavoriteRepositoryInterface = Depends(get_favorite_repository),
    session_repo: AuthSessionRepositoryInterface = Depends(get_auth_session_repository),
) -> AdminService:
    return AdminService(
        user_repo=user_repo,
        toy_repo=toy_repo,
        favorite_repo=favorite_repo,
        session_repo=session_repo,
    )
