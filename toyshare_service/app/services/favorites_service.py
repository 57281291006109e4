from __future__ import annotations

import logging

from fastapi import Depends

from .dependencies import get_favorite_repository, get_toy_repository
from ..exceptions import NotFoundError
from ..models.favorite import Favorite, FavoriteWithToy
from ..repositories.interfaces import (
    FavoriteRepositoryInterface,
    ToyRepositoryInterface,
)


logger = logging.getLogger(__name__)


class FavoritesService:
    """찜 토글/조회 비즈니스 로직."""

    def __init__(
        self,
        favorite_repo: FavoriteRepositoryInterface,
        toy_repo: ToyRepositoryInterface,
    ) -> None:
        self._favorite_repo = favorite_repo
        self._toy_repo = toy_repo

    def toggle(self, user_id: str, toy_id: str) -> Favorite | None:
        """찜이 없으면 추가해 반환하고, 있으면 삭제 후 None 을 반환한다."""

        if self._toy_repo.find_by_id(toy_id) is None:
            raise NotFoundError("toy not found")

        if self._favorite_repo.delete(user_id, toy_id):
            logger.info("favorite removed", extra={"user_id": user_id, "toy_id": toy_id})
            return None

        favorite = self._favorite_repo.create(user_id, toy_id)
        logger.info("favorite added", extra={"user_id": user_id, "toy_id": toy_id})
        return favorite

    def is_favorited(self, user_id: str, toy_id: str) -> bool:
        return self._favorite_repo.find(user_id, toy_id) is not None

    def list_with_toys(self, user_id: str) -> list[FavoriteWithToy]:
        items: list[FavoriteWithToy] = []
        for favorite in self._favorite_repo.list_by_user(user_id):
            toy = self._toy_repo.find_by_id(favorite.toy_id)
            if toy is None:
                # 찜한 뒤 삭제된 장난감
                continue
            items.append(FavoriteWithToy(favorite=favorite, toy=toy))
        return items


def get_favorites_service(
    favorite_repo: FavoriteRepositoryInterface = Depends(get_favorite_repository),
    toy_repo: ToyRepositoryInterface = Depends(get_toy_repository),
) -> FavoritesService:
    return FavoritesService(favorite_repo=favorite_repo, toy_repo=toy_repo)
