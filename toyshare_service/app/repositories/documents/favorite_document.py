from __future__ import annotations

from common.mongo.types import BaseDocument
from ...models.favorite import Favorite


class FavoriteDocument(BaseDocument):
    """MongoDB favorites 컬렉션 도큐먼트 모델."""

    user_id: str
    toy_id: str

    @classmethod
    def from_domain(cls, favorite: Favorite) -> "FavoriteDocument":
        data = {
            "user_id": favorite.user_id,
            "toy_id": favorite.toy_id,
            "created_at": favorite.created_at,
            "updated_at": favorite.created_at,
        }
        return cls.model_validate(data)

    def to_domain(self) -> Favorite:
        return Favorite(
            id=self.str_id,
            user_id=self.user_id,
            toy_id=self.toy_id,
            created_at=self.created_at,
        )
