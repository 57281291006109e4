from __future__ import annotations

from pydantic import BaseModel

from common.types.datetime import UtcDateTime

from .toys import ToyResponse
from ...models.favorite import Favorite, FavoriteWithToy


class FavoriteItem(BaseModel):
    id: str
    user_id: str
    toy_id: str
    created_at: UtcDateTime

    @classmethod
    def from_domain(cls, favorite: Favorite) -> "FavoriteItem":
        assert favorite.id is not None
        return cls(
            id=favorite.id,
            user_id=favorite.user_id,
            toy_id=favorite.toy_id,
            created_at=favorite.created_at,
        )


class FavoriteToggleResponse(BaseModel):
    favorited: bool
    favorite: FavoriteItem | None = None


class FavoriteCheckResponse(BaseModel):
    favorited: bool


class FavoriteWithToyResponse(BaseModel):
    favorite: FavoriteItem
    toy: ToyResponse

    @classmethod
    def from_domain(cls, item: FavoriteWithToy) -> "FavoriteWithToyResponse":
        return cls(
            favorite=FavoriteItem.from_domain(item.favorite),
            toy=ToyResponse.from_domain(item.toy),
        )
