from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel

from .toy import Toy


class Favorite(BaseModel):
    """유저가 찜한 장난감. 존재 여부만 의미가 있다."""

    id: str | None = None
    user_id: str
    toy_id: str
    created_at: datetime


class FavoriteWithToy(BaseModel):
    favorite: Favorite
    toy: Toy
