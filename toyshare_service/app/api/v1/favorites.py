from __future__ import annotations

from fastapi import APIRouter, Depends

from common.models.user import User

from ..deps import get_current_user
from ..schemas.favorites import FavoriteWithToyResponse
from ...services.favorites_service import FavoritesService, get_favorites_service


router = APIRouter()


@router.get("", response_model=list[FavoriteWithToyResponse], summary="내 찜 목록")
async def list_favorites(
    user: User = Depends(get_current_user),
    service: FavoritesService = Depends(get_favorites_service),
) -> list[FavoriteWithToyResponse]:
    assert user.id is not None
    return [FavoriteWithToyResponse.from_domain(i) for i in service.list_with_toys(user.id)]
