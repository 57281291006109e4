from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from common.models.user import User

from ..deps import get_current_user
from ..schemas.common import PaginatedResponse
from ..schemas.favorites import FavoriteCheckResponse, FavoriteItem, FavoriteToggleResponse
from ..schemas.requests import ToyRequestCreateRequest, ToyRequestResponse
from ..schemas.toys import ToyCreateRequest, ToyResponse, ToyUpdateRequest
from ...models.toy import ListToysFilter, ToyCreateInput, ToyUpdate
from ...services.favorites_service import FavoritesService, get_favorites_service
from ...services.toy_requests_service import ToyRequestsService, get_toy_requests_service
from ...services.toys_service import ToysService, get_toys_service


router = APIRouter()


def _split_tags(raw: list[str]) -> list[str]:
    # ?tags=a&tags=b 와 ?tags=a,b 를 모두 허용한다.
    tags: list[str] = []
    for value in raw:
        tags.extend(t.strip() for t in value.split(",") if t.strip())
    return tags


@router.get("", response_model=PaginatedResponse[ToyResponse], summary="장난감 목록 조회")
async def list_toys(
    page: int = Query(1, ge=1, description="조회할 페이지 (1부터 시작)"),
    page_size: int = Query(20, ge=1, le=100, description="페이지당 아이템 개수 (1~100)"),
    location: str | None = None,
    age_range: str | None = None,
    condition: str | None = None,
    category: str | None = None,
    is_available: bool | None = None,
    tags: list[str] = Query([]),
    search: str | None = None,
    latitude: float | None = Query(None, ge=-90, le=90),
    longitude: float | None = Query(None, ge=-180, le=180),
    distance: float | None = Query(None, gt=0, description="검색 반경 (마일)"),
    service: ToysService = Depends(get_toys_service),
) -> PaginatedResponse[ToyResponse]:
    flt = ListToysFilter(
        page=page,
        page_size=page_size,
        location=location,
        age_range=age_range,
        condition=condition,
        category=category,
        is_available=is_available,
        tags=_split_tags(tags),
        search=search,
        latitude=latitude,
        longitude=longitude,
        distance_miles=distance,
    )
    items, total = service.list_toys(flt)
    return PaginatedResponse[ToyResponse](
        items=[ToyResponse.from_domain(i.toy, i.distance_miles) for i in items],
        total=total,
        page=page,
        page_size=page_size,
    )


@router.get("/mine", response_model=list[ToyResponse], summary="내 장난감 목록")
async def list_my_toys(
    user: User = Depends(get_current_user),
    service: ToysService = Depends(get_toys_service),
) -> list[ToyResponse]:
    assert user.id is not None
    return [ToyResponse.from_domain(t) for t in service.list_by_user(user.id)]


@router.get("/{toy_id}", response_model=ToyResponse, summary="장난감 상세 조회")
async def get_toy(
    toy_id: str,
    service: ToysService = Depends(get_toys_service),
) -> ToyResponse:
    return ToyResponse.from_domain(service.get_toy(toy_id))


@router.post(
    "",
    response_model=ToyResponse,
    status_code=status.HTTP_201_CREATED,
    summary="장난감 등록",
)
async def create_toy(
    body: ToyCreateRequest,
    user: User = Depends(get_current_user),
    service: ToysService = Depends(get_toys_service),
) -> ToyResponse:
    toy = service.create_toy(user, ToyCreateInput(**body.model_dump()))
    return ToyResponse.from_domain(toy)


@router.patch("/{toy_id}", response_model=ToyResponse, summary="장난감 수정 (소유자)")
async def update_toy(
    toy_id: str,
    body: ToyUpdateRequest,
    user: User = Depends(get_current_user),
    service: ToysService = Depends(get_toys_service),
) -> ToyResponse:
    update = ToyUpdate(**body.model_dump())
    if not update.changed_fields():
        raise HTTPException(status_code=400, detail="no fields to update")
    return ToyResponse.from_domain(service.update_toy(toy_id, user, update))


@router.delete(
    "/{toy_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="장난감 삭제 (소유자 또는 관리자)",
)
async def delete_toy(
    toy_id: str,
    user: User = Depends(get_current_user),
    service: ToysService = Depends(get_toys_service),
) -> Response:
    service.delete_toy(toy_id, user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/{toy_id}/requests",
    response_model=list[ToyRequestResponse],
    summary="장난감에 들어온 요청 목록 (소유자)",
)
async def list_toy_requests(
    toy_id: str,
    user: User = Depends(get_current_user),
    service: ToyRequestsService = Depends(get_toy_requests_service),
) -> list[ToyRequestResponse]:
    assert user.id is not None
    return [ToyRequestResponse.from_domain(r) for r in service.list_for_toy(toy_id, user.id)]


@router.post(
    "/{toy_id}/request",
    response_model=ToyRequestResponse,
    status_code=status.HTTP_201_CREATED,
    summary="장난감 교환 요청",
)
async def request_toy(
    toy_id: str,
    body: ToyRequestCreateRequest,
    user: User = Depends(get_current_user),
    service: ToyRequestsService = Depends(get_toy_requests_service),
) -> ToyRequestResponse:
    assert user.id is not None
    created = service.create_request(
        toy_id,
        user.id,
        message=body.message,
        preferred_location=body.preferred_location,
    )
    return ToyRequestResponse.from_domain(created)


@router.post(
    "/{toy_id}/favorite",
    response_model=FavoriteToggleResponse,
    summary="찜 토글 (추가 시 201, 해제 시 200)",
)
async def toggle_favorite(
    toy_id: str,
    response: Response,
    user: User = Depends(get_current_user),
    service: FavoritesService = Depends(get_favorites_service),
) -> FavoriteToggleResponse:
    assert user.id is not None
    favorite = service.toggle(user.id, toy_id)
    if favorite is None:
        return FavoriteToggleResponse(favorited=False)

    response.status_code = status.HTTP_201_CREATED
    return FavoriteToggleResponse(favorited=True, favorite=FavoriteItem.from_domain(favorite))


@router.get(
    "/{toy_id}/favorite",
    response_model=FavoriteCheckResponse,
    summary="찜 여부 조회",
)
async def check_favorite(
    toy_id: str,
    user: User = Depends(get_current_user),
    service: FavoritesService = Depends(get_favorites_service),
) -> FavoriteCheckResponse:
    assert user.id is not None
    return FavoriteCheckResponse(favorited=service.is_favorited(user.id, toy_id))
