from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from common.models.user import User

from ..deps import get_current_user
from ..schemas.common import PaginatedResponse
from ..schemas.wishes import (
    WishCreateRequest,
    WishOfferCreateRequest,
    WishOfferResponse,
    WishOfferStatusUpdateRequest,
    WishResponse,
    WishUpdateRequest,
)
from ...models.wish import ListWishesFilter, WishCreateInput, WishUpdate
from ...services.wishes_service import WishesService, get_wishes_service


router = APIRouter()


@router.get("/wishes", response_model=PaginatedResponse[WishResponse], summary="위시 목록 조회")
async def list_wishes(
    page: int = Query(1, ge=1, description="조회할 페이지 (1부터 시작)"),
    page_size: int = Query(20, ge=1, le=100, description="페이지당 아이템 개수 (1~100)"),
    location: str | None = None,
    age_range: str | None = None,
    search: str | None = None,
    service: WishesService = Depends(get_wishes_service),
) -> PaginatedResponse[WishResponse]:
    flt = ListWishesFilter(
        page=page,
        page_size=page_size,
        location=location,
        age_range=age_range,
        search=search,
    )
    items, total = service.list_wishes(flt)
    return PaginatedResponse[WishResponse](
        items=[WishResponse.from_domain(w) for w in items],
        total=total,
        page=page,
        page_size=page_size,
    )


@router.get("/wishes/{wish_id}", response_model=WishResponse, summary="위시 상세 조회")
async def get_wish(
    wish_id: str,
    service: WishesService = Depends(get_wishes_service),
) -> WishResponse:
    return WishResponse.from_domain(service.get_wish(wish_id))


@router.post(
    "/wishes",
    response_model=WishResponse,
    status_code=status.HTTP_201_CREATED,
    summary="위시 등록",
)
async def create_wish(
    body: WishCreateRequest,
    user: User = Depends(get_current_user),
    service: WishesService = Depends(get_wishes_service),
) -> WishResponse:
    wish = service.create_wish(user, WishCreateInput(**body.model_dump()))
    return WishResponse.from_domain(wish)


@router.patch("/wishes/{wish_id}", response_model=WishResponse, summary="위시 수정 (작성자)")
async def update_wish(
    wish_id: str,
    body: WishUpdateRequest,
    user: User = Depends(get_current_user),
    service: WishesService = Depends(get_wishes_service),
) -> WishResponse:
    update = WishUpdate(**body.model_dump())
    if not update.changed_fields():
        raise HTTPException(status_code=400, detail="no fields to update")
    return WishResponse.from_domain(service.update_wish(wish_id, user, update))


@router.delete(
    "/wishes/{wish_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="위시 삭제 (작성자)",
)
async def delete_wish(
    wish_id: str,
    user: User = Depends(get_current_user),
    service: WishesService = Depends(get_wishes_service),
) -> Response:
    service.delete_wish(wish_id, user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/wishes/{wish_id}/offers",
    response_model=list[WishOfferResponse],
    summary="위시에 들어온 제안 목록 (작성자)",
)
async def list_offers(
    wish_id: str,
    user: User = Depends(get_current_user),
    service: WishesService = Depends(get_wishes_service),
) -> list[WishOfferResponse]:
    return [WishOfferResponse.from_domain(o) for o in service.list_offers(wish_id, user)]


@router.post(
    "/wishes/{wish_id}/offer",
    response_model=WishOfferResponse,
    status_code=status.HTTP_201_CREATED,
    summary="위시에 장난감 제안",
)
async def create_offer(
    wish_id: str,
    body: WishOfferCreateRequest,
    user: User = Depends(get_current_user),
    service: WishesService = Depends(get_wishes_service),
) -> WishOfferResponse:
    offer = service.create_offer(wish_id, user, message=body.message, toy_id=body.toy_id)
    return WishOfferResponse.from_domain(offer)


@router.patch(
    "/wish-offers/{offer_id}/status",
    response_model=WishOfferResponse,
    summary="제안 상태 변경 (위시 작성자)",
)
async def update_offer_status(
    offer_id: str,
    body: WishOfferStatusUpdateRequest,
    user: User = Depends(get_current_user),
    service: WishesService = Depends(get_wishes_service),
) -> WishOfferResponse:
    offer = service.update_offer_status(offer_id, user, body.status)
    return WishOfferResponse.from_domain(offer)
