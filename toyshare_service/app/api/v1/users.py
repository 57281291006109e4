from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from common.models.user import User, UserProfileUpdate

from ..deps import get_current_user
from ..schemas.requests import ToyRequestResponse
from ..schemas.toys import ToyResponse
from ..schemas.users import (
    ContributionRequest,
    SustainabilityResponse,
    UserProfileResponse,
    UserProfileUpdateRequest,
)
from ..schemas.wishes import WishResponse
from ...services.toy_requests_service import ToyRequestsService, get_toy_requests_service
from ...services.toys_service import ToysService, get_toys_service
from ...services.users_service import UsersService, get_users_service
from ...services.wishes_service import WishesService, get_wishes_service


router = APIRouter()


@router.get("/{user_id}", response_model=UserProfileResponse, summary="유저 프로필 조회")
async def get_user_profile(
    user_id: str,
    service: UsersService = Depends(get_users_service),
) -> UserProfileResponse:
    return UserProfileResponse.from_domain(service.get_profile(user_id))


@router.patch("/{user_id}", response_model=UserProfileResponse, summary="본인 프로필 수정")
async def update_user_profile(
    user_id: str,
    body: UserProfileUpdateRequest,
    user: User = Depends(get_current_user),
    service: UsersService = Depends(get_users_service),
) -> UserProfileResponse:
    update = UserProfileUpdate(**body.model_dump())
    if not update.changed_fields():
        raise HTTPException(status_code=400, detail="no fields to update")
    profile = service.update_profile(user_id, user, update)
    return UserProfileResponse.from_domain(profile)


@router.get(
    "/{user_id}/sustainability",
    response_model=SustainabilityResponse,
    summary="지속가능성 점수/배지 조회",
)
async def get_sustainability(
    user_id: str,
    service: UsersService = Depends(get_users_service),
) -> SustainabilityResponse:
    return SustainabilityResponse.from_domain(service.get_sustainability(user_id))


@router.patch(
    "/{user_id}/sustainability",
    response_model=SustainabilityResponse,
    summary="기여 카운터 증가 (본인 또는 관리자)",
)
async def add_contributions(
    user_id: str,
    body: ContributionRequest,
    user: User = Depends(get_current_user),
    service: UsersService = Depends(get_users_service),
) -> SustainabilityResponse:
    summary = service.add_contributions(
        user_id,
        user,
        toys_shared=body.toys_shared,
        exchanges=body.successful_exchanges,
    )
    return SustainabilityResponse.from_domain(summary)


@router.get(
    "/{user_id}/reviews",
    response_model=list[ToyRequestResponse],
    summary="유저가 받은 교환 후기 목록",
)
async def list_user_reviews(
    user_id: str,
    service: ToyRequestsService = Depends(get_toy_requests_service),
) -> list[ToyRequestResponse]:
    return [ToyRequestResponse.from_domain(r) for r in service.list_reviews(user_id)]


@router.get("/{user_id}/toys", response_model=list[ToyResponse], summary="유저의 장난감 목록")
async def list_user_toys(
    user_id: str,
    service: ToysService = Depends(get_toys_service),
) -> list[ToyResponse]:
    return [ToyResponse.from_domain(t) for t in service.list_by_user(user_id)]


@router.get("/{user_id}/wishes", response_model=list[WishResponse], summary="유저의 위시 목록")
async def list_user_wishes(
    user_id: str,
    service: WishesService = Depends(get_wishes_service),
) -> list[WishResponse]:
    return [WishResponse.from_domain(w) for w in service.list_by_user(user_id)]
