from __future__ import annotations

from fastapi import APIRouter, Depends

from common.models.user import User

from ..deps import get_current_user
from ..schemas.requests import (
    FeedbackRequest,
    RequestStatusUpdateRequest,
    ToyRequestResponse,
)
from ...services.toy_requests_service import ToyRequestsService, get_toy_requests_service


router = APIRouter()


@router.get("/made", response_model=list[ToyRequestResponse], summary="내가 보낸 요청")
async def list_made_requests(
    user: User = Depends(get_current_user),
    service: ToyRequestsService = Depends(get_toy_requests_service),
) -> list[ToyRequestResponse]:
    assert user.id is not None
    return [ToyRequestResponse.from_domain(r) for r in service.list_made(user.id)]


@router.get("/received", response_model=list[ToyRequestResponse], summary="내가 받은 요청")
async def list_received_requests(
    user: User = Depends(get_current_user),
    service: ToyRequestsService = Depends(get_toy_requests_service),
) -> list[ToyRequestResponse]:
    assert user.id is not None
    return [ToyRequestResponse.from_domain(r) for r in service.list_received(user.id)]


@router.patch(
    "/{request_id}/status",
    response_model=ToyRequestResponse,
    summary="요청 승인/거절 (장난감 소유자)",
)
async def decide_request(
    request_id: str,
    body: RequestStatusUpdateRequest,
    user: User = Depends(get_current_user),
    service: ToyRequestsService = Depends(get_toy_requests_service),
) -> ToyRequestResponse:
    assert user.id is not None
    decided = service.decide(request_id, user.id, body.status)
    return ToyRequestResponse.from_domain(decided)


@router.post(
    "/{request_id}/feedback",
    response_model=ToyRequestResponse,
    summary="교환 후기 작성 (요청자)",
)
async def leave_feedback(
    request_id: str,
    body: FeedbackRequest,
    user: User = Depends(get_current_user),
    service: ToyRequestsService = Depends(get_toy_requests_service),
) -> ToyRequestResponse:
    assert user.id is not None
    updated = service.leave_feedback(request_id, user.id, body.feedback, body.rating)
    return ToyRequestResponse.from_domain(updated)
