from __future__ import annotations

from fastapi import APIRouter, Depends

from common.models.user import User

from ..deps import get_current_user
from ..schemas.metrics import CommunityMetricsIncrementRequest, CommunityMetricsResponse
from ...models.community_metrics import CommunityMetrics, CommunityMetricsIncrement
from ...services.community_metrics_service import (
    CommunityMetricsService,
    get_community_metrics_service,
)


router = APIRouter()


def _to_response(metrics: CommunityMetrics) -> CommunityMetricsResponse:
    return CommunityMetricsResponse(**metrics.model_dump())


@router.get("", response_model=CommunityMetricsResponse, summary="커뮤니티 지표 조회")
async def get_metrics(
    service: CommunityMetricsService = Depends(get_community_metrics_service),
) -> CommunityMetricsResponse:
    return _to_response(service.get_metrics())


@router.patch("", response_model=CommunityMetricsResponse, summary="커뮤니티 지표 증가")
async def increment_metrics(
    body: CommunityMetricsIncrementRequest,
    _user: User = Depends(get_current_user),
    service: CommunityMetricsService = Depends(get_community_metrics_service),
) -> CommunityMetricsResponse:
    metrics = service.increment(CommunityMetricsIncrement(**body.model_dump()))
    return _to_response(metrics)
