from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status

from common.models.user import User

from ..deps import get_admin_user, get_current_user
from ..schemas.common import PaginatedResponse
from ..schemas.reports import ReportCreateRequest, ReportResponse, ReportStatusUpdateRequest
from ...models.report import ReportStatus
from ...services.reports_service import ReportsService, get_reports_service


router = APIRouter()


@router.post(
    "",
    response_model=ReportResponse,
    status_code=status.HTTP_201_CREATED,
    summary="유저/장난감/메시지 신고",
)
async def create_report(
    body: ReportCreateRequest,
    user: User = Depends(get_current_user),
    service: ReportsService = Depends(get_reports_service),
) -> ReportResponse:
    report = service.create_report(
        user,
        body.target_type,
        body.target_id,
        body.reason,
        details=body.details,
    )
    return ReportResponse.from_domain(report)


@router.get("", response_model=PaginatedResponse[ReportResponse], summary="신고 목록 (관리자)")
async def list_reports(
    report_status: ReportStatus | None = Query(None, alias="status"),
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    _admin: User = Depends(get_admin_user),
    service: ReportsService = Depends(get_reports_service),
) -> PaginatedResponse[ReportResponse]:
    items, total = service.list_reports(report_status, page, page_size)
    return PaginatedResponse[ReportResponse](
        items=[ReportResponse.from_domain(r) for r in items],
        total=total,
        page=page,
        page_size=page_size,
    )


@router.patch(
    "/{report_id}/status",
    response_model=ReportResponse,
    summary="신고 처리 상태 변경 (관리자)",
)
async def update_report_status(
    report_id: str,
    body: ReportStatusUpdateRequest,
    admin: User = Depends(get_admin_user),
    service: ReportsService = Depends(get_reports_service),
) -> ReportResponse:
    return ReportResponse.from_domain(service.update_status(report_id, admin, body.status))
