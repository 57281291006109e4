from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Response, status

from common.models.user import User

from ..deps import get_admin_user
from ..schemas.common import PaginatedResponse
from ..schemas.contact import ContactMessageItem
from ..schemas.reports import ReportResponse
from ..schemas.toys import ToyResponse
from ..schemas.users import UserProfileResponse
from ...models.report import ReportStatus
from ...services.admin_service import AdminService, get_admin_service
from ...services.contact_service import ContactService, get_contact_service
from ...services.reports_service import ReportsService, get_reports_service


router = APIRouter()


@router.get(
    "/users",
    response_model=PaginatedResponse[UserProfileResponse],
    summary="전체 유저 목록",
)
async def list_users(
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    _admin: User = Depends(get_admin_user),
    service: AdminService = Depends(get_admin_service),
) -> PaginatedResponse[UserProfileResponse]:
    users, total = service.list_users(page, page_size)
    return PaginatedResponse[UserProfileResponse](
        items=[UserProfileResponse.from_domain(u) for u in users],
        total=total,
        page=page,
        page_size=page_size,
    )


@router.get("/toys", response_model=PaginatedResponse[ToyResponse], summary="전체 장난감 목록")
async def list_toys(
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    _admin: User = Depends(get_admin_user),
    service: AdminService = Depends(get_admin_service),
) -> PaginatedResponse[ToyResponse]:
    toys, total = service.list_toys(page, page_size)
    return PaginatedResponse[ToyResponse](
        items=[ToyResponse.from_domain(t) for t in toys],
        total=total,
        page=page,
        page_size=page_size,
    )


@router.delete(
    "/toys/{toy_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="장난감 강제 삭제",
)
async def delete_toy(
    toy_id: str,
    admin: User = Depends(get_admin_user),
    service: AdminService = Depends(get_admin_service),
) -> Response:
    service.delete_toy(toy_id, admin)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/users/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="유저 삭제 (찜/세션 포함)",
)
async def delete_user(
    user_id: str,
    admin: User = Depends(get_admin_user),
    service: AdminService = Depends(get_admin_service),
) -> Response:
    service.delete_user(user_id, admin)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/contact-messages",
    response_model=PaginatedResponse[ContactMessageItem],
    summary="고객지원 문의 목록",
)
async def list_contact_messages(
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    _admin: User = Depends(get_admin_user),
    service: ContactService = Depends(get_contact_service),
) -> PaginatedResponse[ContactMessageItem]:
    items, total = service.list_messages(page, page_size)
    return PaginatedResponse[ContactMessageItem](
        items=[ContactMessageItem.from_domain(c) for c in items],
        total=total,
        page=page,
        page_size=page_size,
    )


@router.get(
    "/reports",
    response_model=PaginatedResponse[ReportResponse],
    summary="신고 목록",
)
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
    "/reports/{report_id}/resolve",
    response_model=ReportResponse,
    summary="신고 처리 완료",
)
async def resolve_report(
    report_id: str,
    admin: User = Depends(get_admin_user),
    service: ReportsService = Depends(get_reports_service),
) -> ReportResponse:
    return ReportResponse.from_domain(service.resolve(report_id, admin))
