"""신고 접수 및 관리자 처리 서비스."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from fastapi import Depends

from common.models.user import User

from .dependencies import (
    get_message_repository,
    get_report_repository,
    get_toy_repository,
    get_user_repository,
)
from ..exceptions import (
    ConflictError,
    InvalidRequestError,
    NotFoundError,
    PermissionDeniedError,
)
from ..models.report import (
    Report,
    ReportStatus,
    ReportTargetType,
    ensure_report_transition,
)
from ..repositories.interfaces import (
    MessageRepositoryInterface,
    ReportRepositoryInterface,
    ToyRepositoryInterface,
    UserRepositoryInterface,
)


logger = logging.getLogger(__name__)


class ReportsService:
    """유저/장난감/메시지 신고.

    - 신고는 로그인한 유저 누구나 남길 수 있고, 대상이 실제로 존재해야 한다.
    - 상태 변경은 관리자만 가능하며 REPORT_TRANSITIONS 표를 따른다.
    """

    def __init__(
        self,
        report_repo: ReportRepositoryInterface,
        user_repo: UserRepositoryInterface,
        toy_repo: ToyRepositoryInterface,
        message_repo: MessageRepositoryInterface,
    ) -> None:
        self._report_repo = report_repo
        self._user_repo = user_repo
        self._toy_repo = toy_repo
        self._message_repo = message_repo

    def _target_exists(self, target_type: ReportTargetType, target_id: str) -> bool:
        if target_type == ReportTargetType.USER:
            return self._user_repo.find_by_id(target_id) is not None
        if target_type == ReportTargetType.TOY:
            return self._toy_repo.find_by_id(target_id) is not None
        return self._message_repo.find_by_id(target_id) is not None

    def create_report(
        self,
        reporter: User,
        target_type: ReportTargetType,
        target_id: str,
        reason: str,
        details: str | None = None,
    ) -> Report:
        assert reporter.id is not None
        if not reason or not reason.strip():
            raise InvalidRequestError("reason must not be blank")
        if target_type == ReportTargetType.USER and target_id == reporter.id:
            raise InvalidRequestError("you cannot report yourself")
        if not self._target_exists(target_type, target_id):
            raise NotFoundError(f"{target_type.value} not found")

        now = datetime.now(timezone.utc)
        created = self._report_repo.insert(
            Report(
                reporter_id=reporter.id,
                target_type=target_type,
                target_id=target_id,
                reason=reason.strip(),
                details=(details or "").strip() or None,
                created_at=now,
                updated_at=now,
            )
        )
        logger.info(
            "report created target=%s:%s",
            target_type.value,
            target_id,
            extra={"user_id": reporter.id},
        )
        return created

    def get_report(self, report_id: str) -> Report:
        report = self._report_repo.find_by_id(report_id)
        if report is None:
            raise NotFoundError("report not found")
        return report

    def list_reports(
        self, status: ReportStatus | None, page: int, page_size: int
    ) -> tuple[list[Report], int]:
        return self._report_repo.list(status, page, page_size)

    def update_status(self, report_id: str, admin: User, status: ReportStatus) -> Report:
        assert admin.id is not None
        if not admin.is_admin:
            raise PermissionDeniedError("admin access required")

        report = self.get_report(report_id)
        ensure_report_transition(report.status, status)

        updated = self._report_repo.update_status_if(
            report_id, report.status, status, admin.id
        )
        if updated is None:
            # 조회 이후 다른 관리자가 먼저 처리한 경우
            latest = self.get_report(report_id)
            ensure_report_transition(latest.status, status)
            raise ConflictError("report was modified concurrently")

        logger.info(
            "report status changed to %s",
            updated.status.value,
            extra={"user_id": admin.id},
        )
        return updated

    def resolve(self, report_id: str, admin: User) -> Report:
        return self.update_status(report_id, admin, ReportStatus.RESOLVED)


def get_reports_service(
    report_repo: ReportRepositoryInterface = Depends(get_report_repository),
    user_repo: UserRepositoryInterface = Depends(get_user_repository),
    toy_repo: ToyRepositoryInterface = Depends(get_toy_repository),
    message_repo: MessageRepositoryInterface = Depends(get_message_repository),
) -> ReportsService:
    """FastAPI DI용 ReportsService 팩토리."""

    return ReportsService(
        report_repo=report_repo,
        user_repo=user_repo,
        toy_repo=toy_repo,
        message_repo=message_repo,
    )
