"""의심스러운 유저/장난감/메시지 신고(Report) 도메인 모델과 처리 상태 전이 규칙.

pending -> investigating -> resolved | dismissed 순서로 진행하며,
pending 에서 바로 resolved / dismissed 로 닫을 수도 있다. resolved, dismissed 는 종료 상태다.
"""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel

from ..exceptions import InvalidStateTransitionError


class ReportTargetType(StrEnum):
    USER = "user"
    TOY = "toy"
    MESSAGE = "message"


class ReportStatus(StrEnum):
    PENDING = "pending"
    INVESTIGATING = "investigating"
    RESOLVED = "resolved"
    DISMISSED = "dismissed"


REPORT_TRANSITIONS: dict[ReportStatus, frozenset[ReportStatus]] = {
    ReportStatus.PENDING: frozenset(
        {ReportStatus.INVESTIGATING, ReportStatus.RESOLVED, ReportStatus.DISMISSED}
    ),
    ReportStatus.INVESTIGATING: frozenset({ReportStatus.RESOLVED, ReportStatus.DISMISSED}),
    ReportStatus.RESOLVED: frozenset(),
    ReportStatus.DISMISSED: frozenset(),
}


def ensure_report_transition(current: ReportStatus, target: ReportStatus) -> None:
    if target not in REPORT_TRANSITIONS[current]:
        raise InvalidStateTransitionError("report", current, target)


class Report(BaseModel):
    """신고 한 건. reviewed_by / reviewed_at 은 관리자가 상태를 바꿀 때 채워진다."""

    id: str | None = None
    reporter_id: str
    target_type: ReportTargetType
    target_id: str
    reason: str
    details: str | None = None
    status: ReportStatus = ReportStatus.PENDING
    reviewed_by: str | None = None
    reviewed_at: datetime | None = None
    created_at: datetime
    updated_at: datetime
