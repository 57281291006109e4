from __future__ import annotations

from pydantic import BaseModel, Field

from common.types.datetime import UtcDateTime

from ...models.report import Report, ReportStatus, ReportTargetType


class ReportCreateRequest(BaseModel):
    target_type: ReportTargetType
    target_id: str = Field(min_length=1)
    reason: str = Field(min_length=1)
    details: str | None = None


class ReportStatusUpdateRequest(BaseModel):
    status: ReportStatus


class ReportResponse(BaseModel):
    id: str
    reporter_id: str
    target_type: str
    target_id: str
    reason: str
    details: str | None
    status: str
    reviewed_by: str | None
    reviewed_at: UtcDateTime | None
    created_at: UtcDateTime

    @classmethod
    def from_domain(cls, report: Report) -> "ReportResponse":
        assert report.id is not None
        return cls(
            id=report.id,
            reporter_id=report.reporter_id,
            target_type=report.target_type,
            target_id=report.target_id,
            reason=report.reason,
            details=report.details,
            status=report.status,
            reviewed_by=report.reviewed_by,
            reviewed_at=report.reviewed_at,
            created_at=report.created_at,
        )
