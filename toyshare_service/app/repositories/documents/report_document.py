from __future__ import annotations

from common.mongo.types import BaseDocument, MongoDateTime, build_document_data_from_domain
from ...models.report import Report


class ReportDocument(BaseDocument):
    """MongoDB reports 컬렉션 도큐먼트 모델."""

    reporter_id: str
    target_type: str
    target_id: str
    reason: str
    details: str | None = None
    status: str
    reviewed_by: str | None = None
    reviewed_at: MongoDateTime | None = None

    @classmethod
    def from_domain(cls, report: Report) -> "ReportDocument":
        return cls.model_validate(build_document_data_from_domain(report))

    def to_domain(self) -> Report:
        return Report(
            id=self.str_id,
            reporter_id=self.reporter_id,
            target_type=self.target_type,
            target_id=self.target_id,
            reason=self.reason,
            details=self.details,
            status=self.status,
            reviewed_by=self.reviewed_by,
            reviewed_at=self.reviewed_at,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )
