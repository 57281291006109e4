from __future__ import annotations

from datetime import datetime, timezone

from pymongo import ReturnDocument
from pymongo.database import Database

from common.mongo.types import parse_object_id

from .documents.report_document import ReportDocument
from .interfaces import ReportRepositoryInterface
from ..models.report import Report, ReportStatus


class ReportRepository(ReportRepositoryInterface):
    """reports 컬렉션에 대한 MongoDB 접근 레이어."""

    def __init__(self, database: Database) -> None:
        self._db = database
        self._col = database["reports"]

    @staticmethod
    def _from_document(doc: dict) -> Report:
        return ReportDocument.model_validate(doc).to_domain()

    def insert(self, report: Report) -> Report:
        now = datetime.now(timezone.utc)
        report.created_at = now
        report.updated_at = now

        payload = ReportDocument.from_domain(report).to_mongo_record()
        self._col.insert_one(payload)
        return self._from_document(payload)

    def find_by_id(self, report_id: str) -> Report | None:
        oid = parse_object_id(report_id)
        if oid is None:
            return None
        doc = self._col.find_one({"_id": oid})
        if not doc:
            return None
        return self._from_document(doc)

    def list(
        self,
        status: ReportStatus | None,
        page: int,
        page_size: int,
    ) -> tuple[list[Report], int]:
        if page <= 0:
            page = 1
        if page_size <= 0 or page_size > 100:
            page_size = 20

        query: dict = {}
        if status is not None:
            query["status"] = status.value

        skip = (page - 1) * page_size
        total = self._col.count_documents(query)
        cursor = self._col.find(
            query,
            sort=[("created_at", -1), ("_id", -1)],
            skip=skip,
            limit=page_size,
        )
        return [self._from_document(raw) for raw in cursor], total

    def update_status_if(
        self,
        report_id: str,
        expected: ReportStatus,
        target: ReportStatus,
        reviewer_id: str,
    ) -> Report | None:
        oid = parse_object_id(report_id)
        if oid is None:
            return None
        now = datetime.now(timezone.utc)
        result = self._col.find_one_and_update(
            {"_id": oid, "status": expected.value},
            {
                "$set": {
                    "status": target.value,
                    "reviewed_by": reviewer_id,
                    "reviewed_at": now,
                    "updated_at": now,
                }
            },
            return_document=ReturnDocument.AFTER,
        )
        if not result:
            return None
        return self._from_document(result)
