from __future__ import annotations

from datetime import datetime, timezone

from pymongo import ReturnDocument
from pymongo.database import Database

from .documents.community_metrics_document import (
    COMMUNITY_METRICS_DOC_ID,
    CommunityMetricsDocument,
)
from .interfaces import CommunityMetricsRepositoryInterface
from ..models.community_metrics import CommunityMetrics, CommunityMetricsIncrement


class CommunityMetricsRepository(CommunityMetricsRepositoryInterface):
    """community_metrics 싱글톤 도큐먼트에 대한 MongoDB 접근 레이어."""

    def __init__(self, database: Database) -> None:
        self._db = database
        self._col = database["community_metrics"]

    def get(self) -> CommunityMetrics:
        raw = self._col.find_one({"_id": COMMUNITY_METRICS_DOC_ID})
        if not raw:
            return CommunityMetrics()
        return CommunityMetricsDocument.model_validate(raw).to_domain()

    def increment(
        self, inc: CommunityMetricsIncrement, now: datetime | None = None
    ) -> CommunityMetrics:
        now = now or datetime.now(timezone.utc)
        # 첫 증가 시 도큐먼트를 만든다. $inc 는 없는 필드를 0 에서 시작한다.
        raw = self._col.find_one_and_update(
            {"_id": COMMUNITY_METRICS_DOC_ID},
            {
                "$inc": {
                    "toys_saved": inc.toys_saved,
                    "families_connected": inc.families_connected,
                    "waste_reduced_kg": inc.waste_reduced_kg,
                },
                "$set": {"updated_at": now},
                "$setOnInsert": {"created_at": now},
            },
            upsert=True,
            return_document=ReturnDocument.AFTER,
        )
        return CommunityMetricsDocument.model_validate(raw).to_domain()
