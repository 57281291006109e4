from __future__ import annotations

from pydantic import Field

from common.mongo.types import BaseDocument
from ...models.community_metrics import CommunityMetrics


# community_metrics 컬렉션은 이 _id 를 가진 도큐먼트 하나만 사용한다.
COMMUNITY_METRICS_DOC_ID = "global"


class CommunityMetricsDocument(BaseDocument):
    """MongoDB community_metrics 싱글톤 도큐먼트 모델."""

    id: str = Field(default=COMMUNITY_METRICS_DOC_ID, alias="_id")  # type: ignore[assignment]
    toys_saved: int = 0
    families_connected: int = 0
    waste_reduced_kg: float = 0.0

    def to_domain(self) -> CommunityMetrics:
        return CommunityMetrics(
            toys_saved=self.toys_saved,
            families_connected=self.families_connected,
            waste_reduced_kg=self.waste_reduced_kg,
        )
