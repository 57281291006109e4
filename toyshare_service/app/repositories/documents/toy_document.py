from __future__ import annotations

from typing import Any

from pydantic import BaseModel

from common.mongo.types import BaseDocument, build_document_data_from_domain
from ...models.toy import Toy


class GeoPoint(BaseModel):
    """GeoJSON Point. coordinates 는 [경도, 위도] 순서다."""

    type: str = "Point"
    coordinates: list[float]

    @classmethod
    def from_lat_lng(cls, latitude: float, longitude: float) -> "GeoPoint":
        return cls(coordinates=[longitude, latitude])


class ToyDocument(BaseDocument):
    """MongoDB toys 컬렉션 도큐먼트 모델.

    - latitude / longitude 가 모두 있을 때만 2dsphere 인덱스용 geo 필드를 저장한다.
    """

    user_id: str
    title: str
    description: str
    age_range: str
    condition: str
    category: str
    images: list[str] = []
    location: str
    latitude: float | None = None
    longitude: float | None = None
    geo: GeoPoint | None = None
    tags: list[str] = []
    is_available: bool = True
    status: str
    recommended_ages: list[int] = []
    safety_notes: str | None = None
    videos: list[str] = []

    @classmethod
    def from_domain(cls, toy: Toy) -> "ToyDocument":
        data = build_document_data_from_domain(toy)
        if toy.has_coordinates:
            data["geo"] = GeoPoint.from_lat_lng(toy.latitude, toy.longitude)  # type: ignore[arg-type]
        return cls.model_validate(data)

    def to_mongo_record(self) -> dict[str, Any]:
        record = super().to_mongo_record()
        if record.get("geo") is None:
            record.pop("geo", None)
        return record

    def to_domain(self) -> Toy:
        return Toy(
            id=self.str_id,
            user_id=self.user_id,
            title=self.title,
            description=self.description,
            age_range=self.age_range,
            condition=self.condition,
            category=self.category,
            images=list(self.images),
            location=self.location,
            latitude=self.latitude,
            longitude=self.longitude,
            tags=list(self.tags),
            is_available=self.is_available,
            status=self.status,
            recommended_ages=list(self.recommended_ages),
            safety_notes=self.safety_notes,
            videos=list(self.videos),
            created_at=self.created_at,
            updated_at=self.updated_at,
        )
