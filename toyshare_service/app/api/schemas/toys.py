from __future__ import annotations

from pydantic import BaseModel, Field

from common.types.datetime import UtcDateTime

from ...models.toy import DEFAULT_CATEGORY, Toy, ToyStatus


class ToyCreateRequest(BaseModel):
    title: str = Field(min_length=1)
    description: str
    age_range: str
    condition: str
    category: str = DEFAULT_CATEGORY
    images: list[str] = Field(default_factory=list)
    location: str
    latitude: float | None = Field(default=None, ge=-90, le=90)
    longitude: float | None = Field(default=None, ge=-180, le=180)
    tags: list[str] = Field(default_factory=list)
    recommended_ages: list[int] = Field(default_factory=list)
    safety_notes: str | None = None
    videos: list[str] = Field(default_factory=list)


class ToyUpdateRequest(BaseModel):
    title: str | None = Field(default=None, min_length=1)
    description: str | None = None
    age_range: str | None = None
    condition: str | None = None
    category: str | None = None
    images: list[str] | None = None
    location: str | None = None
    latitude: float | None = Field(default=None, ge=-90, le=90)
    longitude: float | None = Field(default=None, ge=-180, le=180)
    tags: list[str] | None = None
    is_available: bool | None = None
    status: ToyStatus | None = None
    recommended_ages: list[int] | None = None
    safety_notes: str | None = None
    videos: list[str] | None = None


class ToyResponse(BaseModel):
    id: str
    user_id: str
    title: str
    description: str
    age_range: str
    condition: str
    category: str
    images: list[str]
    location: str
    latitude: float | None
    longitude: float | None
    tags: list[str]
    is_available: bool
    status: str
    recommended_ages: list[int]
    safety_notes: str | None
    videos: list[str]
    distance_miles: float | None = None
    created_at: UtcDateTime
    updated_at: UtcDateTime

    @classmethod
    def from_domain(cls, toy: Toy, distance_miles: float | None = None) -> "ToyResponse":
        assert toy.id is not None
        return cls(
            id=toy.id,
            user_id=toy.user_id,
            title=toy.title,
            description=toy.description,
            age_range=toy.age_range,
            condition=toy.condition,
            category=toy.category,
            images=toy.images,
            location=toy.location,
            latitude=toy.latitude,
            longitude=toy.longitude,
            tags=toy.tags,
            is_available=toy.is_available,
            status=toy.status,
            recommended_ages=toy.recommended_ages,
            safety_notes=toy.safety_notes,
            videos=toy.videos,
            distance_miles=distance_miles,
            created_at=toy.created_at,
            updated_at=toy.updated_at,
        )
