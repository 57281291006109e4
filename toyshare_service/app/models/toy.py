from __future__ import annotations

import math
from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, Field


DEFAULT_CATEGORY = "Other"

# 목록 필터에서 "필터 없음"을 뜻하는 값
WILDCARD_FILTER_VALUES: frozenset[str] = frozenset({"", "all", "any"})


class ToyStatus(StrEnum):
    ACTIVE = "active"
    TRADED = "traded"
    INACTIVE = "inactive"


class Toy(BaseModel):
    """유저가 등록한 장난감(리스팅) 도메인 모델."""

    id: str | None = None
    user_id: str
    title: str
    description: str
    age_range: str
    condition: str
    category: str = DEFAULT_CATEGORY
    images: list[str] = Field(default_factory=list)
    location: str
    latitude: float | None = Field(default=None, ge=-90, le=90)
    longitude: float | None = Field(default=None, ge=-180, le=180)
    tags: list[str] = Field(default_factory=list)
    is_available: bool = True
    status: ToyStatus = ToyStatus.ACTIVE
    recommended_ages: list[int] = Field(default_factory=list)
    safety_notes: str | None = None
    videos: list[str] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime

    @property
    def has_coordinates(self) -> bool:
        return self.latitude is not None and self.longitude is not None


class ToyUpdate(BaseModel):
    """소유자가 수정할 수 있는 필드. None 인 필드는 변경하지 않는다."""

    title: str | None = None
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

    def changed_fields(self) -> dict:
        return self.model_dump(mode="json", exclude_none=True)


class ListToysFilter(BaseModel):
    """장난감 목록 조회 필터 + 페이지네이션."""

    page: int = 1
    page_size: int = 20
    location: str | None = None
    age_range: str | None = None
    condition: str | None = None
    category: str | None = None
    is_available: bool | None = None
    tags: list[str] = Field(default_factory=list)
    search: str | None = None
    user_id: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    distance_miles: float | None = None

    @property
    def has_geo(self) -> bool:
        return self.latitude is not None and self.longitude is not None


class ToyWithDistance(BaseModel):
    toy: Toy
    distance_miles: float | None = None


class ToyCreateInput(BaseModel):
    """새 장난감 등록 입력. 소유자(user_id)는 세션에서 채운다."""

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


EARTH_RADIUS_MILES = 3963.2


def haversine_miles(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """두 좌표 사이의 대원 거리(마일)."""

    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lng2 - lng1)
    a = (
        math.sin(d_phi / 2) ** 2
        + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    )
    return 2 * EARTH_RADIUS_MILES * math.asin(min(1.0, math.sqrt(a)))
