from __future__ import annotations

from pydantic import BaseModel, Field


class CommunityMetrics(BaseModel):
    """커뮤니티 전체 누적 지표.

    toys_saved / families_connected / waste_reduced_kg 는 저장된 카운터이고,
    total_toys / total_users 는 조회 시점에 컬렉션 크기로 채운다.
    """

    toys_saved: int = 0
    families_connected: int = 0
    waste_reduced_kg: float = 0.0
    total_toys: int = 0
    total_users: int = 0


class CommunityMetricsIncrement(BaseModel):
    toys_saved: int = Field(default=0, ge=0)
    families_connected: int = Field(default=0, ge=0)
    waste_reduced_kg: float = Field(default=0.0, ge=0)

    def is_empty(self) -> bool:
        return not (self.toys_saved or self.families_connected or self.waste_reduced_kg)
