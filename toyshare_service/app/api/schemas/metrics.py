from __future__ import annotations

from pydantic import BaseModel, Field


class CommunityMetricsResponse(BaseModel):
    toys_saved: int
    families_connected: int
    waste_reduced_kg: float
    total_toys: int
    total_users: int


class CommunityMetricsIncrementRequest(BaseModel):
    toys_saved: int = Field(default=0, ge=0)
    families_connected: int = Field(default=0, ge=0)
    waste_reduced_kg: float = Field(default=0.0, ge=0)
