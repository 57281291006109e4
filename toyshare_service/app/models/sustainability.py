from __future__ import annotations

from pydantic import BaseModel

from .badge import BadgeProgress


class SustainabilitySummary(BaseModel):
    """유저 한 명의 지속가능성 점수와 배지 진행 상황."""

    user_id: str
    toys_shared: int
    successful_exchanges: int
    score: int
    badge: BadgeProgress
