"""지속가능성 배지 단계 계산.

누적 점수(sustainability_score)로부터 현재 배지와 다음 배지까지의 진행률을 구한다.
입력 외의 상태를 읽거나 쓰지 않는 순수 계산이며, 같은 점수는 항상 같은 배지를 돌려준다.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, model_validator


class BadgeTier(BaseModel):
    """배지 단계 하나. min_score 이상이면 해당 배지를 받는다."""

    name: str
    min_score: int = Field(ge=0)
    icon: str = ""


class BadgeProgress(BaseModel):
    """점수 하나에 대한 배지 계산 결과."""

    score: int
    current: BadgeTier
    next: BadgeTier | None
    progress_percent: float
    points_to_next: int  # 최고 단계이면 0
    is_terminal: bool


class BadgeTable(BaseModel):
    """min_score 오름차순으로 정렬된 배지 단계 목록."""

    tiers: list[BadgeTier]

    @model_validator(mode="after")
    def _validate_tiers(self) -> "BadgeTable":
        if not self.tiers:
            raise ValueError("badge table must contain at least one tier")
        for prev, cur in zip(self.tiers, self.tiers[1:]):
            if cur.min_score < prev.min_score:
                raise ValueError(
                    f"badge tiers must be sorted by min_score: "
                    f"{prev.name}({prev.min_score}) > {cur.name}({cur.min_score})"
                )
        return self

    def badge_for(self, score: int) -> BadgeTier:
        """min_score <= score 인 단계 중 가장 높은 단계를 반환한다.

        점수가 가장 낮은 단계의 min_score 보다도 낮으면 첫 단계를 반환한다.
        """

        if score < 0:
            raise ValueError(f"score must be >= 0 (got {score})")

        current = self.tiers[0]
        for tier in self.tiers:
            if tier.min_score > score:
                break
            current = tier
        return current

    def _index_of(self, tier: BadgeTier) -> int:
        # 같은 이름/점수의 단계가 중복될 수 있으므로 동일 객체를 먼저 찾는다.
        for idx, candidate in enumerate(self.tiers):
            if candidate is tier:
                return idx
        return self.tiers.index(tier)

    def next_tier(self, tier: BadgeTier) -> BadgeTier | None:
        idx = self._index_of(tier)
        if idx + 1 >= len(self.tiers):
            return None
        return self.tiers[idx + 1]

    def is_terminal(self, tier: BadgeTier) -> bool:
        return self.next_tier(tier) is None

    def find(self, name: str) -> BadgeTier | None:
        for tier in self.tiers:
            if tier.name == name:
                return tier
        return None

    def progress_for(self, score: int) -> BadgeProgress:
        current = self.badge_for(score)
        nxt = self.next_tier(current)

        if nxt is None:
            return BadgeProgress(
                score=score,
                current=current,
                next=None,
                progress_percent=100.0,
                points_to_next=0,
                is_terminal=True,
            )

        span = nxt.min_score - current.min_score
        if span <= 0:
            # 같은 min_score 가 연속된 테이블: 0 나누기 대신 100% 로 본다.
            percent = 100.0
        else:
            percent = (score - current.min_score) / span * 100
            percent = min(max(percent, 0.0), 100.0)

        return BadgeProgress(
            score=score,
            current=current,
            next=nxt,
            progress_percent=percent,
            points_to_next=max(nxt.min_score - score, 0),
            is_terminal=False,
        )


DEFAULT_BADGE_TABLE = BadgeTable(
    tiers=[
        BadgeTier(name="Newcomer", min_score=0, icon="🌱"),
        BadgeTier(name="Eco Friend", min_score=10, icon="🌿"),
        BadgeTier(name="Sustainability Hero", min_score=25, icon="🌊"),
        BadgeTier(name="Earth Guardian", min_score=50, icon="🌍"),
        BadgeTier(name="Planet Protector", min_score=100, icon="⭐"),
    ]
)
