"""장난감 요청(ToyRequest) 도메인 모델과 상태 전이 규칙.

pending 에서만 approved / rejected 로 바뀔 수 있고, 두 상태 모두 종료 상태다.
"""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, Field

from ..exceptions import InvalidStateTransitionError


class RequestStatus(StrEnum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


ALLOWED_TRANSITIONS: dict[RequestStatus, frozenset[RequestStatus]] = {
    RequestStatus.PENDING: frozenset({RequestStatus.APPROVED, RequestStatus.REJECTED}),
    RequestStatus.APPROVED: frozenset(),
    RequestStatus.REJECTED: frozenset(),
}

# 소유자가 결정(decide)으로 지정할 수 있는 상태
DECISION_STATUSES: frozenset[RequestStatus] = frozenset(
    {RequestStatus.APPROVED, RequestStatus.REJECTED}
)


def can_transition(current: RequestStatus, target: RequestStatus) -> bool:
    return target in ALLOWED_TRANSITIONS[current]


def is_terminal(status: RequestStatus) -> bool:
    return not ALLOWED_TRANSITIONS[status]


def ensure_transition(current: RequestStatus, target: RequestStatus) -> None:
    if not can_transition(current, target):
        raise InvalidStateTransitionError("request", current, target)


class ToyRequest(BaseModel):
    """요청자가 특정 장난감에 대해 보낸 교환 요청."""

    id: str | None = None
    toy_id: str
    requester_id: str
    owner_id: str
    message: str
    status: RequestStatus = RequestStatus.PENDING
    preferred_location: str | None = None
    feedback: str | None = None  # 교환 후 요청자가 남기는 후기
    rating: int | None = Field(default=None, ge=1, le=5)
    created_at: datetime
    updated_at: datetime

    @property
    def has_review(self) -> bool:
        return bool(self.feedback) and self.rating is not None
