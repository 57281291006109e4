"""위시(원하는 장난감 게시글)와 위시 제안(WishOffer) 도메인 모델."""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, Field

from ..exceptions import InvalidStateTransitionError


class WishStatus(StrEnum):
    ACTIVE = "active"
    FULFILLED = "fulfilled"
    INACTIVE = "inactive"


class OfferStatus(StrEnum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    COMPLETED = "completed"


OFFER_TRANSITIONS: dict[OfferStatus, frozenset[OfferStatus]] = {
    OfferStatus.PENDING: frozenset({OfferStatus.ACCEPTED, OfferStatus.REJECTED}),
    OfferStatus.ACCEPTED: frozenset({OfferStatus.COMPLETED}),
    OfferStatus.REJECTED: frozenset(),
    OfferStatus.COMPLETED: frozenset(),
}


def ensure_offer_transition(current: OfferStatus, target: OfferStatus) -> None:
    if target not in OFFER_TRANSITIONS[current]:
        raise InvalidStateTransitionError("offer", current, target)


class Wish(BaseModel):
    id: str | None = None
    user_id: str
    title: str
    description: str
    age_range: str
    images: list[str] = Field(default_factory=list)
    location: str
    tags: list[str] = Field(default_factory=list)
    status: WishStatus = WishStatus.ACTIVE
    is_public: bool = True
    created_at: datetime
    updated_at: datetime


class WishUpdate(BaseModel):
    title: str | None = None
    description: str | None = None
    age_range: str | None = None
    images: list[str] | None = None
    location: str | None = None
    tags: list[str] | None = None
    status: WishStatus | None = None
    is_public: bool | None = None

    def changed_fields(self) -> dict:
        return self.model_dump(mode="json", exclude_none=True)


class ListWishesFilter(BaseModel):
    page: int = 1
    page_size: int = 20
    location: str | None = None
    age_range: str | None = None
    search: str | None = None


class WishOffer(BaseModel):
    """다른 유저의 위시에 장난감을 주겠다고 제안한 기록."""

    id: str | None = None
    wish_id: str
    offerer_id: str
    toy_id: str | None = None
    message: str
    status: OfferStatus = OfferStatus.PENDING
    created_at: datetime
    updated_at: datetime


class WishCreateInput(BaseModel):
    title: str = Field(min_length=1)
    description: str
    age_range: str
    images: list[str] = Field(default_factory=list)
    location: str
    tags: list[str] = Field(default_factory=list)
    is_public: bool = True
