from __future__ import annotations

from pydantic import BaseModel, Field

from common.types.datetime import UtcDateTime

from ...models.wish import OfferStatus, Wish, WishOffer, WishStatus


class WishCreateRequest(BaseModel):
    title: str = Field(min_length=1)
    description: str
    age_range: str
    images: list[str] = Field(default_factory=list)
    location: str
    tags: list[str] = Field(default_factory=list)
    is_public: bool = True


class WishUpdateRequest(BaseModel):
    title: str | None = Field(default=None, min_length=1)
    description: str | None = None
    age_range: str | None = None
    images: list[str] | None = None
    location: str | None = None
    tags: list[str] | None = None
    status: WishStatus | None = None
    is_public: bool | None = None


class WishResponse(BaseModel):
    id: str
    user_id: str
    title: str
    description: str
    age_range: str
    images: list[str]
    location: str
    tags: list[str]
    status: str
    is_public: bool
    created_at: UtcDateTime
    updated_at: UtcDateTime

    @classmethod
    def from_domain(cls, wish: Wish) -> "WishResponse":
        assert wish.id is not None
        return cls(
            id=wish.id,
            user_id=wish.user_id,
            title=wish.title,
            description=wish.description,
            age_range=wish.age_range,
            images=wish.images,
            location=wish.location,
            tags=wish.tags,
            status=wish.status,
            is_public=wish.is_public,
            created_at=wish.created_at,
            updated_at=wish.updated_at,
        )


class WishOfferCreateRequest(BaseModel):
    message: str = ""
    toy_id: str | None = None


class WishOfferStatusUpdateRequest(BaseModel):
    status: OfferStatus


class WishOfferResponse(BaseModel):
    id: str
    wish_id: str
    offerer_id: str
    toy_id: str | None
    message: str
    status: str
    created_at: UtcDateTime

    @classmethod
    def from_domain(cls, offer: WishOffer) -> "WishOfferResponse":
        assert offer.id is not None
        return cls(
            id=offer.id,
            wish_id=offer.wish_id,
            offerer_id=offer.offerer_id,
            toy_id=offer.toy_id,
            message=offer.message,
            status=offer.status,
            created_at=offer.created_at,
        )
