from __future__ import annotations

from common.mongo.types import BaseDocument, build_document_data_from_domain
from ...models.wish import Wish, WishOffer


class WishDocument(BaseDocument):
    """MongoDB wishes 컬렉션 도큐먼트 모델."""

    user_id: str
    title: str
    description: str
    age_range: str
    images: list[str] = []
    location: str
    tags: list[str] = []
    status: str
    is_public: bool = True

    @classmethod
    def from_domain(cls, wish: Wish) -> "WishDocument":
        return cls.model_validate(build_document_data_from_domain(wish))

    def to_domain(self) -> Wish:
        return Wish(
            id=self.str_id,
            user_id=self.user_id,
            title=self.title,
            description=self.description,
            age_range=self.age_range,
            images=list(self.images),
            location=self.location,
            tags=list(self.tags),
            status=self.status,
            is_public=self.is_public,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )


class WishOfferDocument(BaseDocument):
    """MongoDB wish_offers 컬렉션 도큐먼트 모델."""

    wish_id: str
    offerer_id: str
    toy_id: str | None = None
    message: str
    status: str

    @classmethod
    def from_domain(cls, offer: WishOffer) -> "WishOfferDocument":
        return cls.model_validate(build_document_data_from_domain(offer))

    def to_domain(self) -> WishOffer:
        return WishOffer(
            id=self.str_id,
            wish_id=self.wish_id,
            offerer_id=self.offerer_id,
            toy_id=self.toy_id,
            message=self.message,
            status=self.status,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )
