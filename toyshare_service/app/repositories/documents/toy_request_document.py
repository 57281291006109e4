from __future__ import annotations

from common.mongo.types import BaseDocument, build_document_data_from_domain
from ...models.toy_request import ToyRequest


class ToyRequestDocument(BaseDocument):
    """MongoDB toy_requests 컬렉션 도큐먼트 모델."""

    toy_id: str
    requester_id: str
    owner_id: str
    message: str
    status: str
    preferred_location: str | None = None
    feedback: str | None = None
    rating: int | None = None

    @classmethod
    def from_domain(cls, request: ToyRequest) -> "ToyRequestDocument":
        return cls.model_validate(build_document_data_from_domain(request))

    def to_domain(self) -> ToyRequest:
        return ToyRequest(
            id=self.str_id,
            toy_id=self.toy_id,
            requester_id=self.requester_id,
            owner_id=self.owner_id,
            message=self.message,
            status=self.status,
            preferred_location=self.preferred_location,
            feedback=self.feedback,
            rating=self.rating,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )
