from __future__ import annotations

from pydantic import BaseModel, Field

from common.types.datetime import UtcDateTime

from ...models.toy_request import RequestStatus, ToyRequest


class ToyRequestCreateRequest(BaseModel):
    message: str = ""
    preferred_location: str | None = None


class RequestStatusUpdateRequest(BaseModel):
    status: RequestStatus


class FeedbackRequest(BaseModel):
    feedback: str = Field(min_length=1)
    rating: int = Field(ge=1, le=5)


class ToyRequestResponse(BaseModel):
    id: str
    toy_id: str
    requester_id: str
    owner_id: str
    message: str
    status: str
    preferred_location: str | None
    feedback: str | None
    rating: int | None
    created_at: UtcDateTime
    updated_at: UtcDateTime

    @classmethod
    def from_domain(cls, request: ToyRequest) -> "ToyRequestResponse":
        assert request.id is not None
        return cls(
            id=request.id,
            toy_id=request.toy_id,
            requester_id=request.requester_id,
            owner_id=request.owner_id,
            message=request.message,
            status=request.status,
            preferred_location=request.preferred_location,
            feedback=request.feedback,
            rating=request.rating,
            created_at=request.created_at,
            updated_at=request.updated_at,
        )
