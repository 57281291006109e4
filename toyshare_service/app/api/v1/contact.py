from __future__ import annotations

from fastapi import APIRouter, Depends, status

from ..schemas.contact import ContactRequest, ContactSubmitResponse
from ...services.contact_service import ContactService, get_contact_service


router = APIRouter()


@router.post(
    "",
    response_model=ContactSubmitResponse,
    status_code=status.HTTP_201_CREATED,
    summary="고객지원 문의 (비로그인 허용)",
)
async def submit_contact(
    body: ContactRequest,
    service: ContactService = Depends(get_contact_service),
) -> ContactSubmitResponse:
    created = service.submit(body.name, str(body.email), body.subject, body.message)
    assert created.id is not None
    return ContactSubmitResponse(
        success=True,
        message="Your message has been sent. We'll get back to you soon.",
        id=created.id,
    )
