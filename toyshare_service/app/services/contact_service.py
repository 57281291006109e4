from __future__ import annotations

import logging
from datetime import datetime, timezone

from fastapi import Depends

from .dependencies import get_contact_message_repository
from ..exceptions import InvalidRequestError
from ..models.contact_message import ContactMessage
from ..repositories.interfaces import ContactMessageRepositoryInterface


logger = logging.getLogger(__name__)


class ContactService:
    def __init__(self, contact_repo: ContactMessageRepositoryInterface) -> None:
        self._contact_repo = contact_repo

    def submit(self, name: str, email: str, subject: str, message: str) -> ContactMessage:
        if not message.strip():
            raise InvalidRequestError("message must not be blank")

        now = datetime.now(timezone.utc)
        created = self._contact_repo.insert(
            ContactMessage(
                name=name.strip(),
                email=email,
                subject=subject.strip(),
                message=message.strip(),
                created_at=now,
                updated_at=now,
            )
        )
        logger.info("contact message received subject=%s", created.subject)
        return created

    def list_messages(
        self, page: int, page_size: int
    ) -> tuple[list[ContactMessage], int]:
        return self._contact_repo.list(page, page_size)


def get_contact_service(
    contact_repo: ContactMessageRepositoryInterface = Depends(
        get_contact_message_repository
    ),
) -> ContactService:
    return ContactService(contact_repo=contact_repo)
