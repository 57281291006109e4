from __future__ import annotations

from datetime import datetime, timezone

from pymongo.database import Database

from .documents.contact_message_document import ContactMessageDocument
from .interfaces import ContactMessageRepositoryInterface
from ..models.contact_message import ContactMessage


class ContactMessageRepository(ContactMessageRepositoryInterface):
    """contact_messages 컬렉션에 대한 MongoDB 접근 레이어."""

    def __init__(self, database: Database) -> None:
        self._db = database
        self._col = database["contact_messages"]

    def insert(self, contact: ContactMessage) -> ContactMessage:
        now = datetime.now(timezone.utc)
        contact.created_at = now
        contact.updated_at = now

        payload = ContactMessageDocument.from_domain(contact).to_mongo_record()
        self._col.insert_one(payload)
        return ContactMessageDocument.model_validate(payload).to_domain()

    def list(self, page: int, page_size: int) -> tuple[list[ContactMessage], int]:
        if page <= 0:
            page = 1
        if page_size <= 0 or page_size > 100:
            page_size = 20

        skip = (page - 1) * page_size
        total = self._col.count_documents({})
        cursor = self._col.find(
            {},
            sort=[("created_at", -1), ("_id", -1)],
            skip=skip,
            limit=page_size,
        )
        items = [ContactMessageDocument.model_validate(raw).to_domain() for raw in cursor]
        return items, total
