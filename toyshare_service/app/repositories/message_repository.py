from __future__ import annotations

from datetime import datetime, timezone

from pymongo import ReturnDocument
from pymongo.database import Database

from common.mongo.types import parse_object_id

from .documents.message_document import MessageDocument
from .interfaces import MessageRepositoryInterface
from ..models.message import Message


def _conversation_query(user_id: str, other_user_id: str) -> dict:
    return {
        "$or": [
            {"sender_id": user_id, "receiver_id": other_user_id},
            {"sender_id": other_user_id, "receiver_id": user_id},
        ]
    }


class MessageRepository(MessageRepositoryInterface):
    """messages 컬렉션에 대한 MongoDB 접근 레이어."""

    def __init__(self, database: Database) -> None:
        self._db = database
        self._col = database["messages"]

    @staticmethod
    def _from_document(doc: dict) -> Message:
        return MessageDocument.model_validate(doc).to_domain()

    def insert(self, message: Message) -> Message:
        now = datetime.now(timezone.utc)
        message.created_at = now
        message.updated_at = now

        payload = MessageDocument.from_domain(message).to_mongo_record()
        self._col.insert_one(payload)
        return self._from_document(payload)

    def find_by_id(self, message_id: str) -> Message | None:
        oid = parse_object_id(message_id)
        if oid is None:
            return None
        doc = self._col.find_one({"_id": oid})
        if not doc:
            return None
        return self._from_document(doc)

    def list_by_user(self, user_id: str) -> list[Message]:
        cursor = self._col.find(
            {"$or": [{"sender_id": user_id}, {"receiver_id": user_id}]},
            sort=[("created_at", -1), ("_id", -1)],
        )
        return [self._from_document(raw) for raw in cursor]

    def list_between(self, user_id: str, other_user_id: str) -> list[Message]:
        cursor = self._col.find(
            _conversation_query(user_id, other_user_id),
            sort=[("created_at", 1), ("_id", 1)],
        )
        return [self._from_document(raw) for raw in cursor]

    def mark_read(self, message_id: str) -> Message | None:
        oid = parse_object_id(message_id)
        if oid is None:
            return None
        now = datetime.now(timezone.utc)
        result = self._col.find_one_and_update(
            {"_id": oid},
            {"$set": {"read": True, "updated_at": now}},
            return_document=ReturnDocument.AFTER,
        )
        if not result:
            return None
        return self._from_document(result)

    def delete(self, message_id: str) -> bool:
        oid = parse_object_id(message_id)
        if oid is None:
            return False
        result = self._col.delete_one({"_id": oid})
        return result.deleted_count > 0

    def delete_conversation(self, user_id: str, other_user_id: str) -> int:
        result = self._col.delete_many(_conversation_query(user_id, other_user_id))
        return result.deleted_count

    def count_unread(self, receiver_id: str) -> int:
        return self._col.count_documents({"receiver_id": receiver_id, "read": False})
