from __future__ import annotations

from datetime import datetime, timezone

from pymongo import ReturnDocument
from pymongo.database import Database

from common.mongo.types import parse_object_id

from .documents.toy_request_document import ToyRequestDocument
from .interfaces import ToyRequestRepositoryInterface
from ..models.toy_request import RequestStatus, ToyRequest


class ToyRequestRepository(ToyRequestRepositoryInterface):
    """toy_requests 컬렉션에 대한 MongoDB 접근 레이어."""

    def __init__(self, database: Database) -> None:
        self._db = database
        self._col = database["toy_requests"]

    @staticmethod
    def _from_document(doc: dict) -> ToyRequest:
        return ToyRequestDocument.model_validate(doc).to_domain()

    def _find_many(self, query: dict) -> list[ToyRequest]:
        cursor = self._col.find(query, sort=[("created_at", -1), ("_id", -1)])
        return [self._from_document(raw) for raw in cursor]

    def insert(self, request: ToyRequest) -> ToyRequest:
        now = datetime.now(timezone.utc)
        request.created_at = now
        request.updated_at = now

        payload = ToyRequestDocument.from_domain(request).to_mongo_record()
        self._col.insert_one(payload)
        return self._from_document(payload)

    def find_by_id(self, request_id: str) -> ToyRequest | None:
        oid = parse_object_id(request_id)
        if oid is None:
            return None
        doc = self._col.find_one({"_id": oid})
        if not doc:
            return None
        return self._from_document(doc)

    def list_by_toy(self, toy_id: str) -> list[ToyRequest]:
        return self._find_many({"toy_id": toy_id})

    def list_by_requester(self, requester_id: str) -> list[ToyRequest]:
        return self._find_many({"requester_id": requester_id})

    def list_by_owner(self, owner_id: str) -> list[ToyRequest]:
        return self._find_many({"owner_id": owner_id})

    def has_pending(self, toy_id: str, requester_id: str) -> bool:
        doc = self._col.find_one(
            {
                "toy_id": toy_id,
                "requester_id": requester_id,
                "status": RequestStatus.PENDING.value,
            },
            {"_id": 1},
        )
        return doc is not None

    def update_status_if(
        self,
        request_id: str,
        expected: RequestStatus,
        target: RequestStatus,
    ) -> ToyRequest | None:
        oid = parse_object_id(request_id)
        if oid is None:
            return None
        now = datetime.now(timezone.utc)
        # status 조건을 필터에 넣어 동시에 들어온 결정 중 하나만 반영되게 한다.
        result = self._col.find_one_and_update(
            {"_id": oid, "status": expected.value},
            {"$set": {"status": target.value, "updated_at": now}},
            return_document=ReturnDocument.AFTER,
        )
        if not result:
            return None
        return self._from_document(result)

    def set_feedback_if_absent(
        self, request_id: str, feedback: str, rating: int
    ) -> ToyRequest | None:
        oid = parse_object_id(request_id)
        if oid is None:
            return None
        now = datetime.now(timezone.utc)
        result = self._col.find_one_and_update(
            {
                "_id": oid,
                "status": RequestStatus.APPROVED.value,
                "feedback": None,
            },
            {"$set": {"feedback": feedback, "rating": rating, "updated_at": now}},
            return_document=ReturnDocument.AFTER,
        )
        if not result:
            return None
        return self._from_document(result)

    def list_reviews_for_owner(self, owner_id: str) -> list[ToyRequest]:
        return self._find_many(
            {
                "owner_id": owner_id,
                "status": RequestStatus.APPROVED.value,
                "feedback": {"$nin": [None, ""]},
                "rating": {"$ne": None},
            }
        )

    def reject_pending_for_toy(self, toy_id: str, except_request_id: str) -> int:
        except_oid = parse_object_id(except_request_id)
        query: dict = {"toy_id": toy_id, "status": RequestStatus.PENDING.value}
        if except_oid is not None:
            query["_id"] = {"$ne": except_oid}
        result = self._col.update_many(
            query,
            {
                "$set": {
                    "status": RequestStatus.REJECTED.value,
                    "updated_at": datetime.now(timezone.utc),
                }
            },
        )
        return result.modified_count
