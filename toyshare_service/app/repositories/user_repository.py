from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from pymongo import ReturnDocument
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError

from common.models.user import User
from common.mongo.types import parse_object_id

from .documents.user_document import UserDocument
from .interfaces import UserRepositoryInterface
from ..exceptions import ConflictError


class UserRepository(UserRepositoryInterface):
    """users 컬렉션에 대한 MongoDB 접근 레이어."""

    def __init__(self, database: Database) -> None:
        self._db = database
        self._col = database["users"]

    @staticmethod
    def _from_document(doc: dict) -> User:
        document = UserDocument.model_validate(doc)
        return document.to_domain()

    def insert(self, user: User) -> User:
        now = datetime.now(timezone.utc)
        user.created_at = now
        user.updated_at = now

        document = UserDocument.from_domain(user)
        payload = document.to_mongo_record()
        try:
            self._col.insert_one(payload)
        except DuplicateKeyError as exc:
            # 서비스의 사전 검사와 insert 사이에 같은 username/email 이 들어온 경우
            raise ConflictError("username or email already exists") from exc
        return self._from_document(payload)

    def find_by_id(self, user_id: str) -> User | None:
        oid = parse_object_id(user_id)
        if oid is None:
            return None
        doc = self._col.find_one({"_id": oid})
        if not doc:
            return None
        return self._from_document(doc)

    def find_by_username(self, username: str) -> User | None:
        doc = self._col.find_one({"username": username})
        if not doc:
            return None
        return self._from_document(doc)

    def find_by_email(self, email: str) -> User | None:
        doc = self._col.find_one({"email": email})
        if not doc:
            return None
        return self._from_document(doc)

    def update_profile(self, user_id: str, fields: dict[str, Any]) -> User | None:
        oid = parse_object_id(user_id)
        if oid is None:
            return None
        now = datetime.now(timezone.utc)
        try:
            result = self._col.find_one_and_update(
                {"_id": oid},
                {"$set": {**fields, "updated_at": now}},
                return_document=ReturnDocument.AFTER,
            )
        except DuplicateKeyError as exc:
            raise ConflictError("username or email already exists") from exc
        if not result:
            return None
        return self._from_document(result)

    def increment_contributions(
        self, user_id: str, toys_shared: int, exchanges: int
    ) -> User | None:
        oid = parse_object_id(user_id)
        if oid is None:
            return None
        now = datetime.now(timezone.utc)
        result = self._col.find_one_and_update(
            {"_id": oid},
            {
                "$inc": {
                    "toys_shared": toys_shared,
                    "successful_exchanges": exchanges,
                },
                "$set": {"updated_at": now},
            },
            return_document=ReturnDocument.AFTER,
        )
        if not result:
            return None
        return self._from_document(result)

    def set_sustainability(self, user_id: str, score: int, badge: str) -> User | None:
        oid = parse_object_id(user_id)
        if oid is None:
            return None
        now = datetime.now(timezone.utc)
        # 점수는 줄어들지 않는다. 더 큰 점수가 이미 기록돼 있으면 그 값을 유지한다.
        result = self._col.find_one_and_update(
            {"_id": oid, "sustainability_score": {"$lte": score}},
            {
                "$set": {
                    "sustainability_score": score,
                    "current_badge": badge,
                    "updated_at": now,
                },
            },
            return_document=ReturnDocument.AFTER,
        )
        if not result:
            return self.find_by_id(user_id)
        return self._from_document(result)

    def delete(self, user_id: str) -> bool:
        """user_id 기준으로 유저 도큐먼트를 삭제한다.

        - 삭제된 도큐먼트가 있으면 True, 없으면 False 를 반환한다.
        """

        oid = parse_object_id(user_id)
        if oid is None:
            return False
        result = self._col.delete_one({"_id": oid})
        return result.deleted_count > 0

    def list(self, page: int, page_size: int) -> tuple[list[User], int]:
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
        return [self._from_document(raw) for raw in cursor], total

    def count(self) -> int:
        return self._col.count_documents({})
