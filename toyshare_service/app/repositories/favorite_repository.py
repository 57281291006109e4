from __future__ import annotations

from datetime import datetime, timezone

from pymongo.database import Database

from .documents.favorite_document import FavoriteDocument
from .interfaces import FavoriteRepositoryInterface
from ..models.favorite import Favorite


class FavoriteRepository(FavoriteRepositoryInterface):
    """favorites 컬렉션에 대한 MongoDB 접근 레이어."""

    def __init__(self, database: Database) -> None:
        self._db = database
        self._col = database["favorites"]

    def create(self, user_id: str, toy_id: str) -> Favorite:
        now = datetime.now(timezone.utc)
        doc = FavoriteDocument.from_domain(
            Favorite(user_id=user_id, toy_id=toy_id, created_at=now)
        )
        payload = doc.to_mongo_record()
        self._col.update_one(
            {"user_id": user_id, "toy_id": toy_id},
            {"$setOnInsert": payload},
            upsert=True,
        )
        # 이미 존재하던 경우에도 일단 현재 값을 다시 읽어온다.
        found = self._col.find_one({"user_id": user_id, "toy_id": toy_id})
        assert found is not None
        return FavoriteDocument.model_validate(found).to_domain()

    def find(self, user_id: str, toy_id: str) -> Favorite | None:
        found = self._col.find_one({"user_id": user_id, "toy_id": toy_id})
        if not found:
            return None
        return FavoriteDocument.model_validate(found).to_domain()

    def delete(self, user_id: str, toy_id: str) -> bool:
        result = self._col.delete_one({"user_id": user_id, "toy_id": toy_id})
        return result.deleted_count > 0

    def list_by_user(self, user_id: str) -> list[Favorite]:
        cursor = self._col.find(
            {"user_id": user_id},
            sort=[("created_at", -1), ("_id", -1)],
        )
        return [FavoriteDocument.model_validate(raw).to_domain() for raw in cursor]

    def delete_all_by_user(self, user_id: str) -> int:
        result = self._col.delete_many({"user_id": user_id})
        return result.deleted_count
