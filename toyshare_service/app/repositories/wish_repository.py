from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Any

from pymongo import ReturnDocument
from pymongo.database import Database

from common.mongo.types import parse_object_id

from .documents.wish_document import WishDocument, WishOfferDocument
from .interfaces import WishOfferRepositoryInterface, WishRepositoryInterface
from ..models.toy import WILDCARD_FILTER_VALUES
from ..models.wish import ListWishesFilter, OfferStatus, Wish, WishOffer, WishStatus


class WishRepository(WishRepositoryInterface):
    """wishes 컬렉션에 대한 MongoDB 접근 레이어."""

    def __init__(self, database: Database) -> None:
        self._db = database
        self._col = database["wishes"]

    @staticmethod
    def _from_document(doc: dict) -> Wish:
        return WishDocument.model_validate(doc).to_domain()

    def insert(self, wish: Wish) -> Wish:
        now = datetime.now(timezone.utc)
        wish.created_at = now
        wish.updated_at = now

        payload = WishDocument.from_domain(wish).to_mongo_record()
        self._col.insert_one(payload)
        return self._from_document(payload)

    def find_by_id(self, wish_id: str) -> Wish | None:
        oid = parse_object_id(wish_id)
        if oid is None:
            return None
        doc = self._col.find_one({"_id": oid})
        if not doc:
            return None
        return self._from_document(doc)

    def list(self, flt: ListWishesFilter) -> tuple[list[Wish], int]:
        page = flt.page if flt.page > 0 else 1
        page_size = flt.page_size if 0 < flt.page_size <= 100 else 20
        skip = (page - 1) * page_size

        query: dict[str, Any] = {"is_public": True, "status": WishStatus.ACTIVE.value}
        for field in ("location", "age_range"):
            value = getattr(flt, field)
            if value and value.strip().lower() not in WILDCARD_FILTER_VALUES:
                query[field] = value.strip()
        if flt.search and flt.search.strip():
            pattern = {"$regex": re.escape(flt.search.strip()), "$options": "i"}
            query["$or"] = [{"title": pattern}, {"description": pattern}]

        total = self._col.count_documents(query)
        cursor = self._col.find(
            query,
            sort=[("created_at", -1), ("_id", -1)],
            skip=skip,
            limit=page_size,
        )
        return [self._from_document(raw) for raw in cursor], total

    def list_by_user(self, user_id: str) -> list[Wish]:
        cursor = self._col.find(
            {"user_id": user_id},
            sort=[("created_at", -1), ("_id", -1)],
        )
        return [self._from_document(raw) for raw in cursor]

    def update_fields(self, wish_id: str, fields: dict[str, Any]) -> Wish | None:
        oid = parse_object_id(wish_id)
        if oid is None:
            return None
        now = datetime.now(timezone.utc)
        result = self._col.find_one_and_update(
            {"_id": oid},
            {"$set": {**fields, "updated_at": now}},
            return_document=ReturnDocument.AFTER,
        )
        if not result:
            return None
        return self._from_document(result)

    def delete(self, wish_id: str) -> bool:
        oid = parse_object_id(wish_id)
        if oid is None:
            return False
        result = self._col.delete_one({"_id": oid})
        return result.deleted_count > 0


class WishOfferRepository(WishOfferRepositoryInterface):
    """wish_offers 컬렉션에 대한 MongoDB 접근 레이어."""

    def __init__(self, database: Database) -> None:
        self._db = database
        self._col = database["wish_offers"]

    @staticmethod
    def _from_document(doc: dict) -> WishOffer:
        return WishOfferDocument.model_validate(doc).to_domain()

    def insert(self, offer: WishOffer) -> WishOffer:
        now = datetime.now(timezone.utc)
        offer.created_at = now
        offer.updated_at = now

        payload = WishOfferDocument.from_domain(offer).to_mongo_record()
        self._col.insert_one(payload)
        return self._from_document(payload)

    def find_by_id(self, offer_id: str) -> WishOffer | None:
        oid = parse_object_id(offer_id)
        if oid is None:
            return None
        doc = self._col.find_one({"_id": oid})
        if not doc:
            return None
        return self._from_document(doc)

    def list_by_wish(self, wish_id: str) -> list[WishOffer]:
        cursor = self._col.find(
            {"wish_id": wish_id},
            sort=[("created_at", -1), ("_id", -1)],
        )
        return [self._from_document(raw) for raw in cursor]

    def has_pending(self, wish_id: str, offerer_id: str) -> bool:
        doc = self._col.find_one(
            {
                "wish_id": wish_id,
                "offerer_id": offerer_id,
                "status": OfferStatus.PENDING.value,
            },
            {"_id": 1},
        )
        return doc is not None

    def update_status_if(
        self,
        offer_id: str,
        expected: OfferStatus,
        target: OfferStatus,
    ) -> WishOffer | None:
        oid = parse_object_id(offer_id)
        if oid is None:
            return None
        now = datetime.now(timezone.utc)
        result = self._col.find_one_and_update(
            {"_id": oid, "status": expected.value},
            {"$set": {"status": target.value, "updated_at": now}},
            return_document=ReturnDocument.AFTER,
        )
        if not result:
            return None
        return self._from_document(result)
