from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Any

from pymongo import ReturnDocument
from pymongo.database import Database

from common.mongo.types import parse_object_id

from .documents.toy_document import GeoPoint, ToyDocument
from .interfaces import ToyRepositoryInterface
from ..models.toy import (
    EARTH_RADIUS_MILES,
    WILDCARD_FILTER_VALUES,
    ListToysFilter,
    Toy,
    ToyStatus,
)


EXACT_MATCH_FIELDS: tuple[str, ...] = ("location", "age_range", "condition", "category")


def _is_wildcard(value: str | None) -> bool:
    return value is None or value.strip().lower() in WILDCARD_FILTER_VALUES


def build_toy_query(flt: ListToysFilter) -> dict[str, Any]:
    """ListToysFilter 를 toys 컬렉션 find 조건으로 변환한다."""

    query: dict[str, Any] = {}

    for field in EXACT_MATCH_FIELDS:
        value = getattr(flt, field)
        if not _is_wildcard(value):
            query[field] = value.strip()

    if flt.is_available is not None:
        query["is_available"] = flt.is_available

    if flt.user_id:
        query["user_id"] = flt.user_id

    tags = [t.strip() for t in flt.tags if not _is_wildcard(t)]
    if tags:
        query["tags"] = {"$in": tags}

    if flt.search and flt.search.strip():
        pattern = {"$regex": re.escape(flt.search.strip()), "$options": "i"}
        query["$or"] = [
            {"title": pattern},
            {"description": pattern},
            {"tags": pattern},
        ]

    # $centerSphere 반경은 라디안 단위다.
    if flt.has_geo and flt.distance_miles is not None:
        query["geo"] = {
            "$geoWithin": {
                "$centerSphere": [
                    [flt.longitude, flt.latitude],
                    flt.distance_miles / EARTH_RADIUS_MILES,
                ]
            }
        }

    return query


class ToyRepository(ToyRepositoryInterface):
    """toys 컬렉션에 대한 MongoDB 접근 레이어."""

    def __init__(self, database: Database) -> None:
        self._db = database
        self._col = database["toys"]

    @staticmethod
    def _from_document(doc: dict) -> Toy:
        return ToyDocument.model_validate(doc).to_domain()

    def insert(self, toy: Toy) -> Toy:
        now = datetime.now(timezone.utc)
        toy.created_at = now
        toy.updated_at = now

        payload = ToyDocument.from_domain(toy).to_mongo_record()
        self._col.insert_one(payload)
        return self._from_document(payload)

    def find_by_id(self, toy_id: str) -> Toy | None:
        oid = parse_object_id(toy_id)
        if oid is None:
            return None
        doc = self._col.find_one({"_id": oid})
        if not doc:
            return None
        return self._from_document(doc)

    def list(self, flt: ListToysFilter) -> tuple[list[Toy], int]:
        page = flt.page if flt.page > 0 else 1
        page_size = flt.page_size if 0 < flt.page_size <= 100 else 20
        skip = (page - 1) * page_size

        query = build_toy_query(flt)
        total = self._col.count_documents(query)
        cursor = self._col.find(
            query,
            sort=[("created_at", -1), ("_id", -1)],
            skip=skip,
            limit=page_size,
        )
        return [self._from_document(raw) for raw in cursor], total

    def list_by_user(self, user_id: str) -> list[Toy]:
        cursor = self._col.find(
            {"user_id": user_id},
            sort=[("created_at", -1), ("_id", -1)],
        )
        return [self._from_document(raw) for raw in cursor]

    def update_fields(self, toy_id: str, fields: dict[str, Any]) -> Toy | None:
        oid = parse_object_id(toy_id)
        if oid is None:
            return None

        now = datetime.now(timezone.utc)
        update: dict[str, Any] = {"$set": {**fields, "updated_at": now}}

        if "latitude" in fields or "longitude" in fields:
            current = self._col.find_one({"_id": oid}, {"latitude": 1, "longitude": 1})
            if not current:
                return None
            latitude = fields.get("latitude", current.get("latitude"))
            longitude = fields.get("longitude", current.get("longitude"))
            if latitude is not None and longitude is not None:
                geo = GeoPoint.from_lat_lng(latitude, longitude)
                update["$set"]["geo"] = geo.model_dump()
            else:
                update["$unset"] = {"geo": ""}

        result = self._col.find_one_and_update(
            {"_id": oid},
            update,
            return_document=ReturnDocument.AFTER,
        )
        if not result:
            return None
        return self._from_document(result)

    def mark_traded(self, toy_id: str) -> Toy | None:
        oid = parse_object_id(toy_id)
        if oid is None:
            return None
        now = datetime.now(timezone.utc)
        # 아직 교환 가능한 장난감만 traded 로 바꾼다. 이미 거래됐거나 삭제됐으면 None.
        result = self._col.find_one_and_update(
            {
                "_id": oid,
                "is_available": True,
                "status": {"$ne": ToyStatus.TRADED.value},
            },
            {
                "$set": {
                    "is_available": False,
                    "status": ToyStatus.TRADED.value,
                    "updated_at": now,
                }
            },
            return_document=ReturnDocument.AFTER,
        )
        if not result:
            return None
        return self._from_document(result)

    def delete(self, toy_id: str) -> bool:
        oid = parse_object_id(toy_id)
        if oid is None:
            return False
        result = self._col.delete_one({"_id": oid})
        return result.deleted_count > 0

    def count(self) -> int:
        return self._col.count_documents({})
