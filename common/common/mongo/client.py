from __future__ import annotations

import logging
import threading
from typing import Optional, cast

from pymongo import ASCENDING, DESCENDING, GEOSPHERE, IndexModel, MongoClient
from pymongo.database import Database

from .config import MongoSettings


logger = logging.getLogger(__name__)


_client: Optional[MongoClient] = None
_db: Optional[Database] = None
_lock = threading.Lock()


def get_client() -> MongoClient:
    """전역 MongoClient 싱글톤을 반환한다.

    - MONGO_URI 에서 URI 를 읽어온다.
    - ping 으로 연결을 검증한다.
    - MONGO_DB_NAME 도, URI 의 기본 데이터베이스도 없으면 에러를 발생시킨다.
    - ToyShare 컬렉션들의 인덱스를 한 번만 생성한다.
    """

    global _client, _db

    if _client is not None:
        return _client

    with _lock:
        if _client is not None:
            return _client

        settings = MongoSettings.from_env()
        client: MongoClient = MongoClient(
            settings.uri,
            tz_aware=True,
            serverSelectionTimeoutMS=settings.server_selection_timeout_ms,
        )

        try:
            client.admin.command("ping")
        except Exception as exc:  # noqa: BLE001
            client.close()
            raise RuntimeError(f"failed to connect to MongoDB: {exc}") from exc

        db_name = settings.db_name
        try:
            if db_name:
                db = client[db_name]
            else:
                db = client.get_default_database()
        except Exception as exc:  # noqa: BLE001
            client.close()
            raise RuntimeError(
                "MongoDB database name must be specified via MONGO_DB_NAME or in MONGO_URI (mongodb://.../db_name)",
            ) from exc

        try:
            ensure_indexes(db)
        except Exception as exc:  # noqa: BLE001
            # 인덱스 생성 실패는 치명적 오류로 간주한다.
            logger.error("failed to ensure MongoDB indexes: %s", exc)
            client.close()
            raise

        _client = client
        _db = db

        safe_db = cast(Database, _db)
        logger.info("MongoDB connected and indexes ensured (db=%s)", safe_db.name)
        return _client


def get_database() -> Database:
    """전역 기본 Database 객체를 반환한다. FastAPI Depends 로도 사용한다."""

    if _db is None:
        get_client()
    assert _db is not None  # get_client 가 실패했다면 예외가 이미 발생했어야 한다.
    return _db


def close_client() -> None:
    """애플리케이션 종료 시 커넥션 풀을 정리한다."""

    global _client, _db

    with _lock:
        if _client is not None:
            _client.close()
            logger.info("MongoDB client closed")
        _client = None
        _db = None


def ensure_indexes(db: Database) -> None:
    """필수 인덱스를 생성한다.

    중복 생성해도 MongoDB 가 처리하므로 idempotent 하다.
    """

    db["users"].create_indexes(
        [
            IndexModel([("username", ASCENDING)], name="uniq_username", unique=True),
            IndexModel([("email", ASCENDING)], name="uniq_email", unique=True),
        ]
    )

    db["toys"].create_indexes(
        [
            IndexModel([("user_id", ASCENDING)], name="idx_user_id"),
            IndexModel(
                [("created_at", DESCENDING), ("_id", DESCENDING)],
                name="idx_created_at_id_desc",
            ),
            # 좌표가 없는 장난감은 geo 필드 자체를 저장하지 않는다.
            IndexModel([("geo", GEOSPHERE)], name="idx_geo"),
        ]
    )

    db["toy_requests"].create_indexes(
        [
            IndexModel(
                [("toy_id", ASCENDING), ("requester_id", ASCENDING), ("status", ASCENDING)],
                name="idx_toy_requester_status",
            ),
            IndexModel([("owner_id", ASCENDING)], name="idx_owner_id"),
            IndexModel([("requester_id", ASCENDING)], name="idx_requester_id"),
        ]
    )

    db["favorites"].create_indexes(
        [
            IndexModel(
                [("user_id", ASCENDING), ("toy_id", ASCENDING)],
                name="uniq_user_toy",
                unique=True,
            )
        ]
    )

    db["messages"].create_indexes(
        [
            IndexModel(
                [("sender_id", ASCENDING), ("receiver_id", ASCENDING)],
                name="idx_sender_receiver",
            ),
            IndexModel(
                [("receiver_id", ASCENDING), ("read", ASCENDING)],
                name="idx_receiver_read",
            ),
        ]
    )

    db["sessions"].create_indexes(
        [
            IndexModel([("token", ASCENDING)], name="uniq_token", unique=True),
            IndexModel(
                [("expires_at", ASCENDING)],
                name="ttl_expires_at",
                expireAfterSeconds=0,
            ),
        ]
    )

    db["wishes"].create_indexes(
        [IndexModel([("user_id", ASCENDING)], name="idx_user_id")]
    )
    db["wish_offers"].create_indexes(
        [IndexModel([("wish_id", ASCENDING)], name="idx_wish_id")]
    )
    db["reports"].create_indexes(
        [
            IndexModel(
                [("status", ASCENDING), ("created_at", DESCENDING)],
                name="idx_status_created_at",
            )
        ]
    )
