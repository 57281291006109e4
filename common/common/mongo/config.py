from __future__ import annotations

import os
from dataclasses import dataclass


MONGO_URI_ENV = "MONGO_URI"
MONGO_DB_NAME_ENV = "MONGO_DB_NAME"
MONGO_TIMEOUT_MS_ENV = "MONGO_SERVER_SELECTION_TIMEOUT_MS"

DEFAULT_SERVER_SELECTION_TIMEOUT_MS = 5000


@dataclass(frozen=True, slots=True)
class MongoSettings:
    """MongoClient 생성에 필요한 접속 정보.

    - uri 는 필수이며 비어 있으면 기동 시점에 실패한다.
    - db_name 이 None 이면 URI 에 포함된 기본 DB 를 사용한다.
    """

    uri: str
    db_name: str | None = None
    server_selection_timeout_ms: int = DEFAULT_SERVER_SELECTION_TIMEOUT_MS

    @classmethod
    def from_env(cls) -> "MongoSettings":
        uri = os.getenv(MONGO_URI_ENV, "").strip()
        if not uri:
            raise RuntimeError(
                f"{MONGO_URI_ENV} environment variable is required for MongoDB",
            )

        raw_timeout = os.getenv(MONGO_TIMEOUT_MS_ENV, "").strip()
        try:
            timeout_ms = int(raw_timeout) if raw_timeout else DEFAULT_SERVER_SELECTION_TIMEOUT_MS
        except ValueError as exc:
            raise RuntimeError(
                f"{MONGO_TIMEOUT_MS_ENV} must be an integer (got {raw_timeout!r})",
            ) from exc

        return cls(
            uri=uri,
            db_name=os.getenv(MONGO_DB_NAME_ENV, "").strip() or None,
            server_selection_timeout_ms=timeout_ms,
        )
