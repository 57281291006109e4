from __future__ import annotations

from datetime import datetime, timezone

from pymongo.database import Database

from .documents.auth_session_document import AuthSessionDocument
from .interfaces import AuthSessionRepositoryInterface
from ..models.auth_session import AuthSession


class AuthSessionRepository(AuthSessionRepositoryInterface):
    """sessions 컬렉션에 대한 MongoDB 접근 레이어."""

    def __init__(self, database: Database) -> None:
        self._db = database
        self._col = database["sessions"]

    def create(self, session: AuthSession) -> AuthSession:
        document = AuthSessionDocument.from_domain(session)
        payload = document.to_mongo_record()
        self._col.insert_one(payload)
        return session

    def find_by_token(self, token: str) -> AuthSession | None:
        raw = self._col.find_one({"token": token})
        if not raw:
            return None

        session = AuthSessionDocument.model_validate(raw).to_domain()

        # TTL 인덱스는 지연될 수 있으므로 애플리케이션 레벨에서도 만료를 한 번 더 확인한다.
        now = datetime.now(timezone.utc)
        if session.is_expired(now):
            self._col.delete_one({"token": token})
            return None

        return session

    def delete_by_token(self, token: str) -> bool:
        result = self._col.delete_one({"token": token})
        return result.deleted_count > 0

    def delete_all_by_user(self, user_id: str) -> int:
        result = self._col.delete_many({"user_id": user_id})
        return result.deleted_count
