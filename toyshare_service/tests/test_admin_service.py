from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from common.models.user import UserRole
from toyshare_service.app.exceptions import InvalidRequestError, NotFoundError
from toyshare_service.app.models.auth_session import AuthSession
from toyshare_service.app.services.admin_service import AdminService

from toyshare_service.tests.fakes import (
    FakeAuthSessionRepository,
    FakeFavoriteRepository,
    FakeToyRepository,
    FakeUserRepository,
    build_toy,
    build_user,
)


class Env:
    def __init__(self) -> None:
        self.admin = build_user("admin", role=UserRole.ADMIN)
        self.users = FakeUserRepository([self.admin, build_user("alice")])
        self.toys = FakeToyRepository([build_toy("toy-1", user_id="alice")])
        self.favorites = FakeFavoriteRepository()
        self.sessions = FakeAuthSessionRepository()
        self.service = AdminService(
            user_repo=self.users,
            toy_repo=self.toys,
            favorite_repo=self.favorites,
            session_repo=self.sessions,
        )


@pytest.fixture
def env() -> Env:
    return Env()


def test_list_users_and_toys(env: Env) -> None:
    users, total_users = env.service.list_users(1, 20)
    toys, total_toys = env.service.list_toys(1, 20)

    assert total_users == 2
    assert {u.username for u in users} == {"admin", "alice"}
    assert total_toys == 1 and toys[0].id == "toy-1"


def test_admin_cannot_delete_self(env: Env) -> None:
    with pytest.raises(InvalidRequestError):
        env.service.delete_user("admin", env.admin)


def test_delete_user_removes_favorites_and_sessions(env: Env) -> None:
    now = datetime.now(timezone.utc)
    env.favorites.create("alice", "toy-1")
    env.sessions.create(
        AuthSession(
            token="alice-token",
            user_id="alice",
            expires_at=now + timedelta(hours=1),
            created_at=now,
            updated_at=now,
        )
    )

    env.service.delete_user("alice", env.admin)

    assert env.users.find_by_id("alice") is None
    assert env.favorites.list_by_user("alice") == []
    assert env.sessions.sessions == {}
    with pytest.raises(NotFoundError):
        env.service.delete_user("alice", env.admin)


def test_delete_toy(env: Env) -> None:
    env.service.delete_toy("toy-1", env.admin)
    assert env.toys.count() == 0
    with pytest.raises(NotFoundError):
        env.service.delete_toy("toy-1", env.admin)
