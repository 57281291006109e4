"""FastAPI 라우터 통합 테스트.

서비스 팩토리를 dependency_overrides 로 바꿔 끼워 Mongo 없이 HTTP 계층을 검증한다.
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from toyshare_service.app.config import AuthConfig, ListingsConfig, SustainabilityConfig
from toyshare_service.app.main import app
from toyshare_service.app.services.admin_service import AdminService, get_admin_service
from toyshare_service.app.services.auth_service import AuthService, get_auth_service
from toyshare_service.app.services.contact_service import ContactService, get_contact_service
from toyshare_service.app.services.favorites_service import (
    FavoritesService,
    get_favorites_service,
)
from toyshare_service.app.services.reports_service import ReportsService, get_reports_service
from toyshare_service.app.services.sustainability_service import SustainabilityService
from toyshare_service.app.services.toy_requests_service import (
    ToyRequestsService,
    get_toy_requests_service,
)
from toyshare_service.app.services.toys_service import ToysService, get_toys_service

from toyshare_service.tests.fakes import (
    FakeAuthSessionRepository,
    FakeCommunityMetricsRepository,
    FakeContactMessageRepository,
    FakeFavoriteRepository,
    FakeMessageRepository,
    FakeReportRepository,
    FakeToyRepository,
    FakeToyRequestRepository,
    FakeUserRepository,
)


class Backend:
    def __init__(self) -> None:
        self.users = FakeUserRepository()
        self.sessions = FakeAuthSessionRepository()
        self.toys = FakeToyRepository()
        self.requests = FakeToyRequestRepository()
        self.favorites = FakeFavoriteRepository()
        self.metrics = FakeCommunityMetricsRepository()
        self.contacts = FakeContactMessageRepository()
        self.messages = FakeMessageRepository()
        self.reports = FakeReportRepository()

        sustainability = SustainabilityService(
            user_repo=self.users, config=SustainabilityConfig()
        )
        self.auth = AuthService(
            user_repo=self.users,
            session_repo=self.sessions,
            config=AuthConfig(admin_usernames=["admin"]),
        )
        self.toys_service = ToysService(
            toy_repo=self.toys,
            metrics_repo=self.metrics,
            sustainability=sustainability,
            config=ListingsConfig(),
        )
        self.requests_service = ToyRequestsService(
            request_repo=self.requests,
            toy_repo=self.toys,
            metrics_repo=self.metrics,
            sustainability=sustainability,
        )
        self.favorites_service = FavoritesService(
            favorite_repo=self.favorites, toy_repo=self.toys
        )
        self.contact_service = ContactService(contact_repo=self.contacts)
        self.admin_service = AdminService(
            user_repo=self.users,
            toy_repo=self.toys,
            favorite_repo=self.favorites,
            session_repo=self.sessions,
        )
        self.reports_service = ReportsService(
            report_repo=self.reports,
            user_repo=self.users,
            toy_repo=self.toys,
            message_repo=self.messages,
        )

@pytest.fixture
def backend():
    backend = Backend()
    app.dependency_overrides[get_auth_service] = lambda: backend.auth
    app.dependency_overrides[get_toys_service] = lambda: backend.toys_service
    app.dependency_overrides[get_toy_requests_service] = lambda: backend.requests_service
    app.dependency_overrides[get_favorites_service] = lambda: backend.favorites_service
    app.dependency_overrides[get_contact_service] = lambda: backend.contact_service
    app.dependency_overrides[get_admin_service] = lambda: backend.admin_service
    app.dependency_overrides[get_reports_service] = lambda: backend.reports_service
    yield backend
    app.dependency_overrides.clear()


@pytest.fixture
def client(backend: Backend) -> TestClient:
    return TestClient(app)


def _register(client: TestClient, username: str) -> dict[str, str]:
    resp = client.post(
        "/api/register",
        json={
            "username": username,
            "email": f"{username}@example.com",
            "password": "s3cret-pass",
            "name": username.title(),
            "location": "Portland, OR",
        },
    )
    assert resp.status_code == 201, resp.text
    return {"Authorization": f"Bearer {resp.json()['token']}"}


def _create_toy(client: TestClient, headers: dict[str, str]) -> str:
    resp = client.post(
        "/api/toys",
        headers=headers,
        json={
            "title": "Lego Duplo bucket",
            "description": "Big blocks for toddlers",
            "age_range": "1-3",
            "condition": "Like New",
            "location": "Portland, OR",
            "latitude": 45.5152,
            "longitude": -122.6784,
            "tags": ["lego"],
        },
    )
    assert resp.status_code == 201, resp.text
    return resp.json()["id"]


def test_health(client: TestClient) -> None:
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_session_cookie_and_current_user(client: TestClient) -> None:
    _register(client, "maria")

    # TestClient 는 set-cookie 를 저장하므로 헤더 없이도 세션이 유지된다.
    me = client.get("/api/user")
    assert me.status_code == 200
    assert me.json()["username"] == "maria"
    assert "password_hash" not in me.json()

    client.post("/api/logout")
    assert client.get("/api/user").status_code == 401


def test_login_with_wrong_password_is_401(client: TestClient) -> None:
    _register(client, "maria")
    resp = client.post("/api/login", json={"username": "maria", "password": "nope-nope"})
    assert resp.status_code == 401
    assert resp.json()["detail"]


def test_create_toy_requires_session(client: TestClient) -> None:
    resp = client.post("/api/toys", json={"title": "x"})
    assert resp.status_code in (401, 422)


def test_toy_create_and_list_with_distance(client: TestClient) -> None:
    headers = _register(client, "olivia")
    toy_id = _create_toy(client, headers)

    listing = client.get("/api/toys", params={"latitude": 45.5152, "longitude": -122.6784})
    assert listing.status_code == 200
    body = listing.json()
    assert body["total"] == 1
    assert body["items"][0]["id"] == toy_id
    assert body["items"][0]["distance_miles"] == 0.0

    mine = client.get("/api/toys/mine", headers=headers)
    assert [t["id"] for t in mine.json()] == [toy_id]


def test_favorite_toggle_status_codes(client: TestClient) -> None:
    headers = _register(client, "olivia")
    toy_id = _create_toy(client, headers)

    added = client.post(f"/api/toys/{toy_id}/favorite", headers=headers)
    assert added.status_code == 201
    assert added.json()["favorited"] is True

    removed = client.post(f"/api/toys/{toy_id}/favorite", headers=headers)
    assert removed.status_code == 200
    assert removed.json()["favorited"] is False

    missing = client.post("/api/toys/unknown/favorite", headers=headers)
    assert missing.status_code == 404


def test_request_decision_is_terminal(client: TestClient) -> None:
    owner = _register(client, "olivia")
    requester = _register(client, "ryan")
    toy_id = _create_toy(client, owner)

    created = client.post(
        f"/api/toys/{toy_id}/request", headers=requester, json={"message": "Swap?"}
    )
    assert created.status_code == 201
    request_id = created.json()["id"]

    # 요청자는 승인할 수 없다.
    denied = client.patch(
        f"/api/requests/{request_id}/status", headers=requester, json={"status": "approved"}
    )
    assert denied.status_code == 403

    approved = client.patch(
        f"/api/requests/{request_id}/status", headers=owner, json={"status": "approved"}
    )
    assert approved.status_code == 200
    assert approved.json()["status"] == "approved"

    again = client.patch(
        f"/api/requests/{request_id}/status", headers=owner, json={"status": "rejected"}
    )
    assert again.status_code == 409

    toy = client.get(f"/api/toys/{toy_id}").json()
    assert toy["is_available"] is False


def test_admin_routes_require_admin(client: TestClient) -> None:
    user_headers = _register(client, "maria")
    admin_headers = _register(client, "admin")

    assert client.get("/api/admin/users", headers=user_headers).status_code == 403

    resp = client.get("/api/admin/users", headers=admin_headers)
    assert resp.status_code == 200
    assert resp.json()["total"] == 2


def test_report_toy_and_admin_resolves(client: TestClient) -> None:
    owner = _register(client, "olivia")
    reporter = _register(client, "maria")
    admin_headers = _register(client, "admin")
    toy_id = _create_toy(client, owner)

    created = client.post(
        "/api/reports",
        headers=reporter,
        json={"target_type": "toy", "target_id": toy_id, "reason": "Broken pieces"},
    )
    assert created.status_code == 201, created.text
    report_id = created.json()["id"]
    assert created.json()["status"] == "pending"

    missing = client.post(
        "/api/reports",
        headers=reporter,
        json={"target_type": "toy", "target_id": "unknown", "reason": "?"},
    )
    assert missing.status_code == 404

    assert client.get("/api/reports", headers=reporter).status_code == 403
    forbidden = client.patch(f"/api/admin/reports/{report_id}/resolve", headers=reporter)
    assert forbidden.status_code == 403

    listing = client.get(
        "/api/admin/reports", headers=admin_headers, params={"status": "pending"}
    )
    assert listing.status_code == 200
    assert [r["id"] for r in listing.json()["items"]] == [report_id]

    resolved = client.patch(f"/api/admin/reports/{report_id}/resolve", headers=admin_headers)
    assert resolved.status_code == 200
    assert resolved.json()["status"] == "resolved"

    again = client.patch(
        f"/api/reports/{report_id}/status", headers=admin_headers, json={"status": "dismissed"}
    )
    assert again.status_code == 409


def test_contact_submission(client: TestClient) -> None:
    ok = client.post(
        "/api/contact",
        json={
            "name": "Jo",
            "email": "jo@example.com",
            "subject": "Hello",
            "message": "Love the site",
        },
    )
    assert ok.status_code == 201
    assert ok.json()["success"] is True

    bad = client.post(
        "/api/contact",
        json={"name": "Jo", "email": "not-an-email", "subject": "Hi", "message": "x"},
    )
    assert bad.status_code == 422
