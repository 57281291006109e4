from __future__ import annotations

import pytest

from common.models.user import UserRole
from toyshare_service.app.config import ListingsConfig, SustainabilityConfig
from toyshare_service.app.exceptions import (
    InvalidRequestError,
    NotFoundError,
    PermissionDeniedError,
)
from toyshare_service.app.models.toy import (
    ListToysFilter,
    ToyCreateInput,
    ToyUpdate,
    haversine_miles,
)
from toyshare_service.app.services.sustainability_service import SustainabilityService
from toyshare_service.app.services.toys_service import ToysService

from toyshare_service.tests.fakes import (
    FakeCommunityMetricsRepository,
    FakeToyRepository,
    FakeUserRepository,
    build_toy,
    build_user,
)


class Env:
    def __init__(self) -> None:
        self.owner = build_user("owner-1")
        self.other = build_user("other-1")
        self.admin = build_user("admin-1", role=UserRole.ADMIN)
        self.users = FakeUserRepository([self.owner, self.other, self.admin])
        self.toys = FakeToyRepository()
        self.metrics = FakeCommunityMetricsRepository()
        self.service = ToysService(
            toy_repo=self.toys,
            metrics_repo=self.metrics,
            sustainability=SustainabilityService(
                user_repo=self.users, config=SustainabilityConfig()
            ),
            config=ListingsConfig(default_distance_miles=10.0, waste_per_toy_kg=0.5),
        )


@pytest.fixture
def env() -> Env:
    return Env()


def _input(**overrides) -> ToyCreateInput:
    data = {
        "title": "Lego Duplo bucket",
        "description": "Large bucket, all pieces included",
        "age_range": "1-3",
        "condition": "Like New",
        "location": "Portland, OR",
        "tags": ["lego", "building"],
    }
    data.update(overrides)
    return ToyCreateInput(**data)


def test_create_toy_credits_owner_and_community(env: Env) -> None:
    toy = env.service.create_toy(env.owner, _input())

    assert toy.id is not None
    assert toy.user_id == "owner-1"
    assert toy.category == "Other"
    assert toy.is_available is True
    owner = env.users.users["owner-1"]
    assert owner.toys_shared == 1
    assert owner.sustainability_score == 5
    assert env.metrics.metrics.toys_saved == 1
    assert env.metrics.metrics.waste_reduced_kg == pytest.approx(0.5)


def test_update_toy_owner_only(env: Env) -> None:
    toy = env.service.create_toy(env.owner, _input())
    assert toy.id is not None

    updated = env.service.update_toy(toy.id, env.owner, ToyUpdate(title="Duplo set"))
    assert updated.title == "Duplo set"

    with pytest.raises(PermissionDeniedError):
        env.service.update_toy(toy.id, env.other, ToyUpdate(title="mine now"))
    with pytest.raises(InvalidRequestError):
        env.service.update_toy(toy.id, env.owner, ToyUpdate())
    with pytest.raises(NotFoundError):
        env.service.update_toy("missing", env.owner, ToyUpdate(title="x"))


def test_delete_toy_owner_or_admin(env: Env) -> None:
    first = env.service.create_toy(env.owner, _input())
    second = env.service.create_toy(env.owner, _input(title="Puzzle"))
    assert first.id is not None and second.id is not None

    with pytest.raises(PermissionDeniedError):
        env.service.delete_toy(first.id, env.other)

    env.service.delete_toy(first.id, env.owner)
    env.service.delete_toy(second.id, env.admin)
    assert env.toys.toys == {}


def test_list_toys_applies_default_distance_and_distances(env: Env) -> None:
    env.toys.toys["near"] = build_toy("near", latitude=47.61, longitude=-122.33)
    env.toys.toys["nowhere"] = build_toy("nowhere")

    items, total = env.service.list_toys(ListToysFilter(latitude=47.60, longitude=-122.33))

    assert total == 2
    assert env.toys.last_filter is not None
    assert env.toys.last_filter.distance_miles == 10.0
    by_id = {i.toy.id: i for i in items}
    assert by_id["near"].distance_miles is not None
    assert by_id["near"].distance_miles < 1.0
    assert by_id["nowhere"].distance_miles is None


def test_list_toys_without_coordinates_keeps_distance_unset(env: Env) -> None:
    env.toys.toys["a"] = build_toy("a", latitude=47.61, longitude=-122.33)

    items, _ = env.service.list_toys(ListToysFilter())

    assert env.toys.last_filter is not None
    assert env.toys.last_filter.distance_miles is None
    assert items[0].distance_miles is None


def test_list_toys_rejects_non_positive_distance(env: Env) -> None:
    with pytest.raises(InvalidRequestError):
        env.service.list_toys(
            ListToysFilter(latitude=1.0, longitude=1.0, distance_miles=0)
        )


def test_haversine_known_distance() -> None:
    # Seattle -> Portland, 약 145 마일
    distance = haversine_miles(47.6062, -122.3321, 45.5152, -122.6784)
    assert 140 < distance < 150
    assert haversine_miles(10.0, 10.0, 10.0, 10.0) == pytest.approx(0.0)
