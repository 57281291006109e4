from __future__ import annotations

import pytest

from toyshare_service.app.exceptions import InvalidRequestError
from toyshare_service.app.models.community_metrics import CommunityMetricsIncrement
from toyshare_service.app.services.community_metrics_service import (
    CommunityMetricsService,
)
from toyshare_service.app.services.contact_service import ContactService

from toyshare_service.tests.fakes import (
    FakeCommunityMetricsRepository,
    FakeContactMessageRepository,
    FakeToyRepository,
    FakeUserRepository,
    build_toy,
    build_user,
)


def test_contact_submit_and_list() -> None:
    service = ContactService(contact_repo=FakeContactMessageRepository())

    created = service.submit("  Jo ", "jo@example.com", " Shipping ", "Do you ship toys?")
    assert created.id is not None
    assert created.name == "Jo"
    assert created.subject == "Shipping"

    items, total = service.list_messages(1, 20)
    assert total == 1 and items[0].id == created.id

    with pytest.raises(InvalidRequestError):
        service.submit("Jo", "jo@example.com", "Empty", "   ")


def test_metrics_include_totals() -> None:
    metrics_repo = FakeCommunityMetricsRepository()
    service = CommunityMetricsService(
        metrics_repo=metrics_repo,
        toy_repo=FakeToyRepository([build_toy("t1"), build_toy("t2")]),
        user_repo=FakeUserRepository([build_user("u1")]),
    )

    metrics = service.increment(
        CommunityMetricsIncrement(toys_saved=2, waste_reduced_kg=1.0)
    )

    assert metrics.toys_saved == 2
    assert metrics.waste_reduced_kg == pytest.approx(1.0)
    assert metrics.total_toys == 2
    assert metrics.total_users == 1


def test_metrics_reject_empty_increment() -> None:
    service = CommunityMetricsService(
        metrics_repo=FakeCommunityMetricsRepository(),
        toy_repo=FakeToyRepository(),
        user_repo=FakeUserRepository(),
    )
    with pytest.raises(InvalidRequestError):
        service.increment(CommunityMetricsIncrement())


def test_metrics_increment_must_be_non_negative() -> None:
    with pytest.raises(ValueError):
        CommunityMetricsIncrement(toys_saved=-1)
