from __future__ import annotations

import pytest

from toyshare_service.app.config import SustainabilityConfig
from toyshare_service.app.exceptions import InvalidRequestError, NotFoundError
from toyshare_service.app.services.sustainability_service import SustainabilityService

from toyshare_service.tests.fakes import FakeUserRepository, build_user


def _service(repo: FakeUserRepository) -> SustainabilityService:
    return SustainabilityService(user_repo=repo, config=SustainabilityConfig())


def test_score_weights_toys_and_exchanges() -> None:
    service = _service(FakeUserRepository())
    assert service.score_for(0, 0) == 0
    assert service.score_for(2, 1) == 13
    assert service.score_for(4, 10) == 50


def test_record_contribution_updates_score_and_badge() -> None:
    repo = FakeUserRepository([build_user("user-1")])
    service = _service(repo)

    user = service.record_contribution("user-1", toys_shared=2)

    assert user.toys_shared == 2
    assert user.sustainability_score == 10
    assert user.current_badge == "Eco Friend"


def test_record_contribution_accumulates_exchanges() -> None:
    repo = FakeUserRepository([build_user("user-1", toys_shared=4)])
    service = _service(repo)

    service.record_contribution("user-1", exchanges=1)
    user = service.record_contribution("user-1", exchanges=2)

    assert user.successful_exchanges == 3
    assert user.sustainability_score == 4 * 5 + 3 * 3
    assert user.current_badge == "Sustainability Hero"


def test_record_contribution_rejects_negative_increments() -> None:
    service = _service(FakeUserRepository([build_user("user-1")]))
    with pytest.raises(InvalidRequestError):
        service.record_contribution("user-1", toys_shared=-1)


def test_record_contribution_unknown_user() -> None:
    service = _service(FakeUserRepository())
    with pytest.raises(NotFoundError):
        service.record_contribution("missing", toys_shared=1)


def test_summary_reports_progress() -> None:
    repo = FakeUserRepository(
        [build_user("user-1", toys_shared=1, successful_exchanges=0, sustainability_score=5)]
    )
    summary = _service(repo).summary("user-1")

    assert summary.score == 5
    assert summary.badge.current.name == "Newcomer"
    assert summary.badge.progress_percent == pytest.approx(50.0)
    assert summary.badge.points_to_next == 5


def test_summary_uses_stored_score_after_config_change() -> None:
    # 점수 가중치가 낮아져도 이미 저장된 점수와 배지는 그대로 보여준다.
    repo = FakeUserRepository(
        [build_user("user-1", toys_shared=3, sustainability_score=15)]
    )
    service = SustainabilityService(
        user_repo=repo, config=SustainabilityConfig(toy_shared_points=1)
    )

    summary = service.summary("user-1")

    assert summary.score == 15
    assert summary.toys_shared == 3
    assert summary.badge.current.name == "Eco Friend"
    assert summary.badge.points_to_next == 10


def test_summary_unknown_user() -> None:
    with pytest.raises(NotFoundError):
        _service(FakeUserRepository()).summary("missing")
