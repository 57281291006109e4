"""지속가능성 점수/배지 서비스.

점수 = toys_shared * toy_shared_points + successful_exchanges * exchange_points.
카운터는 원자적으로 증가시키고, 그 결과로 점수와 배지를 다시 계산해 저장한다.
요약 조회는 저장된 sustainability_score 를 기준으로 한다.
"""

from __future__ import annotations

import logging

from fastapi import Depends

from common.models.user import User

from .dependencies import get_app_config, get_user_repository
from ..config import AppConfig, SustainabilityConfig
from ..exceptions import InvalidRequestError, NotFoundError
from ..models.sustainability import SustainabilitySummary
from ..repositories.interfaces import UserRepositoryInterface


logger = logging.getLogger(__name__)


class SustainabilityService:
    def __init__(
        self,
        user_repo: UserRepositoryInterface,
        config: SustainabilityConfig,
    ) -> None:
        self._user_repo = user_repo
        self._config = config

    def score_for(self, toys_shared: int, exchanges: int) -> int:
        return (
            toys_shared * self._config.toy_shared_points
            + exchanges * self._config.exchange_points
        )

    def record_contribution(
        self, user_id: str, toys_shared: int = 0, exchanges: int = 0
    ) -> User:
        """유저의 기여 카운터를 올리고 점수/배지를 갱신한 유저를 반환한다."""

        if toys_shared < 0 or exchanges < 0:
            raise InvalidRequestError("contribution increments must be >= 0")

        user = self._user_repo.increment_contributions(user_id, toys_shared, exchanges)
        if user is None:
            raise NotFoundError("user not found")

        score = self.score_for(user.toys_shared, user.successful_exchanges)
        badge = self._config.badges.badge_for(score)
        if badge.name != user.current_badge:
            logger.info(
                "badge changed from %s to %s",
                user.current_badge,
                badge.name,
                extra={"user_id": user_id},
            )

        updated = self._user_repo.set_sustainability(user_id, score, badge.name)
        if updated is None:
            raise NotFoundError("user not found")
        return updated

    def summary(self, user_id: str) -> SustainabilitySummary:
        user = self._user_repo.find_by_id(user_id)
        if user is None:
            raise NotFoundError("user not found")

        # 저장된 점수를 그대로 쓴다. 설정이 바뀌어도 이미 얻은 점수는 재계산하지 않는다.
        score = user.sustainability_score
        return SustainabilitySummary(
            user_id=user_id,
            toys_shared=user.toys_shared,
            successful_exchanges=user.successful_exchanges,
            score=score,
            badge=self._config.badges.progress_for(score),
        )


def get_sustainability_service(
    user_repo: UserRepositoryInterface = Depends(get_user_repository),
    config: AppConfig = Depends(get_app_config),
) -> SustainabilityService:
    """FastAPI DI용 SustainabilityService 팩토리."""

    return SustainabilityService(user_repo=user_repo, config=config.sustainability)
