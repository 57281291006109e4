from __future__ import annotations

import logging

from fastapi import Depends

from .dependencies import (
    get_community_metrics_repository,
    get_toy_repository,
    get_user_repository,
)
from ..exceptions import InvalidRequestError
from ..models.community_metrics import CommunityMetrics, CommunityMetricsIncrement
from ..repositories.interfaces import (
    CommunityMetricsRepositoryInterface,
    ToyRepositoryInterface,
    UserRepositoryInterface,
)


logger = logging.getLogger(__name__)


class CommunityMetricsService:
    """커뮤니티 누적 지표 조회/증가."""

    def __init__(
        self,
        metrics_repo: CommunityMetricsRepositoryInterface,
        toy_repo: ToyRepositoryInterface,
        user_repo: UserRepositoryInterface,
    ) -> None:
        self._metrics_repo = metrics_repo
        self._toy_repo = toy_repo
        self._user_repo = user_repo

    def get_metrics(self) -> CommunityMetrics:
        metrics = self._metrics_repo.get()
        return metrics.model_copy(
            update={
                "total_toys": self._toy_repo.count(),
                "total_users": self._user_repo.count(),
            }
        )

    def increment(self, inc: CommunityMetricsIncrement) -> CommunityMetrics:
        if inc.is_empty():
            raise InvalidRequestError("no metrics to increment")

        self._metrics_repo.increment(inc)
        logger.info(
            "community metrics incremented toys_saved=%s families_connected=%s waste_reduced_kg=%s",
            inc.toys_saved,
            inc.families_connected,
            inc.waste_reduced_kg,
        )
        return self.get_metrics()


def get_community_metrics_service(
    metrics_repo: CommunityMetricsRepositoryInterface = Depends(
        get_community_metrics_repository
    ),
    toy_repo: ToyRepositoryInterface = Depends(get_toy_repository),
    user_repo: UserRepositoryInterface = Depends(get_user_repository),
) -> CommunityMetricsService:
    return CommunityMetricsService(
        metrics_repo=metrics_repo, toy_repo=toy_repo, user_repo=user_repo
    )
