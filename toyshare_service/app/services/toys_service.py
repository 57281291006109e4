"""장난감 리스팅 서비스.

- 등록 시 소유자의 toys_shared 와 커뮤니티 지표(toys_saved, waste_reduced_kg)를 함께 올린다.
- 좌표가 주어진 목록 조회는 반경 내 장난감만 돌려주고, 각 항목에 거리를 붙인다.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from fastapi import Depends

from common.models.user import User

from .dependencies import (
    get_app_config,
    get_community_metrics_repository,
    get_toy_repository,
)
from .sustainability_service import SustainabilityService, get_sustainability_service
from ..config import AppConfig, ListingsConfig
from ..exceptions import InvalidRequestError, NotFoundError, PermissionDeniedError
from ..models.community_metrics import CommunityMetricsIncrement
from ..models.toy import (
    ListToysFilter,
    Toy,
    ToyCreateInput,
    ToyUpdate,
    ToyWithDistance,
    haversine_miles,
)
from ..repositories.interfaces import (
    CommunityMetricsRepositoryInterface,
    ToyRepositoryInterface,
)


logger = logging.getLogger(__name__)


class ToysService:
    def __init__(
        self,
        toy_repo: ToyRepositoryInterface,
        metrics_repo: CommunityMetricsRepositoryInterface,
        sustainability: SustainabilityService,
        config: ListingsConfig,
    ) -> None:
        self._toy_repo = toy_repo
        self._metrics_repo = metrics_repo
        self._sustainability = sustainability
        self._config = config

    def create_toy(self, owner: User, input_model: ToyCreateInput) -> Toy:
        assert owner.id is not None
        now = datetime.now(timezone.utc)
        toy = Toy(
            user_id=owner.id,
            created_at=now,
            updated_at=now,
            **input_model.model_dump(),
        )
        created = self._toy_repo.insert(toy)

        self._sustainability.record_contribution(owner.id, toys_shared=1)
        self._metrics_repo.increment(
            CommunityMetricsIncrement(
                toys_saved=1,
                waste_reduced_kg=self._config.waste_per_toy_kg,
            )
        )

        logger.info("toy created", extra={"user_id": owner.id, "toy_id": created.id})
        return created

    def get_toy(self, toy_id: str) -> Toy:
        toy = self._toy_repo.find_by_id(toy_id)
        if toy is None:
            raise NotFoundError("toy not found")
        return toy

    def update_toy(self, toy_id: str, actor: User, update: ToyUpdate) -> Toy:
        toy = self.get_toy(toy_id)
        if toy.user_id != actor.id:
            raise PermissionDeniedError("you can only update your own toys")

        fields = update.changed_fields()
        if not fields:
            raise InvalidRequestError("no fields to update")

        updated = self._toy_repo.update_fields(toy_id, fields)
        if updated is None:
            raise NotFoundError("toy not found")
        logger.info("toy updated", extra={"user_id": actor.id, "toy_id": toy_id})
        return updated

    def delete_toy(self, toy_id: str, actor: User) -> None:
        toy = self.get_toy(toy_id)
        if toy.user_id != actor.id and not actor.is_admin:
            raise PermissionDeniedError("you can only delete your own toys")

        if not self._toy_repo.delete(toy_id):
            raise NotFoundError("toy not found")
        logger.info("toy deleted", extra={"user_id": actor.id, "toy_id": toy_id})

    def list_toys(self, flt: ListToysFilter) -> tuple[list[ToyWithDistance], int]:
        if flt.has_geo and flt.distance_miles is None:
            flt = flt.model_copy(
                update={"distance_miles": self._config.default_distance_miles}
            )
        if flt.distance_miles is not None and flt.distance_miles <= 0:
            raise InvalidRequestError("distance must be > 0")

        toys, total = self._toy_repo.list(flt)
        items: list[ToyWithDistance] = []
        for toy in toys:
            distance: float | None = None
            if flt.has_geo and toy.has_coordinates:
                distance = round(
                    haversine_miles(
                        flt.latitude,  # type: ignore[arg-type]
                        flt.longitude,  # type: ignore[arg-type]
                        toy.latitude,  # type: ignore[arg-type]
                        toy.longitude,  # type: ignore[arg-type]
                    ),
                    2,
                )
            items.append(ToyWithDistance(toy=toy, distance_miles=distance))
        return items, total

    def list_by_user(self, user_id: str) -> list[Toy]:
        return self._toy_repo.list_by_user(user_id)


def get_toys_service(
    toy_repo: ToyRepositoryInterface = Depends(get_toy_repository),
    metrics_repo: CommunityMetricsRepositoryInterface = Depends(
        get_community_metrics_repository
    ),
    sustainability: SustainabilityService = Depends(get_sustainability_service),
    config: AppConfig = Depends(get_app_config),
) -> ToysService:
    """FastAPI DI용 ToysService 팩토리."""

    return ToysService(
        toy_repo=toy_repo,
        metrics_repo=metrics_repo,
        sustainability=sustainability,
        config=config.listings,
    )
