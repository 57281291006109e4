"""위시와 위시 제안(WishOffer) 서비스.

제안 상태는 pending -> accepted | rejected, accepted -> completed 로만 바뀐다.
제안이 accepted 되면 해당 위시는 fulfilled 가 된다.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from fastapi import Depends

from common.models.user import User

from .dependencies import (
    get_toy_repository,
    get_wish_offer_repository,
    get_wish_repository,
)
from ..exceptions import (
    ConflictError,
    InvalidRequestError,
    NotFoundError,
    PermissionDeniedError,
)
from ..models.wish import (
    ListWishesFilter,
    OfferStatus,
    Wish,
    WishCreateInput,
    WishOffer,
    WishStatus,
    WishUpdate,
    ensure_offer_transition,
)
from ..repositories.interfaces import (
    ToyRepositoryInterface,
    WishOfferRepositoryInterface,
    WishRepositoryInterface,
)


logger = logging.getLogger(__name__)


class WishesService:
    def __init__(
        self,
        wish_repo: WishRepositoryInterface,
        offer_repo: WishOfferRepositoryInterface,
        toy_repo: ToyRepositoryInterface,
    ) -> None:
        self._wish_repo = wish_repo
        self._offer_repo = offer_repo
        self._toy_repo = toy_repo

    def list_wishes(self, flt: ListWishesFilter) -> tuple[list[Wish], int]:
        return self._wish_repo.list(flt)

    def get_wish(self, wish_id: str) -> Wish:
        wish = self._wish_repo.find_by_id(wish_id)
        if wish is None:
            raise NotFoundError("wish not found")
        return wish

    def list_by_user(self, user_id: str) -> list[Wish]:
        return self._wish_repo.list_by_user(user_id)

    def create_wish(self, owner: User, input_model: WishCreateInput) -> Wish:
        assert owner.id is not None
        now = datetime.now(timezone.utc)
        created = self._wish_repo.insert(
            Wish(
                user_id=owner.id,
                created_at=now,
                updated_at=now,
                **input_model.model_dump(),
            )
        )
        logger.info("wish created", extra={"user_id": owner.id})
        return created

    def _get_owned_wish(self, wish_id: str, actor: User) -> Wish:
        wish = self.get_wish(wish_id)
        if wish.user_id != actor.id:
            raise PermissionDeniedError("you can only manage your own wishes")
        return wish

    def update_wish(self, wish_id: str, actor: User, update: WishUpdate) -> Wish:
        self._get_owned_wish(wish_id, actor)
        fields = update.changed_fields()
        if not fields:
            raise InvalidRequestError("no fields to update")

        updated = self._wish_repo.update_fields(wish_id, fields)
        if updated is None:
            raise NotFoundError("wish not found")
        return updated

    def delete_wish(self, wish_id: str, actor: User) -> None:
        self._get_owned_wish(wish_id, actor)
        if not self._wish_repo.delete(wish_id):
            raise NotFoundError("wish not found")
        logger.info("wish deleted", extra={"user_id": actor.id})

    def create_offer(
        self,
        wish_id: str,
        offerer: User,
        message: str,
        toy_id: str | None = None,
    ) -> WishOffer:
        assert offerer.id is not None
        wish = self.get_wish(wish_id)
        if wish.user_id == offerer.id:
            raise InvalidRequestError("you cannot make an offer on your own wish")
        if wish.status != WishStatus.ACTIVE:
            raise ConflictError("wish is no longer active")
        if toy_id is not None:
            toy = self._toy_repo.find_by_id(toy_id)
            if toy is None:
                raise NotFoundError("toy not found")
            if toy.user_id != offerer.id:
                raise PermissionDeniedError("you can only offer your own toys")
        if self._offer_repo.has_pending(wish_id, offerer.id):
            raise ConflictError("you already have a pending offer for this wish")

        now = datetime.now(timezone.utc)
        created = self._offer_repo.insert(
            WishOffer(
                wish_id=wish_id,
                offerer_id=offerer.id,
                toy_id=toy_id,
                message=message,
                created_at=now,
                updated_at=now,
            )
        )
        logger.info("wish offer created", extra={"user_id": offerer.id, "toy_id": toy_id})
        return created

    def list_offers(self, wish_id: str, actor: User) -> list[WishOffer]:
        self._get_owned_wish(wish_id, actor)
        return self._offer_repo.list_by_wish(wish_id)

    def update_offer_status(
        self, offer_id: str, actor: User, status: OfferStatus
    ) -> WishOffer:
        offer = self._offer_repo.find_by_id(offer_id)
        if offer is None:
            raise NotFoundError("offer not found")
        self._get_owned_wish(offer.wish_id, actor)

        ensure_offer_transition(offer.status, status)
        updated = self._offer_repo.update_status_if(offer_id, offer.status, status)
        if updated is None:
            raise ConflictError("offer was modified concurrently")

        if updated.status == OfferStatus.ACCEPTED:
            self._wish_repo.update_fields(
                offer.wish_id, {"status": WishStatus.FULFILLED.value}
            )

        logger.info(
            "wish offer status changed to %s",
            updated.status.value,
            extra={"user_id": actor.id},
        )
        return updated


def get_wishes_service(
    wish_repo: WishRepositoryInterface = Depends(get_wish_repository),
    offer_repo: WishOfferRepositoryInterface = Depends(get_wish_offer_repository),
    toy_repo: ToyRepositoryInterface = Depends(get_toy_repository),
) -> WishesService:
    return WishesService(wish_repo=wish_repo, offer_repo=offer_repo, toy_repo=toy_repo)
