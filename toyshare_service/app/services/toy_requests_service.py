"""장난감 요청(ToyRequest) 생명주기 서비스.

pending -> approved | rejected 로 한 번만 바뀐다. 상태 쓰기는 status == pending 조건의
compare-and-set 이므로 동시에 들어온 두 결정 중 하나만 성공한다.
승인되면 같은 호출 안에서 장난감을 traded 로 바꾸고, 같은 장난감의 다른 pending 요청은
rejected 로 닫은 뒤 양쪽 유저의 교환 횟수를 올린다. 이미 거래됐거나 삭제된 장난감은 승인할 수 없다.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from fastapi import Depends

from .dependencies import (
    get_community_metrics_repository,
    get_toy_repository,
    get_toy_request_repository,
)
from .sustainability_service import SustainabilityService, get_sustainability_service
from ..exceptions import (
    ConflictError,
    InvalidRequestError,
    InvalidStateTransitionError,
    NotFoundError,
    PermissionDeniedError,
)
from ..models.community_metrics import CommunityMetricsIncrement
from ..models.toy import ToyStatus
from ..models.toy_request import (
    DECISION_STATUSES,
    RequestStatus,
    ToyRequest,
    ensure_transition,
)
from ..repositories.interfaces import (
    CommunityMetricsRepositoryInterface,
    ToyRepositoryInterface,
    ToyRequestRepositoryInterface,
)


logger = logging.getLogger(__name__)


class ToyRequestsService:
    def __init__(
        self,
        request_repo: ToyRequestRepositoryInterface,
        toy_repo: ToyRepositoryInterface,
        metrics_repo: CommunityMetricsRepositoryInterface,
        sustainability: SustainabilityService,
    ) -> None:
        self._request_repo = request_repo
        self._toy_repo = toy_repo
        self._metrics_repo = metrics_repo
        self._sustainability = sustainability

    def create_request(
        self,
        toy_id: str,
        requester_id: str,
        message: str,
        preferred_location: str | None = None,
    ) -> ToyRequest:
        toy = self._toy_repo.find_by_id(toy_id)
        if toy is None:
            raise NotFoundError("toy not found")
        if toy.user_id == requester_id:
            raise InvalidRequestError("you cannot request your own toy")
        if not toy.is_available:
            raise ConflictError("toy is not available")
        if self._request_repo.has_pending(toy_id, requester_id):
            raise ConflictError("you already have a pending request for this toy")

        now = datetime.now(timezone.utc)
        created = self._request_repo.insert(
            ToyRequest(
                toy_id=toy_id,
                requester_id=requester_id,
                owner_id=toy.user_id,
                message=message,
                preferred_location=preferred_location,
                created_at=now,
                updated_at=now,
            )
        )
        logger.info(
            "toy request created",
            extra={"user_id": requester_id, "toy_id": toy_id},
        )
        return created

    def get_request(self, request_id: str) -> ToyRequest:
        request = self._request_repo.find_by_id(request_id)
        if request is None:
            raise NotFoundError("request not found")
        return request

    def decide(self, request_id: str, actor_id: str, status: RequestStatus) -> ToyRequest:
        """소유자가 요청을 승인/거절한다."""

        if status not in DECISION_STATUSES:
            raise InvalidRequestError("status must be approved or rejected")

        request = self.get_request(request_id)
        if request.owner_id != actor_id:
            raise PermissionDeniedError("only the toy owner can decide on this request")

        ensure_transition(request.status, status)

        if status == RequestStatus.APPROVED:
            toy = self._toy_repo.find_by_id(request.toy_id)
            if toy is None:
                raise NotFoundError("toy not found")
            if not toy.is_available or toy.status == ToyStatus.TRADED:
                raise ConflictError("toy is no longer available")

        decided = self._request_repo.update_status_if(
            request_id, RequestStatus.PENDING, status
        )
        if decided is None:
            # 조회 이후 다른 결정이 먼저 반영된 경우. pending 이 아니므로 항상 전이 오류다.
            latest = self.get_request(request_id)
            raise InvalidStateTransitionError("request", latest.status, status)

        logger.info(
            "toy request decided",
            extra={
                "user_id": actor_id,
                "toy_id": decided.toy_id,
                "request_status": decided.status.value,
            },
        )

        if decided.status == RequestStatus.APPROVED:
            self._apply_approval(decided)
        return decided

    def _apply_approval(self, request: ToyRequest) -> None:
        assert request.id is not None
        try:
            traded = self._toy_repo.mark_traded(request.toy_id)
        except Exception:
            logger.exception(
                "failed to mark toy as traded after approval",
                extra={"toy_id": request.toy_id, "request_status": request.status.value},
            )
            raise

        if traded is None:
            # 사전 확인 이후 장난감이 삭제됐거나 다른 요청으로 먼저 거래된 경우
            self._request_repo.update_status_if(
                request.id, RequestStatus.APPROVED, RequestStatus.REJECTED
            )
            logger.warning(
                "approval reverted because toy is no longer available",
                extra={"toy_id": request.toy_id, "request_status": RequestStatus.REJECTED.value},
            )
            raise ConflictError("toy is no longer available")

        rejected = self._request_repo.reject_pending_for_toy(request.toy_id, request.id)
        if rejected:
            logger.info(
                "rejected %d other pending requests",
                rejected,
                extra={"toy_id": request.toy_id},
            )

        self._sustainability.record_contribution(request.owner_id, exchanges=1)
        self._sustainability.record_contribution(request.requester_id, exchanges=1)
        self._metrics_repo.increment(CommunityMetricsIncrement(families_connected=1))

    def list_for_toy(self, toy_id: str, actor_id: str) -> list[ToyRequest]:
        toy = self._toy_repo.find_by_id(toy_id)
        if toy is None:
            raise NotFoundError("toy not found")
        if toy.user_id != actor_id:
            raise PermissionDeniedError("only the toy owner can view its requests")
        return self._request_repo.list_by_toy(toy_id)

    def list_made(self, user_id: str) -> list[ToyRequest]:
        return self._request_repo.list_by_requester(user_id)

    def list_received(self, user_id: str) -> list[ToyRequest]:
        return self._request_repo.list_by_owner(user_id)

    def leave_feedback(
        self, request_id: str, actor_id: str, feedback: str, rating: int
    ) -> ToyRequest:
        request = self.get_request(request_id)
        if request.requester_id != actor_id:
            raise PermissionDeniedError("only the requester can leave feedback")
        if request.status != RequestStatus.APPROVED:
            raise InvalidRequestError("feedback can only be left on approved requests")
        if not feedback or not feedback.strip():
            raise InvalidRequestError("feedback must not be blank")
        if not 1 <= rating <= 5:
            raise InvalidRequestError("rating must be between 1 and 5")
        if request.feedback:
            raise ConflictError("feedback already submitted")

        updated = self._request_repo.set_feedback_if_absent(
            request_id, feedback.strip(), rating
        )
        if updated is None:
            raise ConflictError("feedback already submitted")
        return updated

    def list_reviews(self, user_id: str) -> list[ToyRequest]:
        return [r for r in self._request_repo.list_reviews_for_owner(user_id) if r.has_review]


def get_toy_requests_service(
    request_repo: ToyRequestRepositoryInterface = Depends(get_toy_request_repository),
    toy_repo: ToyRepositoryInterface = Depends(get_toy_repository),
    metrics_repo: CommunityMetricsRepositoryInterface = Depends(
        get_community_metrics_repository
    ),
    sustainability: SustainabilityService = Depends(get_sustainability_service),
) -> ToyRequestsService:
    """FastAPI DI용 ToyRequestsService 팩토리."""

    return ToyRequestsService(
        request_repo=request_repo,
        toy_repo=toy_repo,
        metrics_repo=metrics_repo,
        sustainability=sustainability,
    )
