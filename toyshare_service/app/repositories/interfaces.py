from __future__ import annotations

from datetime import datetime
from typing import Any, Protocol

from common.models.user import User
from ..models.auth_session import AuthSession
from ..models.community_metrics import CommunityMetrics, CommunityMetricsIncrement
from ..models.contact_message import ContactMessage
from ..models.favorite import Favorite
from ..models.message import Message
from ..models.report import Report, ReportStatus
from ..models.toy import ListToysFilter, Toy
from ..models.toy_request import RequestStatus, ToyRequest
from ..models.wish import ListWishesFilter, OfferStatus, Wish, WishOffer


class UserRepositoryInterface(Protocol):
    """UserRepository가 따라야 할 최소한의 계약.

    Service 레이어는 이 인터페이스에만 의존하고, 구체 구현(Mongo 등)은 몰라도 된다.
    형식이 잘못된 user_id 는 "없음"으로 취급한다.
    """

    def insert(self, user: User) -> User:  # pragma: no cover - Protocol
        ...

    def find_by_id(self, user_id: str) -> User | None:  # pragma: no cover - Protocol
        ...

    def find_by_username(self, username: str) -> User | None:  # pragma: no cover - Protocol
        ...

    def find_by_email(self, email: str) -> User | None:  # pragma: no cover - Protocol
        ...

    def update_profile(
        self, user_id: str, fields: dict[str, Any]
    ) -> User | None:  # pragma: no cover - Protocol
        ...

    def increment_contributions(
        self, user_id: str, toys_shared: int, exchanges: int
    ) -> User | None:  # pragma: no cover - Protocol
        """toys_shared / successful_exchanges 를 원자적으로 증가시키고 갱신된 유저를 반환한다."""
        ...

    def set_sustainability(
        self, user_id: str, score: int, badge: str
    ) -> User | None:  # pragma: no cover - Protocol
        ...

    def delete(self, user_id: str) -> bool:  # pragma: no cover - Protocol
        ...

    def list(
        self, page: int, page_size: int
    ) -> tuple[list[User], int]:  # pragma: no cover - Protocol
        ...

    def count(self) -> int:  # pragma: no cover - Protocol
        ...


class ToyRepositoryInterface(Protocol):
    """ToyRepository가 따라야 할 최소한의 계약."""

    def insert(self, toy: Toy) -> Toy:  # pragma: no cover - Protocol
        ...

    def find_by_id(self, toy_id: str) -> Toy | None:  # pragma: no cover - Protocol
        ...

    def list(
        self, flt: ListToysFilter
    ) -> tuple[list[Toy], int]:  # pragma: no cover - Protocol
        """필터에 맞는 장난감을 최신순으로 반환한다. (items, total)"""
        ...

    def list_by_user(self, user_id: str) -> list[Toy]:  # pragma: no cover - Protocol
        ...

    def update_fields(
        self, toy_id: str, fields: dict[str, Any]
    ) -> Toy | None:  # pragma: no cover - Protocol
        ...

    def mark_traded(self, toy_id: str) -> Toy | None:  # pragma: no cover - Protocol
        """교환 가능한 장난감만 traded 로 바꾼다. 이미 거래됐거나 없으면 None."""
        ...

    def delete(self, toy_id: str) -> bool:  # pragma: no cover - Protocol
        ...

    def count(self) -> int:  # pragma: no cover - Protocol
        ...


class ToyRequestRepositoryInterface(Protocol):
    """ToyRequestRepository가 따라야 할 최소한의 계약.

    - 상태 변경은 update_status_if 의 compare-and-set 으로만 한다.
    """

    def insert(self, request: ToyRequest) -> ToyRequest:  # pragma: no cover - Protocol
        ...

    def find_by_id(self, request_id: str) -> ToyRequest | None:  # pragma: no cover - Protocol
        ...

    def list_by_toy(self, toy_id: str) -> list[ToyRequest]:  # pragma: no cover - Protocol
        ...

    def list_by_requester(
        self, requester_id: str
    ) -> list[ToyRequest]:  # pragma: no cover - Protocol
        ...

    def list_by_owner(self, owner_id: str) -> list[ToyRequest]:  # pragma: no cover - Protocol
        ...

    def has_pending(
        self, toy_id: str, requester_id: str
    ) -> bool:  # pragma: no cover - Protocol
        ...

    def update_status_if(
        self,
        request_id: str,
        expected: RequestStatus,
        target: RequestStatus,
    ) -> ToyRequest | None:  # pragma: no cover - Protocol
        """현재 상태가 expected 일 때만 target 으로 바꾼다. 조건이 맞지 않으면 None."""
        ...

    def set_feedback_if_absent(
        self, request_id: str, feedback: str, rating: int
    ) -> ToyRequest | None:  # pragma: no cover - Protocol
        """후기가 아직 없는 승인된 요청에만 후기를 기록한다. 조건이 맞지 않으면 None."""
        ...

    def list_reviews_for_owner(
        self, owner_id: str
    ) -> list[ToyRequest]:  # pragma: no cover - Protocol
        ...

    def reject_pending_for_toy(
        self, toy_id: str, except_request_id: str
    ) -> int:  # pragma: no cover - Protocol
        """except_request_id 를 제외한 해당 장난감의 pending 요청을 모두 rejected 로 바꾼다."""
        ...

class FavoriteRepositoryInterface(Protocol):
    """FavoriteRepository가 따라야 할 최소한의 계약.

    - user_id + toy_id 조합으로 유니크하게 찜을 관리한다.
    """

    def create(self, user_id: str, toy_id: str) -> Favorite:  # pragma: no cover - Protocol
        ...

    def find(self, user_id: str, toy_id: str) -> Favorite | None:  # pragma: no cover - Protocol
        ...

    def delete(self, user_id: str, toy_id: str) -> bool:  # pragma: no cover - Protocol
        ...

    def list_by_user(self, user_id: str) -> list[Favorite]:  # pragma: no cover - Protocol
        ...

    def delete_all_by_user(self, user_id: str) -> int:  # pragma: no cover - Protocol
        """주어진 user_id 의 모든 찜을 삭제하고 삭제된 개수를 반환한다."""
        ...


class MessageRepositoryInterface(Protocol):
    def insert(self, message: Message) -> Message:  # pragma: no cover - Protocol
        ...

    def find_by_id(self, message_id: str) -> Message | None:  # pragma: no cover - Protocol
        ...

    def list_by_user(self, user_id: str) -> list[Message]:  # pragma: no cover - Protocol
        """user_id 가 보내거나 받은 메시지를 최신순으로 반환한다."""
        ...

    def list_between(
        self, user_id: str, other_user_id: str
    ) -> list[Message]:  # pragma: no cover - Protocol
        """두 유저 사이의 대화를 오래된 순으로 반환한다."""
        ...

    def mark_read(self, message_id: str) -> Message | None:  # pragma: no cover - Protocol
        ...

    def delete(self, message_id: str) -> bool:  # pragma: no cover - Protocol
        ...

    def delete_conversation(
        self, user_id: str, other_user_id: str
    ) -> int:  # pragma: no cover - Protocol
        ...

    def count_unread(self, receiver_id: str) -> int:  # pragma: no cover - Protocol
        ...


class WishRepositoryInterface(Protocol):
    def insert(self, wish: Wish) -> Wish:  # pragma: no cover - Protocol
        ...

    def find_by_id(self, wish_id: str) -> Wish | None:  # pragma: no cover - Protocol
        ...

    def list(
        self, flt: ListWishesFilter
    ) -> tuple[list[Wish], int]:  # pragma: no cover - Protocol
        """공개(is_public) 상태의 active 위시만 반환한다."""
        ...

    def list_by_user(self, user_id: str) -> list[Wish]:  # pragma: no cover - Protocol
        ...

    def update_fields(
        self, wish_id: str, fields: dict[str, Any]
    ) -> Wish | None:  # pragma: no cover - Protocol
        ...

    def delete(self, wish_id: str) -> bool:  # pragma: no cover - Protocol
        ...


class WishOfferRepositoryInterface(Protocol):
    def insert(self, offer: WishOffer) -> WishOffer:  # pragma: no cover - Protocol
        ...

    def find_by_id(self, offer_id: str) -> WishOffer | None:  # pragma: no cover - Protocol
        ...

    def list_by_wish(self, wish_id: str) -> list[WishOffer]:  # pragma: no cover - Protocol
        ...

    def has_pending(
        self, wish_id: str, offerer_id: str
    ) -> bool:  # pragma: no cover - Protocol
        ...

    def update_status_if(
        self,
        offer_id: str,
        expected: OfferStatus,
        target: OfferStatus,
    ) -> WishOffer | None:  # pragma: no cover - Protocol
        ...


class ContactMessageRepositoryInterface(Protocol):
    def insert(
        self, contact: ContactMessage
    ) -> ContactMessage:  # pragma: no cover - Protocol
        ...

    def list(
        self, page: int, page_size: int
    ) -> tuple[list[ContactMessage], int]:  # pragma: no cover - Protocol
        ...


class AuthSessionRepositoryInterface(Protocol):
    """AuthSessionRepository가 따라야 할 최소한의 계약."""

    def create(self, session: AuthSession) -> AuthSession:  # pragma: no cover - Protocol
        ...

    def find_by_token(self, token: str) -> AuthSession | None:  # pragma: no cover - Protocol
        ...

    def delete_by_token(self, token: str) -> bool:  # pragma: no cover - Protocol
        ...

    def delete_all_by_user(self, user_id: str) -> int:  # pragma: no cover - Protocol
        ...


class CommunityMetricsRepositoryInterface(Protocol):
    def get(self) -> CommunityMetrics:  # pragma: no cover - Protocol
        """저장된 카운터를 반환한다. 아직 도큐먼트가 없으면 0 으로 채운다."""
        ...

    def increment(
        self, inc: CommunityMetricsIncrement, now: datetime | None = None
    ) -> CommunityMetrics:  # pragma: no cover - Protocol
        ...


class ReportRepositoryInterface(Protocol):
    def insert(self, report: Report) -> Report:  # pragma: no cover - Protocol
        ...

    def find_by_id(self, report_id: str) -> Report | None:  # pragma: no cover - Protocol
        ...

    def list(
        self, status: ReportStatus | None, page: int, page_size: int
    ) -> tuple[list[Report], int]:  # pragma: no cover - Protocol
        """status 가 None 이면 전체 신고를 최신순으로 반환한다."""
        ...

    def update_status_if(
        self,
        report_id: str,
        expected: ReportStatus,
        target: ReportStatus,
        reviewer_id: str,
    ) -> Report | None:  # pragma: no cover - Protocol
        """현재 상태가 expected 일 때만 target 으로 바꾸고 처리자를 기록한다."""
        ...
