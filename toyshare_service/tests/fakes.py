"""테스트용 인메모리 리포지토리.

각 Fake 는 repositories/interfaces.py 의 Protocol 을 만족하며, DB 없이 서비스 로직만 검증한다.
"""

from __future__ import annotations

import itertools
from datetime import datetime, timedelta, timezone
from typing import Any

from common.models.user import DEFAULT_BADGE_NAME, User, UserRole
from toyshare_service.app.models.auth_session import AuthSession
from toyshare_service.app.models.community_metrics import (
    CommunityMetrics,
    CommunityMetricsIncrement,
)
from toyshare_service.app.models.contact_message import ContactMessage
from toyshare_service.app.models.favorite import Favorite
from toyshare_service.app.models.message import Message
from toyshare_service.app.models.report import Report, ReportStatus
from toyshare_service.app.models.toy import ListToysFilter, Toy, ToyStatus
from toyshare_service.app.models.toy_request import RequestStatus, ToyRequest
from toyshare_service.app.models.wish import (
    ListWishesFilter,
    OfferStatus,
    Wish,
    WishOffer,
    WishStatus,
)


_ids = itertools.count(1)


def next_id(prefix: str) -> str:
    return f"{prefix}-{next(_ids)}"


def now_utc() -> datetime:
    return datetime.now(timezone.utc)


def build_user(
    user_id: str = "user-1",
    *,
    username: str | None = None,
    role: UserRole = UserRole.USER,
    password_hash: str = "not-a-real-hash",
    toys_shared: int = 0,
    successful_exchanges: int = 0,
    sustainability_score: int = 0,
) -> User:
    now = now_utc()
    name = username or user_id
    return User(
        id=user_id,
        username=name,
        email=f"{name}@example.com",
        name=name.title(),
        location="Seattle, WA",
        role=role,
        password_hash=password_hash,
        toys_shared=toys_shared,
        successful_exchanges=successful_exchanges,
        sustainability_score=sustainability_score,
        current_badge=DEFAULT_BADGE_NAME,
        created_at=now,
        updated_at=now,
    )


def build_toy(
    toy_id: str = "toy-1",
    *,
    user_id: str = "owner-1",
    is_available: bool = True,
    latitude: float | None = None,
    longitude: float | None = None,
    title: str = "Wooden train set",
) -> Toy:
    now = now_utc()
    return Toy(
        id=toy_id,
        user_id=user_id,
        title=title,
        description="Classic wooden train with 20 pieces",
        age_range="3-5",
        condition="Good",
        category="Vehicles",
        location="Seattle, WA",
        latitude=latitude,
        longitude=longitude,
        tags=["wooden", "train"],
        is_available=is_available,
        created_at=now,
        updated_at=now,
    )


class FakeUserRepository:
    def __init__(self, users: list[User] | None = None) -> None:
        self.users: dict[str, User] = {u.id: u for u in users or [] if u.id}

    def insert(self, user: User) -> User:
        created = user.model_copy(update={"id": user.id or next_id("user")})
        self.users[created.id] = created  # type: ignore[index]
        return created

    def find_by_id(self, user_id: str) -> User | None:
        return self.users.get(user_id)

    def find_by_username(self, username: str) -> User | None:
        return next((u for u in self.users.values() if u.username == username), None)

    def find_by_email(self, email: str) -> User | None:
        return next((u for u in self.users.values() if u.email == email), None)

    def update_profile(self, user_id: str, fields: dict[str, Any]) -> User | None:
        user = self.users.get(user_id)
        if user is None:
            return None
        updated = user.model_copy(update={**fields, "updated_at": now_utc()})
        self.users[user_id] = updated
        return updated

    def increment_contributions(
        self, user_id: str, toys_shared: int, exchanges: int
    ) -> User | None:
        user = self.users.get(user_id)
        if user is None:
            return None
        updated = user.model_copy(
            update={
                "toys_shared": user.toys_shared + toys_shared,
                "successful_exchanges": user.successful_exchanges + exchanges,
            }
        )
        self.users[user_id] = updated
        return updated

    def set_sustainability(self, user_id: str, score: int, badge: str) -> User | None:
        user = self.users.get(user_id)
        if user is None:
            return None
        if user.sustainability_score > score:
            return user
        updated = user.model_copy(
            update={"sustainability_score": score, "current_badge": badge}
        )
        self.users[user_id] = updated
        return updated

    def delete(self, user_id: str) -> bool:
        return self.users.pop(user_id, None) is not None

    def list(self, page: int, page_size: int) -> tuple[list[User], int]:
        items = list(self.users.values())
        start = (page - 1) * page_size
        return items[start : start + page_size], len(items)

    def count(self) -> int:
        return len(self.users)


class FakeToyRepository:
    def __init__(self, toys: list[Toy] | None = None) -> None:
        self.toys: dict[str, Toy] = {t.id: t for t in toys or [] if t.id}
        self.last_filter: ListToysFilter | None = None
        self.fail_mark_traded = False

    def insert(self, toy: Toy) -> Toy:
        created = toy.model_copy(update={"id": toy.id or next_id("toy")})
        self.toys[created.id] = created  # type: ignore[index]
        return created

    def find_by_id(self, toy_id: str) -> Toy | None:
        return self.toys.get(toy_id)

    def list(self, flt: ListToysFilter) -> tuple[list[Toy], int]:
        self.last_filter = flt
        items = list(self.toys.values())
        if flt.is_available is not None:
            items = [t for t in items if t.is_available == flt.is_available]
        if flt.user_id:
            items = [t for t in items if t.user_id == flt.user_id]
        if flt.search:
            needle = flt.search.lower()
            items = [
                t
                for t in items
                if needle in t.title.lower() or needle in t.description.lower()
            ]
        start = (flt.page - 1) * flt.page_size
        return items[start : start + flt.page_size], len(items)

    def list_by_user(self, user_id: str) -> list[Toy]:
        return [t for t in self.toys.values() if t.user_id == user_id]

    def update_fields(self, toy_id: str, fields: dict[str, Any]) -> Toy | None:
        toy = self.toys.get(toy_id)
        if toy is None:
            return None
        updated = toy.model_copy(update={**fields, "updated_at": now_utc()})
        self.toys[toy_id] = updated
        return updated

    def mark_traded(self, toy_id: str) -> Toy | None:
        if self.fail_mark_traded:
            raise RuntimeError("toys collection unavailable")
        toy = self.toys.get(toy_id)
        if toy is None or not toy.is_available or toy.status == ToyStatus.TRADED:
            return None
        return self.update_fields(
            toy_id, {"is_available": False, "status": ToyStatus.TRADED}
        )

    def delete(self, toy_id: str) -> bool:
        return self.toys.pop(toy_id, None) is not None

    def count(self) -> int:
        return len(self.toys)


class FakeToyRequestRepository:
    def __init__(self, requests: list[ToyRequest] | None = None) -> None:
        self.requests: dict[str, ToyRequest] = {r.id: r for r in requests or [] if r.id}

    def insert(self, request: ToyRequest) -> ToyRequest:
        created = request.model_copy(update={"id": request.id or next_id("req")})
        self.requests[created.id] = created  # type: ignore[index]
        return created

    def find_by_id(self, request_id: str) -> ToyRequest | None:
        return self.requests.get(request_id)

    def list_by_toy(self, toy_id: str) -> list[ToyRequest]:
        return [r for r in self.requests.values() if r.toy_id == toy_id]

    def list_by_requester(self, requester_id: str) -> list[ToyRequest]:
        return [r for r in self.requests.values() if r.requester_id == requester_id]

    def list_by_owner(self, owner_id: str) -> list[ToyRequest]:
        return [r for r in self.requests.values() if r.owner_id == owner_id]

    def has_pending(self, toy_id: str, requester_id: str) -> bool:
        return any(
            r.toy_id == toy_id
            and r.requester_id == requester_id
            and r.status == RequestStatus.PENDING
            for r in self.requests.values()
        )

    def update_status_if(
        self, request_id: str, expected: RequestStatus, target: RequestStatus
    ) -> ToyRequest | None:
        request = self.requests.get(request_id)
        if request is None or request.status != expected:
            return None
        updated = request.model_copy(update={"status": target, "updated_at": now_utc()})
        self.requests[request_id] = updated
        return updated

    def set_feedback_if_absent(
        self, request_id: str, feedback: str, rating: int
    ) -> ToyRequest | None:
        request = self.requests.get(request_id)
        if (
            request is None
            or request.status != RequestStatus.APPROVED
            or request.feedback is not None
        ):
            return None
        updated = request.model_copy(update={"feedback": feedback, "rating": rating})
        self.requests[request_id] = updated
        return updated

    def list_reviews_for_owner(self, owner_id: str) -> list[ToyRequest]:
        return [
            r
            for r in self.requests.values()
            if r.owner_id == owner_id and r.status == RequestStatus.APPROVED and r.feedback
        ]

    def reject_pending_for_toy(self, toy_id: str, except_request_id: str) -> int:
        count = 0
        for rid, r in list(self.requests.items()):
            if (
                r.toy_id == toy_id
                and r.status == RequestStatus.PENDING
                and rid != except_request_id
            ):
                self.requests[rid] = r.model_copy(
                    update={"status": RequestStatus.REJECTED, "updated_at": now_utc()}
                )
                count += 1
        return count


class FakeFavoriteRepository:
    def __init__(self) -> None:
        self.favorites: dict[tuple[str, str], Favorite] = {}

    def create(self, user_id: str, toy_id: str) -> Favorite:
        key = (user_id, toy_id)
        if key not in self.favorites:
            self.favorites[key] = Favorite(
                id=next_id("fav"), user_id=user_id, toy_id=toy_id, created_at=now_utc()
            )
        return self.favorites[key]

    def find(self, user_id: str, toy_id: str) -> Favorite | None:
        return self.favorites.get((user_id, toy_id))

    def delete(self, user_id: str, toy_id: str) -> bool:
        return self.favorites.pop((user_id, toy_id), None) is not None

    def list_by_user(self, user_id: str) -> list[Favorite]:
        return [f for (uid, _), f in self.favorites.items() if uid == user_id]

    def delete_all_by_user(self, user_id: str) -> int:
        keys = [k for k in self.favorites if k[0] == user_id]
        for key in keys:
            del self.favorites[key]
        return len(keys)


class FakeMessageRepository:
    def __init__(self) -> None:
        self.messages: dict[str, Message] = {}

    def insert(self, message: Message) -> Message:
        created = message.model_copy(update={"id": message.id or next_id("msg")})
        self.messages[created.id] = created  # type: ignore[index]
        return created

    def find_by_id(self, message_id: str) -> Message | None:
        return self.messages.get(message_id)

    def list_by_user(self, user_id: str) -> list[Message]:
        return [
            m
            for m in self.messages.values()
            if user_id in (m.sender_id, m.receiver_id)
        ]

    def list_between(self, user_id: str, other_user_id: str) -> list[Message]:
        pair = {user_id, other_user_id}
        return sorted(
            (m for m in self.messages.values() if {m.sender_id, m.receiver_id} == pair),
            key=lambda m: m.created_at,
        )

    def mark_read(self, message_id: str) -> Message | None:
        message = self.messages.get(message_id)
        if message is None:
            return None
        updated = message.model_copy(update={"read": True})
        self.messages[message_id] = updated
        return updated

    def delete(self, message_id: str) -> bool:
        return self.messages.pop(message_id, None) is not None

    def delete_conversation(self, user_id: str, other_user_id: str) -> int:
        ids = [m.id for m in self.list_between(user_id, other_user_id)]
        for message_id in ids:
            del self.messages[message_id]  # type: ignore[arg-type]
        return len(ids)

    def count_unread(self, receiver_id: str) -> int:
        return sum(
            1 for m in self.messages.values() if m.receiver_id == receiver_id and not m.read
        )


class FakeWishRepository:
    def __init__(self, wishes: list[Wish] | None = None) -> None:
        self.wishes: dict[str, Wish] = {w.id: w for w in wishes or [] if w.id}

    def insert(self, wish: Wish) -> Wish:
        created = wish.model_copy(update={"id": wish.id or next_id("wish")})
        self.wishes[created.id] = created  # type: ignore[index]
        return created

    def find_by_id(self, wish_id: str) -> Wish | None:
        return self.wishes.get(wish_id)

    def list(self, flt: ListWishesFilter) -> tuple[list[Wish], int]:
        items = [
            w
            for w in self.wishes.values()
            if w.is_public and w.status == WishStatus.ACTIVE
        ]
        return items, len(items)

    def list_by_user(self, user_id: str) -> list[Wish]:
        return [w for w in self.wishes.values() if w.user_id == user_id]

    def update_fields(self, wish_id: str, fields: dict[str, Any]) -> Wish | None:
        wish = self.wishes.get(wish_id)
        if wish is None:
            return None
        updated = wish.model_copy(update=fields)
        if "status" in fields:
            updated.status = WishStatus(fields["status"])
        self.wishes[wish_id] = updated
        return updated

    def delete(self, wish_id: str) -> bool:
        return self.wishes.pop(wish_id, None) is not None


class FakeWishOfferRepository:
    def __init__(self) -> None:
        self.offers: dict[str, WishOffer] = {}

    def insert(self, offer: WishOffer) -> WishOffer:
        created = offer.model_copy(update={"id": offer.id or next_id("offer")})
        self.offers[created.id] = created  # type: ignore[index]
        return created

    def find_by_id(self, offer_id: str) -> WishOffer | None:
        return self.offers.get(offer_id)

    def list_by_wish(self, wish_id: str) -> list[WishOffer]:
        return [o for o in self.offers.values() if o.wish_id == wish_id]

    def has_pending(self, wish_id: str, offerer_id: str) -> bool:
        return any(
            o.wish_id == wish_id
            and o.offerer_id == offerer_id
            and o.status == OfferStatus.PENDING
            for o in self.offers.values()
        )

    def update_status_if(
        self, offer_id: str, expected: OfferStatus, target: OfferStatus
    ) -> WishOffer | None:
        offer = self.offers.get(offer_id)
        if offer is None or offer.status != expected:
            return None
        updated = offer.model_copy(update={"status": target})
        self.offers[offer_id] = updated
        return updated


class FakeContactMessageRepository:
    def __init__(self) -> None:
        self.items: list[ContactMessage] = []

    def insert(self, contact: ContactMessage) -> ContactMessage:
        created = contact.model_copy(update={"id": next_id("contact")})
        self.items.append(created)
        return created

    def list(self, page: int, page_size: int) -> tuple[list[ContactMessage], int]:
        start = (page - 1) * page_size
        return self.items[start : start + page_size], len(self.items)


class FakeAuthSessionRepository:
    def __init__(self) -> None:
        self.sessions: dict[str, AuthSession] = {}

    def create(self, session: AuthSession) -> AuthSession:
        self.sessions[session.token] = session
        return session

    def find_by_token(self, token: str) -> AuthSession | None:
        return self.sessions.get(token)

    def delete_by_token(self, token: str) -> bool:
        return self.sessions.pop(token, None) is not None

    def delete_all_by_user(self, user_id: str) -> int:
        tokens = [t for t, s in self.sessions.items() if s.user_id == user_id]
        for token in tokens:
            del self.sessions[token]
        return len(tokens)

    def add_expired(self, token: str, user_id: str) -> AuthSession:
        created = now_utc() - timedelta(days=2)
        session = AuthSession(
            token=token,
            user_id=user_id,
            expires_at=created + timedelta(days=1),
            created_at=created,
            updated_at=created,
        )
        self.sessions[token] = session
        return session


class FakeCommunityMetricsRepository:
    def __init__(self) -> None:
        self.metrics = CommunityMetrics()
        self.increments: list[CommunityMetricsIncrement] = []

    def get(self) -> CommunityMetrics:
        return self.metrics

    def increment(
        self, inc: CommunityMetricsIncrement, now: datetime | None = None
    ) -> CommunityMetrics:
        self.increments.append(inc)
        self.metrics = self.metrics.model_copy(
            update={
                "toys_saved": self.metrics.toys_saved + inc.toys_saved,
                "families_connected": self.metrics.families_connected
                + inc.families_connected,
                "waste_reduced_kg": self.metrics.waste_reduced_kg + inc.waste_reduced_kg,
            }
        )
        return self.metrics


class FakeReportRepository:
    def __init__(self) -> None:
        self.reports: dict[str, Report] = {}

    def insert(self, report: Report) -> Report:
        created = report.model_copy(update={"id": report.id or next_id("report")})
        self.reports[created.id] = created  # type: ignore[index]
        return created

    def find_by_id(self, report_id: str) -> Report | None:
        return self.reports.get(report_id)

    def list(
        self, status: ReportStatus | None, page: int, page_size: int
    ) -> tuple[list[Report], int]:
        items = sorted(self.reports.values(), key=lambda r: r.created_at, reverse=True)
        if status is not None:
            items = [r for r in items if r.status == status]
        start = (page - 1) * page_size
        return items[start : start + page_size], len(items)

    def update_status_if(
        self,
        report_id: str,
        expected: ReportStatus,
        target: ReportStatus,
        reviewer_id: str,
    ) -> Report | None:
        report = self.reports.get(report_id)
        if report is None or report.status != expected:
            return None
        now = now_utc()
        updated = report.model_copy(
            update={
                "status": target,
                "reviewed_by": reviewer_id,
                "reviewed_at": now,
                "updated_at": now,
            }
        )
        self.reports[report_id] = updated
        return updated
