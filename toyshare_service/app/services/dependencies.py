"""FastAPI DI용 리포지토리/설정 팩토리 모음.

여러 서비스가 같은 리포지토리를 공유하므로 서비스 모듈마다 팩토리를 두지 않고 여기에 모은다.
"""

from __future__ import annotations

from fastapi import Depends
from pymongo.database import Database

from common.mongo.client import get_database

from ..config import AppConfig, get_config
from ..repositories.auth_session_repository import AuthSessionRepository
from ..repositories.community_metrics_repository import CommunityMetricsRepository
from ..repositories.contact_message_repository import ContactMessageRepository
from ..repositories.favorite_repository import FavoriteRepository
from ..repositories.interfaces import (
    AuthSessionRepositoryInterface,
    CommunityMetricsRepositoryInterface,
    ContactMessageRepositoryInterface,
    FavoriteRepositoryInterface,
    MessageRepositoryInterface,
    ReportRepositoryInterface,
    ToyRepositoryInterface,
    ToyRequestRepositoryInterface,
    UserRepositoryInterface,
    WishOfferRepositoryInterface,
    WishRepositoryInterface,
)
from ..repositories.message_repository import MessageRepository
from ..repositories.report_repository import ReportRepository
from ..repositories.toy_repository import ToyRepository
from ..repositories.toy_request_repository import ToyRequestRepository
from ..repositories.user_repository import UserRepository
from ..repositories.wish_repository import WishOfferRepository, WishRepository


def get_app_config() -> AppConfig:
    """FastAPI DI용 설정 팩토리. 테스트에서 dependency_overrides 로 교체할 수 있다."""

    return get_config()


def get_user_repository(
    db: Database = Depends(get_database),
) -> UserRepositoryInterface:
    """FastAPI DI용 UserRepository 팩토리."""

    return UserRepository(db)


def get_toy_repository(
    db: Database = Depends(get_database),
) -> ToyRepositoryInterface:
    return ToyRepository(db)


def get_toy_request_repository(
    db: Database = Depends(get_database),
) -> ToyRequestRepositoryInterface:
    return ToyRequestRepository(db)


def get_favorite_repository(
    db: Database = Depends(get_database),
) -> FavoriteRepositoryInterface:
    return FavoriteRepository(db)


def get_message_repository(
    db: Database = Depends(get_database),
) -> MessageRepositoryInterface:
    return MessageRepository(db)


def get_wish_repository(
    db: Database = Depends(get_database),
) -> WishRepositoryInterface:
    return WishRepository(db)


def get_wish_offer_repository(
    db: Database = Depends(get_database),
) -> WishOfferRepositoryInterface:
    return WishOfferRepository(db)


def get_contact_message_repository(
    db: Database = Depends(get_database),
) -> ContactMessageRepositoryInterface:
    return ContactMessageRepository(db)


def get_auth_session_repository(
    db: Database = Depends(get_database),
) -> AuthSessionRepositoryInterface:
    return AuthSessionRepository(db)


def get_community_metrics_repository(
    db: Database = Depends(get_database),
) -> CommunityMetricsRepositoryInterface:
    return CommunityMetricsRepository(db)


def get_report_repository(
    db: Database = Depends(get_database),
) -> ReportRepositoryInterface:
    return ReportRepository(db)
