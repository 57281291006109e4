"""회원가입/로그인/세션 서비스.

- 비밀번호는 passlib(pbkdf2_sha256)으로 해시해 저장한다.
- 로그인에 성공하면 임의 토큰으로 세션을 만들고, 토큰은 쿠키 또는 Bearer 헤더로 전달된다.
"""

from __future__ import annotations

import logging
import secrets
from datetime import datetime, timedelta, timezone

from fastapi import Depends
from passlib.context import CryptContext

from common.models.user import DEFAULT_BADGE_NAME, User, UserRegistrationInput, UserRole

from .dependencies import (
    get_app_config,
    get_auth_session_repository,
    get_user_repository,
)
from ..config import AppConfig, AuthConfig
from ..exceptions import AuthenticationError, ConflictError, InvalidRequestError
from ..models.auth_session import AuthSession
from ..repositories.interfaces import (
    AuthSessionRepositoryInterface,
    UserRepositoryInterface,
)


logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")

SESSION_TOKEN_BYTES = 32
MIN_PASSWORD_LENGTH = 6


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return pwd_context.verify(password, password_hash)
    except ValueError:
        # 알 수 없는 형식의 해시는 불일치로 본다.
        return False


class AuthService:
    def __init__(
        self,
        user_repo: UserRepositoryInterface,
        session_repo: AuthSessionRepositoryInterface,
        config: AuthConfig,
    ) -> None:
        self._user_repo = user_repo
        self._session_repo = session_repo
        self._config = config

    def register(self, input_model: UserRegistrationInput) -> User:
        username = input_model.username.strip()
        email = input_model.email.strip().lower()
        if not username:
            raise InvalidRequestError("username must not be blank")
        if len(input_model.password) < MIN_PASSWORD_LENGTH:
            raise InvalidRequestError(
                f"password must be at least {MIN_PASSWORD_LENGTH} characters"
            )

        if self._user_repo.find_by_username(username) is not None:
            raise ConflictError("username already exists")
        if self._user_repo.find_by_email(email) is not None:
            raise ConflictError("email already in use")

        role = UserRole.ADMIN if username in self._config.admin_usernames else UserRole.USER
        now = datetime.now(timezone.utc)
        user = User(
            username=username,
            email=email,
            name=input_model.name,
            location=input_model.location,
            bio=input_model.bio,
            profile_picture=input_model.profile_picture,
            role=role,
            password_hash=hash_password(input_model.password),
            current_badge=DEFAULT_BADGE_NAME,
            created_at=now,
            updated_at=now,
        )
        created = self._user_repo.insert(user)
        logger.info("user registered role=%s", created.role, extra={"user_id": created.id})
        return created

    def login(self, identifier: str, password: str) -> User:
        """identifier 에 @ 가 있으면 이메일, 없으면 username 으로 찾는다."""

        identifier = identifier.strip()
        if "@" in identifier:
            user = self._user_repo.find_by_email(identifier.lower())
        else:
            user = self._user_repo.find_by_username(identifier)

        if user is None or not verify_password(password, user.password_hash):
            raise AuthenticationError("invalid username or password")
        return user

    def create_session(self, user_id: str) -> AuthSession:
        now = datetime.now(timezone.utc)
        session = AuthSession(
            token=secrets.token_urlsafe(SESSION_TOKEN_BYTES),
            user_id=user_id,
            expires_at=now + timedelta(hours=self._config.session_ttl_hours),
            created_at=now,
            updated_at=now,
        )
        return self._session_repo.create(session)

    def resolve_session(self, token: str | None) -> User:
        if not token:
            raise AuthenticationError("not authenticated")

        session = self._session_repo.find_by_token(token)
        if session is None:
            raise AuthenticationError("session expired or invalid")

        if session.is_expired(datetime.now(timezone.utc)):
            self._session_repo.delete_by_token(token)
            raise AuthenticationError("session expired or invalid")

        user = self._user_repo.find_by_id(session.user_id)
        if user is None:
            # 세션은 남아 있지만 유저가 삭제된 경우
            self._session_repo.delete_by_token(token)
            raise AuthenticationError("session expired or invalid")
        return user

    def logout(self, token: str | None) -> None:
        if token:
            self._session_repo.delete_by_token(token)

    @property
    def config(self) -> AuthConfig:
        return self._config


def get_auth_service(
    user_repo: UserRepositoryInterface = Depends(get_user_repository),
    session_repo: AuthSessionRepositoryInterface = Depends(get_auth_session_repository),
    config: AppConfig = Depends(get_app_config),
) -> AuthService:
    """FastAPI DI용 AuthService 팩토리."""

    return AuthService(user_repo=user_repo, session_repo=session_repo, config=config.auth)
