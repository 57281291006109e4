"""인증 관련 FastAPI 의존성.

세션 토큰은 `Authorization: Bearer <token>` 헤더를 먼저 보고, 없으면 세션 쿠키에서 읽는다.
"""

from __future__ import annotations

from fastapi import Depends, Request

from common.models.user import User

from ..config import AuthConfig
from ..exceptions import PermissionDeniedError
from ..services.auth_service import AuthService, get_auth_service


BEARER_PREFIX = "bearer "


def extract_session_token(request: Request, config: AuthConfig) -> str | None:
    authorization = request.headers.get("Authorization", "")
    if authorization.lower().startswith(BEARER_PREFIX):
        token = authorization[len(BEARER_PREFIX):].strip()
        if token:
            return token
    return request.cookies.get(config.cookie_name) or None


def get_current_user(
    request: Request,
    auth_service: AuthService = Depends(get_auth_service),
) -> User:
    token = extract_session_token(request, auth_service.config)
    user = auth_service.resolve_session(token)
    # RequestTraceMiddleware 가 로그에 user_id 를 남길 수 있도록 저장한다.
    request.state.user_id = user.id
    return user


def get_admin_user(user: User = Depends(get_current_user)) -> User:
    if not user.is_admin:
        raise PermissionDeniedError("admin access required")
    return user
