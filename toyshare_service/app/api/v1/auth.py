from __future__ import annotations

from fastapi import APIRouter, Depends, Request, Response, status

from common.models.user import User, UserProfile, UserRegistrationInput

from ..deps import extract_session_token, get_current_user
from ..schemas.common import MessageResponse
from ..schemas.users import (
    AuthResponse,
    LoginRequest,
    RegisterRequest,
    UserProfileResponse,
)
from ...models.auth_session import AuthSession
from ...services.auth_service import AuthService, get_auth_service


router = APIRouter()


def _set_session_cookie(response: Response, session: AuthSession, service: AuthService) -> None:
    config = service.config
    response.set_cookie(
        key=config.cookie_name,
        value=session.token,
        max_age=config.session_ttl_hours * 3600,
        httponly=True,
        secure=config.cookie_secure,
        samesite="lax",
    )


def _auth_response(user: User, session: AuthSession) -> AuthResponse:
    return AuthResponse(
        user=UserProfileResponse.from_domain(UserProfile.from_user(user)),
        token=session.token,
    )


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="회원가입",
)
async def register(
    body: RegisterRequest,
    response: Response,
    service: AuthService = Depends(get_auth_service),
) -> AuthResponse:
    user = service.register(UserRegistrationInput(**body.model_dump()))
    assert user.id is not None
    session = service.create_session(user.id)
    _set_session_cookie(response, session, service)
    return _auth_response(user, session)


@router.post("/login", response_model=AuthResponse, summary="로그인")
async def login(
    body: LoginRequest,
    response: Response,
    service: AuthService = Depends(get_auth_service),
) -> AuthResponse:
    user = service.login(body.username, body.password)
    assert user.id is not None
    session = service.create_session(user.id)
    _set_session_cookie(response, session, service)
    return _auth_response(user, session)


@router.post("/logout", response_model=MessageResponse, summary="로그아웃")
async def logout(
    request: Request,
    response: Response,
    service: AuthService = Depends(get_auth_service),
) -> MessageResponse:
    service.logout(extract_session_token(request, service.config))
    response.delete_cookie(service.config.cookie_name)
    return MessageResponse(message="logged_out")


@router.get("/user", response_model=UserProfileResponse, summary="현재 로그인 유저")
async def current_user(
    user: User = Depends(get_current_user),
) -> UserProfileResponse:
    return UserProfileResponse.from_domain(UserProfile.from_user(user))
