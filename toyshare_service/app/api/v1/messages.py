from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status

from common.models.user import User

from ..deps import get_current_user
from ..schemas.messages import (
    ConversationDeleteResponse,
    MessageCreateRequest,
    MessageItem,
    UnreadCountResponse,
)
from ...services.messages_service import MessagesService, get_messages_service


router = APIRouter()


@router.get("/messages", response_model=list[MessageItem], summary="내 메시지 전체")
async def list_messages(
    user: User = Depends(get_current_user),
    service: MessagesService = Depends(get_messages_service),
) -> list[MessageItem]:
    assert user.id is not None
    return [MessageItem.from_domain(m) for m in service.list_for_user(user.id)]


@router.get(
    "/messages/unread-count",
    response_model=UnreadCountResponse,
    summary="읽지 않은 메시지 수",
)
async def unread_count(
    user: User = Depends(get_current_user),
    service: MessagesService = Depends(get_messages_service),
) -> UnreadCountResponse:
    assert user.id is not None
    return UnreadCountResponse(count=service.unread_count(user.id))


@router.get(
    "/messages/{other_user_id}",
    response_model=list[MessageItem],
    summary="특정 유저와의 대화 (오래된 순)",
)
async def get_conversation(
    other_user_id: str,
    user: User = Depends(get_current_user),
    service: MessagesService = Depends(get_messages_service),
) -> list[MessageItem]:
    assert user.id is not None
    return [MessageItem.from_domain(m) for m in service.conversation(user.id, other_user_id)]


@router.post(
    "/messages",
    response_model=MessageItem,
    status_code=status.HTTP_201_CREATED,
    summary="메시지 보내기",
)
async def send_message(
    body: MessageCreateRequest,
    user: User = Depends(get_current_user),
    service: MessagesService = Depends(get_messages_service),
) -> MessageItem:
    assert user.id is not None
    message = service.send(user.id, body.receiver_id, body.toy_id, body.content)
    return MessageItem.from_domain(message)


@router.patch("/messages/{message_id}/read", response_model=MessageItem, summary="읽음 처리")
async def mark_message_read(
    message_id: str,
    user: User = Depends(get_current_user),
    service: MessagesService = Depends(get_messages_service),
) -> MessageItem:
    assert user.id is not None
    return MessageItem.from_domain(service.mark_read(message_id, user.id))


@router.delete(
    "/messages/{message_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="읽기 전 메시지 삭제 (보낸 사람)",
)
async def delete_message(
    message_id: str,
    user: User = Depends(get_current_user),
    service: MessagesService = Depends(get_messages_service),
) -> Response:
    assert user.id is not None
    service.delete(message_id, user.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/conversations/{other_user_id}",
    response_model=ConversationDeleteResponse,
    summary="대화 전체 삭제",
)
async def delete_conversation(
    other_user_id: str,
    user: User = Depends(get_current_user),
    service: MessagesService = Depends(get_messages_service),
) -> ConversationDeleteResponse:
    assert user.id is not None
    return ConversationDeleteResponse(
        deleted=service.delete_conversation(user.id, other_user_id)
    )
