from __future__ import annotations

import logging
from datetime import datetime, timezone

from fastapi import Depends

from .dependencies import (
    get_message_repository,
    get_toy_repository,
    get_user_repository,
)
from ..exceptions import InvalidRequestError, NotFoundError, PermissionDeniedError
from ..models.message import Message
from ..repositories.interfaces import (
    MessageRepositoryInterface,
    ToyRepositoryInterface,
    UserRepositoryInterface,
)


logger = logging.getLogger(__name__)


class MessagesService:
    """유저 간 1:1 메시지.

    - 메시지는 보낸 사람만, 상대가 읽기 전에만 삭제할 수 있다.
    - 읽음 처리는 받는 사람만 할 수 있다.
    """

    def __init__(
        self,
        message_repo: MessageRepositoryInterface,
        user_repo: UserRepositoryInterface,
        toy_repo: ToyRepositoryInterface,
    ) -> None:
        self._message_repo = message_repo
        self._user_repo = user_repo
        self._toy_repo = toy_repo

    def send(self, sender_id: str, receiver_id: str, toy_id: str, content: str) -> Message:
        if not content or not content.strip():
            raise InvalidRequestError("message content must not be blank")
        if sender_id == receiver_id:
            raise InvalidRequestError("you cannot send a message to yourself")
        if self._user_repo.find_by_id(receiver_id) is None:
            raise NotFoundError("receiver not found")
        if self._toy_repo.find_by_id(toy_id) is None:
            raise NotFoundError("toy not found")

        now = datetime.now(timezone.utc)
        created = self._message_repo.insert(
            Message(
                sender_id=sender_id,
                receiver_id=receiver_id,
                toy_id=toy_id,
                content=content.strip(),
                created_at=now,
                updated_at=now,
            )
        )
        logger.info("message sent", extra={"user_id": sender_id, "toy_id": toy_id})
        return created

    def list_for_user(self, user_id: str) -> list[Message]:
        return self._message_repo.list_by_user(user_id)

    def conversation(self, user_id: str, other_user_id: str) -> list[Message]:
        return self._message_repo.list_between(user_id, other_user_id)

    def unread_count(self, user_id: str) -> int:
        return self._message_repo.count_unread(user_id)

    def _get(self, message_id: str) -> Message:
        message = self._message_repo.find_by_id(message_id)
        if message is None:
            raise NotFoundError("message not found")
        return message

    def mark_read(self, message_id: str, actor_id: str) -> Message:
        message = self._get(message_id)
        if message.receiver_id != actor_id:
            raise PermissionDeniedError("only the receiver can mark a message as read")
        if message.read:
            return message

        updated = self._message_repo.mark_read(message_id)
        if updated is None:
            raise NotFoundError("message not found")
        return updated

    def delete(self, message_id: str, actor_id: str) -> None:
        message = self._get(message_id)
        if message.sender_id != actor_id:
            raise PermissionDeniedError("only the sender can delete a message")
        if message.read:
            raise InvalidRequestError("cannot delete a message that has already been read")

        if not self._message_repo.delete(message_id):
            raise NotFoundError("message not found")

    def delete_conversation(self, user_id: str, other_user_id: str) -> int:
        deleted = self._message_repo.delete_conversation(user_id, other_user_id)
        logger.info("conversation deleted count=%s", deleted, extra={"user_id": user_id})
        return deleted


def get_messages_service(
    message_repo: MessageRepositoryInterface = Depends(get_message_repository),
    user_repo: UserRepositoryInterface = Depends(get_user_repository),
    toy_repo: ToyRepositoryInterface = Depends(get_toy_repository),
) -> MessagesService:
    return MessagesService(message_repo=message_repo, user_repo=user_repo, toy_repo=toy_repo)
