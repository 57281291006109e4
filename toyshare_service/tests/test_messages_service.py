from __future__ import annotations

import pytest

from toyshare_service.app.exceptions import (
    InvalidRequestError,
    NotFoundError,
    PermissionDeniedError,
)
from toyshare_service.app.services.messages_service import MessagesService

from toyshare_service.tests.fakes import (
    FakeMessageRepository,
    FakeToyRepository,
    FakeUserRepository,
    build_toy,
    build_user,
)


@pytest.fixture
def service() -> MessagesService:
    return MessagesService(
        message_repo=FakeMessageRepository(),
        user_repo=FakeUserRepository([build_user("alice"), build_user("bob")]),
        toy_repo=FakeToyRepository([build_toy("toy-1", user_id="bob")]),
    )


def test_send_validations(service: MessagesService) -> None:
    with pytest.raises(InvalidRequestError):
        service.send("alice", "bob", "toy-1", "   ")
    with pytest.raises(InvalidRequestError):
        service.send("alice", "alice", "toy-1", "hi me")
    with pytest.raises(NotFoundError):
        service.send("alice", "carol", "toy-1", "hi")
    with pytest.raises(NotFoundError):
        service.send("alice", "bob", "missing", "hi")


def test_conversation_and_unread(service: MessagesService) -> None:
    first = service.send("alice", "bob", "toy-1", "Is the train still available?")
    second = service.send("bob", "alice", "toy-1", "Yes it is!")

    assert [m.id for m in service.conversation("alice", "bob")] == [first.id, second.id]
    assert service.unread_count("bob") == 1
    assert len(service.list_for_user("alice")) == 2

    assert first.id is not None
    service.mark_read(first.id, "bob")
    assert service.unread_count("bob") == 0


def test_only_receiver_marks_read(service: MessagesService) -> None:
    message = service.send("alice", "bob", "toy-1", "hello")
    assert message.id is not None
    with pytest.raises(PermissionDeniedError):
        service.mark_read(message.id, "alice")


def test_delete_rules(service: MessagesService) -> None:
    unread = service.send("alice", "bob", "toy-1", "oops")
    read = service.send("alice", "bob", "toy-1", "seen")
    assert unread.id is not None and read.id is not None

    with pytest.raises(PermissionDeniedError):
        service.delete(unread.id, "bob")

    service.mark_read(read.id, "bob")
    with pytest.raises(InvalidRequestError):
        service.delete(read.id, "alice")

    service.delete(unread.id, "alice")
    with pytest.raises(NotFoundError):
        service.delete(unread.id, "alice")


def test_delete_conversation_removes_both_directions(service: MessagesService) -> None:
    service.send("alice", "bob", "toy-1", "one")
    service.send("bob", "alice", "toy-1", "two")

    assert service.delete_conversation("alice", "bob") == 2
    assert service.conversation("alice", "bob") == []
