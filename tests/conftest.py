"""Fixtures partagées : connexions, salons et membres IRC."""

import logging

import pytest

from core.member import IrcChatRoomMember
from core.roles import MemberRole
from core.rooms.manager import ChatRoomRoster
from core.rooms.models import ChatRoom, IrcConnection


@pytest.fixture
def connection() -> IrcConnection:
    return IrcConnection(server="irc.libera.chat", port=6697, nickname="me")


@pytest.fixture
def other_connection() -> IrcConnection:
    return IrcConnection(server="irc.libera.chat", port=6697, nickname="me")


@pytest.fixture
def room(connection: IrcConnection) -> ChatRoom:
    return ChatRoom(name="#python", connection=connection)


@pytest.fixture
def member_logger() -> logging.Logger:
    return logging.getLogger("tests.member")


@pytest.fixture
def make_member(connection, room, member_logger):
    def _make(nickname="alice", role=MemberRole.VOICE, *, conn=None, chat_room=None):
        return IrcChatRoomMember(
            conn or connection,
            chat_room or room,
            nickname,
            role,
            logger=member_logger,
        )

    return _make


@pytest.fixture
def roster(connection: IrcConnection) -> ChatRoomRoster:
    roster = ChatRoomRoster(connection)
    roster.join_room("#python")
    roster.join_room("#django")
    return roster
