import pytest
from datetime import datetime, timezone
from uuid import uuid4

from swapstreet.realtime.connection_manager import ConnectionManager
from swapstreet.schemas.chat import MessageResponse


class FakeWebSocket:
    def __init__(self, fail_on_send: bool = False):
        self.accepted = False
        self.frames = []
        self.fail_on_send = fail_on_send

    async def accept(self):
        self.accepted = True

    async def send_json(self, data):
        if self.fail_on_send:
            raise RuntimeError("socket closed")
        self.frames.append(data)


@pytest.fixture
def manager():
    return ConnectionManager()


class TestConnectionManager:
    """WebSocket 연결 매니저 테스트"""

    def test_initial_state(self, manager):
        assert manager.get_connection_count() == 0
        assert manager.get_group_connections("chatroom-x") == []
        assert manager.is_connected("c1") is False

    @pytest.mark.asyncio
    async def test_connect_accepts_and_registers(self, manager):
        websocket = FakeWebSocket()

        await manager.connect(websocket, "c1")

        assert websocket.accepted
        assert manager.is_connected("c1")
        assert manager.get_connection_count() == 1

    @pytest.mark.asyncio
    async def test_group_membership(self, manager):
        await manager.connect(FakeWebSocket(), "c1")
        await manager.connect(FakeWebSocket(), "c2")

        await manager.add_to_group("c1", "chatroom-a")
        await manager.add_to_group("c2", "chatroom-a")
        await manager.add_to_group("c1", "chatroom-b")

        assert sorted(manager.get_group_connections("chatroom-a")) == ["c1", "c2"]
        assert sorted(manager.get_connection_groups("c1")) == ["chatroom-a", "chatroom-b"]

        await manager.remove_from_group("c1", "chatroom-a")

        assert manager.get_group_connections("chatroom-a") == ["c2"]
        assert manager.get_connection_groups("c1") == ["chatroom-b"]

    @pytest.mark.asyncio
    async def test_add_unknown_connection_is_ignored(self, manager):
        await manager.add_to_group("ghost", "chatroom-a")

        assert manager.get_group_connections("chatroom-a") == []

    @pytest.mark.asyncio
    async def test_empty_group_is_dropped(self, manager):
        await manager.connect(FakeWebSocket(), "c1")
        await manager.add_to_group("c1", "chatroom-a")
        await manager.remove_from_group("c1", "chatroom-a")

        assert "chatroom-a" not in manager.groups

    @pytest.mark.asyncio
    async def test_disconnect_leaves_all_groups(self, manager):
        await manager.connect(FakeWebSocket(), "c1")
        await manager.add_to_group("c1", "chatroom-a")
        await manager.add_to_group("c1", "chatroom-b")

        await manager.disconnect("c1")

        assert not manager.is_connected("c1")
        assert manager.groups == {}
        assert manager.get_connection_groups("c1") == []

    @pytest.mark.asyncio
    async def test_send_to_connection_frame(self, manager):
        websocket = FakeWebSocket()
        await manager.connect(websocket, "c1")
        chatroom_id = uuid4()

        await manager.send_to_connection("c1", "JoinedChatroom", chatroom_id)

        assert websocket.frames == [{"type": "JoinedChatroom", "data": str(chatroom_id)}]

    @pytest.mark.asyncio
    async def test_send_to_group_uses_camel_case(self, manager):
        first, second, outside = FakeWebSocket(), FakeWebSocket(), FakeWebSocket()
        await manager.connect(first, "c1")
        await manager.connect(second, "c2")
        await manager.connect(outside, "c3")
        await manager.add_to_group("c1", "chatroom-a")
        await manager.add_to_group("c2", "chatroom-a")

        message = MessageResponse(
            id=uuid4(),
            send_date=datetime(2025, 1, 1, tzinfo=timezone.utc),
            content="hello",
            chatroom_id=uuid4(),
            author_id=uuid4()
        )
        await manager.send_to_group("chatroom-a", "ReceiveMessage", message)

        assert len(first.frames) == 1
        assert first.frames == second.frames
        assert outside.frames == []
        frame = first.frames[0]
        assert frame["type"] == "ReceiveMessage"
        assert frame["data"]["content"] == "hello"
        assert frame["data"]["chatroomId"] == str(message.chatroom_id)
        assert "sendDate" in frame["data"]

    @pytest.mark.asyncio
    async def test_failed_send_drops_connection(self, manager):
        healthy, broken = FakeWebSocket(), FakeWebSocket(fail_on_send=True)
        await manager.connect(healthy, "c1")
        await manager.connect(broken, "c2")
        await manager.add_to_group("c1", "chatroom-a")
        await manager.add_to_group("c2", "chatroom-a")

        await manager.send_to_group("chatroom-a", "ReceiveMessage", {"content": "hi"})

        assert len(healthy.frames) == 1
        assert not manager.is_connected("c2")
        assert manager.get_group_connections("chatroom-a") == ["c1"]

    @pytest.mark.asyncio
    async def test_send_to_unknown_connection_is_noop(self, manager):
        await manager.send_to_connection("ghost", "Error", "nope")
