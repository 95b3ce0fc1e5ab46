import pytest
from uuid import uuid4

from swapstreet.core.config import settings
from swapstreet.core.errors import AuthorizationException, BusinessLogicException, ResourceNotFoundException
from swapstreet.services import chatroom_service, message_service


class TestMessageService:
    """메시지 서비스 테스트"""

    @pytest.mark.asyncio
    async def test_send_message(self, test_session, test_chatroom, buyer):
        message = await message_service.send_message(test_session, test_chatroom.id, buyer.id, "Hello!")

        assert message.content == "Hello!"
        assert message.author_id == buyer.id
        assert message.chatroom_id == test_chatroom.id
        assert message.send_date is not None

        stored = await message_service.get_message_by_id(test_session, message.id)
        assert stored.content == "Hello!"

    @pytest.mark.asyncio
    async def test_send_message_unknown_chatroom(self, test_session, buyer):
        with pytest.raises(ResourceNotFoundException):
            await message_service.send_message(test_session, uuid4(), buyer.id, "Hello!")

    @pytest.mark.asyncio
    async def test_send_message_non_member(self, test_session, test_chatroom, outsider):
        with pytest.raises(AuthorizationException):
            await message_service.send_message(test_session, test_chatroom.id, outsider.id, "Hello!")

    @pytest.mark.asyncio
    async def test_send_message_uses_shared_membership_check(self, test_session, test_chatroom, buyer, monkeypatch):
        calls = []

        async def deny(db, user_id, chatroom_id):
            calls.append((user_id, chatroom_id))
            return False

        monkeypatch.setattr(chatroom_service, "user_belongs_to_chatroom", deny)

        with pytest.raises(AuthorizationException):
            await message_service.send_message(test_session, test_chatroom.id, buyer.id, "Hello!")
        assert calls == [(buyer.id, test_chatroom.id)]

    @pytest.mark.asyncio
    async def test_send_blank_message(self, test_session, test_chatroom, buyer):
        with pytest.raises(BusinessLogicException) as exc_info:
            await message_service.send_message(test_session, test_chatroom.id, buyer.id, "   ")

        assert exc_info.value.message == "Message content cannot be empty"

    @pytest.mark.asyncio
    async def test_send_too_long_message(self, test_session, test_chatroom, buyer):
        with pytest.raises(BusinessLogicException):
            await message_service.send_message(
                test_session, test_chatroom.id, buyer.id, "x" * (settings.message_max_length + 1)
            )

    @pytest.mark.asyncio
    async def test_get_messages_chronological(self, test_session, test_chatroom, chatroom_messages):
        messages = await message_service.get_messages(test_session, test_chatroom.id)

        assert [m.content for m in messages] == [m.content for m in chatroom_messages]

    @pytest.mark.asyncio
    async def test_get_messages_pages_from_newest(self, test_session, test_chatroom, chatroom_messages):
        first_page = await message_service.get_messages(test_session, test_chatroom.id, page=1, page_size=2)
        second_page = await message_service.get_messages(test_session, test_chatroom.id, page=2, page_size=2)

        assert [m.content for m in first_page] == ["Yes it is", "Great, can we meet tomorrow?"]
        assert [m.content for m in second_page] == ["Is this jacket still available?"]

    @pytest.mark.asyncio
    async def test_delete_message(self, test_session, test_chatroom, chatroom_messages):
        target = chatroom_messages[0]

        await message_service.delete_message_by_id(test_session, target.id)

        assert await message_service.get_message_by_id(test_session, target.id) is None
        with pytest.raises(ResourceNotFoundException):
            await message_service.delete_message_by_id(test_session, target.id)
