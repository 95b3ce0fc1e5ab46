import pytest
from uuid import uuid4

from swapstreet.core.errors import BusinessLogicException, ResourceNotFoundException
from swapstreet.models import Message
from swapstreet.services import chatroom_service
from tests.conftest import BASE_TIME


class TestChatroomService:
    """채팅방 서비스 테스트"""

    @pytest.mark.asyncio
    async def test_create_chatroom(self, test_session, seller, buyer):
        chatroom = await chatroom_service.create_chatroom(test_session, seller.id, buyer.id)

        assert chatroom.seller_id == seller.id
        assert chatroom.buyer_id == buyer.id
        assert chatroom.messages == []
        assert chatroom.creation_time is not None

    @pytest.mark.asyncio
    async def test_create_chatroom_same_user(self, test_session, seller):
        with pytest.raises(BusinessLogicException):
            await chatroom_service.create_chatroom(test_session, seller.id, seller.id)

    @pytest.mark.asyncio
    async def test_create_chatroom_unknown_profile(self, test_session, seller):
        with pytest.raises(ResourceNotFoundException):
            await chatroom_service.create_chatroom(test_session, seller.id, uuid4())

    @pytest.mark.asyncio
    async def test_find_existing_chatroom_either_orientation(self, test_session, test_chatroom, seller, buyer):
        found = await chatroom_service.find_existing_chatroom(test_session, seller.id, buyer.id)
        reversed_found = await chatroom_service.find_existing_chatroom(test_session, buyer.id, seller.id)

        assert found.id == test_chatroom.id
        assert reversed_found.id == test_chatroom.id

    @pytest.mark.asyncio
    async def test_get_or_create_returns_existing(self, test_session, test_chatroom, chatroom_messages, seller, buyer):
        chatroom = await chatroom_service.get_or_create_chatroom(test_session, seller.id, buyer.id)

        assert chatroom.id == test_chatroom.id
        assert len(chatroom.messages) == 3

    @pytest.mark.asyncio
    async def test_get_or_create_creates(self, test_session, seller, buyer):
        chatroom = await chatroom_service.get_or_create_chatroom(test_session, seller.id, buyer.id)
        again = await chatroom_service.get_or_create_chatroom(test_session, seller.id, buyer.id)

        assert again.id == chatroom.id

    @pytest.mark.asyncio
    async def test_get_chatroom_with_messages_ordered(self, test_session, test_chatroom, chatroom_messages):
        chatroom = await chatroom_service.get_chatroom_with_messages(test_session, test_chatroom.id)

        assert [m.content for m in chatroom.messages] == [m.content for m in chatroom_messages]

    @pytest.mark.asyncio
    async def test_get_chatroom_with_messages_missing(self, test_session):
        assert await chatroom_service.get_chatroom_with_messages(test_session, uuid4()) is None

    @pytest.mark.asyncio
    async def test_user_chatrooms_carry_last_message(self, test_session, test_chatroom, chatroom_messages, seller, outsider):
        chatrooms = await chatroom_service.get_user_chatrooms(test_session, seller.id)

        assert len(chatrooms) == 1
        assert [m.content for m in chatrooms[0].messages] == ["Great, can we meet tomorrow?"]
        assert await chatroom_service.get_user_chatrooms(test_session, outsider.id) == []

    @pytest.mark.asyncio
    async def test_user_belongs_to_chatroom(self, test_session, test_chatroom, seller, buyer, outsider):
        assert await chatroom_service.user_belongs_to_chatroom(test_session, seller.id, test_chatroom.id)
        assert await chatroom_service.user_belongs_to_chatroom(test_session, buyer.id, test_chatroom.id)
        assert not await chatroom_service.user_belongs_to_chatroom(test_session, outsider.id, test_chatroom.id)
        assert not await chatroom_service.user_belongs_to_chatroom(test_session, seller.id, uuid4())

    @pytest.mark.asyncio
    async def test_delete_chatroom_cascades_messages(self, test_session, test_chatroom, chatroom_messages):
        await chatroom_service.delete_chatroom(test_session, test_chatroom.id)

        assert await chatroom_service.find_chatroom_by_id(test_session, test_chatroom.id) is None
        assert await chatroom_service.get_last_message(test_session, test_chatroom.id) is None

    @pytest.mark.asyncio
    async def test_delete_missing_chatroom(self, test_session):
        with pytest.raises(ResourceNotFoundException):
            await chatroom_service.delete_chatroom(test_session, uuid4())

    @pytest.mark.asyncio
    async def test_last_message(self, test_session, test_chatroom, buyer):
        test_session.add(Message(
            chatroom_id=test_chatroom.id, author_id=buyer.id, content="only one", send_date=BASE_TIME
        ))
        await test_session.commit()

        last = await chatroom_service.get_last_message(test_session, test_chatroom.id)

        assert last.content == "only one"
