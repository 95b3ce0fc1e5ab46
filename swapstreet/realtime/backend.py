"""
Persistence side of the chat hub: the shared membership check and message
storage, backed by the chatroom and message services.
"""

from abc import ABC, abstractmethod
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from swapstreet.schemas.chat import MessageResponse
from swapstreet.services import chatroom_service, message_service


class ChatBackend(ABC):

    @abstractmethod
    async def user_belongs_to_chatroom(self, user_id: UUID, chatroom_id: UUID) -> bool:
        ...

    @abstractmethod
    async def save_message(self, chatroom_id: UUID, author_id: UUID, content: str) -> MessageResponse:
        ...


class DatabaseChatBackend(ChatBackend):
    """요청마다 새 세션을 열어 서비스 계층에 위임"""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    async def user_belongs_to_chatroom(self, user_id: UUID, chatroom_id: UUID) -> bool:
        async with self.session_factory() as db:
            return await chatroom_service.user_belongs_to_chatroom(db, user_id, chatroom_id)

    async def save_message(self, chatroom_id: UUID, author_id: UUID, content: str) -> MessageResponse:
        async with self.session_factory() as db:
            return await message_service.send_message(db, chatroom_id, author_id, content)
