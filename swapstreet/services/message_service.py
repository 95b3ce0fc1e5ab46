"""
Message service layer for chatroom message persistence.
"""

from typing import List, Optional
from uuid import UUID, uuid4

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from swapstreet.core.config import settings
from swapstreet.core.errors import (
    BusinessLogicException,
    ResourceNotFoundException,
    chatroom_access_denied_error,
    chatroom_not_found_error,
    empty_message_error,
)
from swapstreet.core.logging import get_logger, log_database_operation
from swapstreet.models.messages import Message
from swapstreet.schemas.chat import MessageResponse
from swapstreet.services import chatroom_service
from swapstreet.utils.time_utils import utc_now

logger = get_logger(__name__)


async def send_message(
    db: AsyncSession,
    chatroom_id: UUID,
    author_id: UUID,
    content: str
) -> MessageResponse:
    """
    메시지를 채팅방에 저장합니다.

    Raises:
        ResourceNotFoundException: 채팅방이 없는 경우
        AuthorizationException: 작성자가 판매자/구매자가 아닌 경우
        BusinessLogicException: 내용이 비어 있거나 너무 긴 경우
    """
    chatroom = await chatroom_service.find_chatroom_by_id(db, chatroom_id)
    if not chatroom:
        raise chatroom_not_found_error()

    if not await chatroom_service.user_belongs_to_chatroom(db, author_id, chatroom_id):
        raise chatroom_access_denied_error()

    if content is None or not content.strip():
        raise empty_message_error()
    if len(content) > settings.message_max_length:
        raise BusinessLogicException(
            f"Message content cannot exceed {settings.message_max_length} characters"
        )

    message = Message(
        id=uuid4(),
        send_date=utc_now(),
        content=content,
        chatroom_id=chatroom_id,
        author_id=author_id
    )

    db.add(message)
    await db.commit()
    log_database_operation(logger, "INSERT", "messages", affected_rows=1, chatroom_id=str(chatroom_id))

    return MessageResponse.model_validate(message)


async def get_messages(
    db: AsyncSession,
    chatroom_id: UUID,
    page: int = 1,
    page_size: int = 50
) -> List[MessageResponse]:
    """채팅방 메시지 목록 조회 (최신 페이지부터, 결과는 시간순)"""
    result = await db.execute(
        select(Message)
        .where(Message.chatroom_id == chatroom_id)
        .order_by(Message.send_date.desc())
        .offset((page - 1) * page_size)
        .limit(page_size)
    )
    messages = result.scalars().all()

    # 최신순으로 정렬된 것을 역순으로 변경 (오래된 것부터)
    return [MessageResponse.model_validate(m) for m in reversed(messages)]


async def get_message_by_id(db: AsyncSession, message_id: UUID) -> Optional[MessageResponse]:
    """메시지 ID로 조회"""
    message = await db.get(Message, message_id)
    return MessageResponse.model_validate(message) if message else None


async def delete_message_by_id(db: AsyncSession, message_id: UUID) -> None:
    """메시지 삭제"""
    message = await db.get(Message, message_id)
    if not message:
        raise ResourceNotFoundException("Message")

    await db.delete(message)
    await db.commit()
    log_database_operation(logger, "DELETE", "messages", affected_rows=1, message_id=str(message_id))
