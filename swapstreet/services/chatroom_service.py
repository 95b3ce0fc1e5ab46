"""
Chatroom service layer for database operations.

Handles all database queries and data operations related to seller/buyer chatrooms.
"""

from typing import Optional, List
from uuid import UUID

from sqlalchemy import select, and_, or_, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from swapstreet.core.errors import BusinessLogicException, profile_not_found_error, chatroom_not_found_error
from swapstreet.core.logging import get_logger, log_database_operation
from swapstreet.models.chatrooms import Chatroom
from swapstreet.models.messages import Message
from swapstreet.schemas.chat import ChatroomResponse, MessageResponse
from swapstreet.services import profile_service
from swapstreet.utils.time_utils import utc_now

logger = get_logger(__name__)


# =============================================================================
# Chatroom CRUD Operations
# =============================================================================

async def find_chatroom_by_id(db: AsyncSession, chatroom_id: UUID) -> Optional[Chatroom]:
    """채팅방 ID로 조회"""
    result = await db.execute(
        select(Chatroom).where(Chatroom.id == chatroom_id)
    )
    return result.scalar_one_or_none()


async def get_chatroom_with_messages(db: AsyncSession, chatroom_id: UUID) -> Optional[ChatroomResponse]:
    """메시지(전송일시 오름차순)를 포함한 채팅방 조회"""
    result = await db.execute(
        select(Chatroom)
        .options(selectinload(Chatroom.messages))
        .where(Chatroom.id == chatroom_id)
        .execution_options(populate_existing=True)
    )
    chatroom = result.scalar_one_or_none()
    if not chatroom:
        return None

    return ChatroomResponse.model_validate(chatroom)


async def find_existing_chatroom(db: AsyncSession, seller_id: UUID, buyer_id: UUID) -> Optional[Chatroom]:
    """두 사용자 간의 기존 채팅방 조회 (판매자/구매자 방향 무관)"""
    result = await db.execute(
        select(Chatroom).where(
            or_(
                and_(Chatroom.seller_id == seller_id, Chatroom.buyer_id == buyer_id),
                and_(Chatroom.seller_id == buyer_id, Chatroom.buyer_id == seller_id)
            )
        ).limit(1)
    )
    return result.scalars().first()


async def get_user_chatrooms(db: AsyncSession, user_id: UUID) -> List[ChatroomResponse]:
    """사용자의 채팅방 목록 조회 (각 채팅방에는 마지막 메시지만 포함)"""
    result = await db.execute(
        select(Chatroom).where(participant_clause(user_id)).order_by(Chatroom.creation_time.desc())
    )
    chatrooms = result.scalars().all()

    responses = []
    for chatroom in chatrooms:
        last_message = await get_last_message(db, chatroom.id)
        responses.append(ChatroomResponse(
            id=chatroom.id,
            creation_time=chatroom.creation_time,
            seller_id=chatroom.seller_id,
            buyer_id=chatroom.buyer_id,
            messages=[last_message] if last_message else []
        ))

    return responses


async def create_chatroom(db: AsyncSession, seller_id: UUID, buyer_id: UUID) -> ChatroomResponse:
    """새 채팅방 생성"""
    if seller_id == buyer_id:
        raise BusinessLogicException("Seller and Buyer cannot be the same user")

    if not await profile_service.profile_exists(db, seller_id):
        raise profile_not_found_error(seller_id)
    if not await profile_service.profile_exists(db, buyer_id):
        raise profile_not_found_error(buyer_id)

    chatroom = Chatroom(
        seller_id=seller_id,
        buyer_id=buyer_id,
        creation_time=utc_now()
    )

    db.add(chatroom)
    await db.commit()
    log_database_operation(logger, "INSERT", "chatrooms", affected_rows=1, chatroom_id=str(chatroom.id))

    return ChatroomResponse(
        id=chatroom.id,
        creation_time=chatroom.creation_time,
        seller_id=chatroom.seller_id,
        buyer_id=chatroom.buyer_id,
        messages=[]
    )


async def get_or_create_chatroom(db: AsyncSession, seller_id: UUID, buyer_id: UUID) -> ChatroomResponse:
    """기존 채팅방이 있으면 반환하고, 없으면 새로 생성"""
    existing = await find_existing_chatroom(db, seller_id, buyer_id)
    if existing:
        return await get_chatroom_with_messages(db, existing.id)

    return await create_chatroom(db, seller_id, buyer_id)


async def delete_chatroom(db: AsyncSession, chatroom_id: UUID) -> None:
    """채팅방 삭제 (메시지 포함)"""
    result = await db.execute(
        select(Chatroom)
        .options(selectinload(Chatroom.messages))
        .where(Chatroom.id == chatroom_id)
    )
    chatroom = result.scalar_one_or_none()
    if not chatroom:
        raise chatroom_not_found_error()

    await db.delete(chatroom)
    await db.commit()
    log_database_operation(logger, "DELETE", "chatrooms", affected_rows=1, chatroom_id=str(chatroom_id))


# =============================================================================
# Membership
# =============================================================================

def participant_clause(user_id: UUID):
    """판매자 또는 구매자 조건. 모든 참여자 판정은 이 조건을 사용합니다."""
    return or_(Chatroom.seller_id == user_id, Chatroom.buyer_id == user_id)


async def user_belongs_to_chatroom(db: AsyncSession, user_id: UUID, chatroom_id: UUID) -> bool:
    """사용자가 채팅방의 판매자 또는 구매자인지 확인"""
    result = await db.execute(
        select(func.count()).select_from(Chatroom).where(
            Chatroom.id == chatroom_id,
            participant_clause(user_id)
        )
    )
    return result.scalar_one() > 0


# =============================================================================
# Helper Functions
# =============================================================================

async def get_last_message(db: AsyncSession, chatroom_id: UUID) -> Optional[MessageResponse]:
    result = await db.execute(
        select(Message)
        .where(Message.chatroom_id == chatroom_id)
        .order_by(Message.send_date.desc())
        .limit(1)
    )
    message = result.scalar_one_or_none()
    return MessageResponse.model_validate(message) if message else None
