from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from swapstreet.api.dependencies import get_current_user
from swapstreet.core.config import settings
from swapstreet.core.errors import AuthorizationException, chatroom_access_denied_error, chatroom_not_found_error
from swapstreet.database import get_db
from swapstreet.models.profiles import Profile
from swapstreet.schemas.chat import ChatroomCreate, ChatroomResponse, MessageResponse
from swapstreet.services import chatroom_service, message_service

router = APIRouter(prefix="/api/chat", tags=["Chat"])


@router.get("/chatrooms", response_model=List[ChatroomResponse])
async def get_chatrooms(
    current_user: Profile = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
) -> List[ChatroomResponse]:
    """사용자의 채팅방 목록 조회 (각 채팅방에는 마지막 메시지만 포함)"""
    return await chatroom_service.get_user_chatrooms(db, current_user.id)


@router.get("/chatrooms/{chatroom_id}", response_model=ChatroomResponse)
async def get_chatroom(
    chatroom_id: UUID,
    current_user: Profile = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
) -> ChatroomResponse:
    """
    채팅방 상세 조회 (전체 메시지 포함)

    참여자가 아니면 403, 채팅방이 없어도 참여자가 아니므로 403을 반환합니다.
    """
    if not await chatroom_service.user_belongs_to_chatroom(db, current_user.id, chatroom_id):
        raise chatroom_access_denied_error()

    chatroom = await chatroom_service.get_chatroom_with_messages(db, chatroom_id)
    if not chatroom:
        raise chatroom_not_found_error()

    return chatroom


@router.post("/chatrooms", response_model=ChatroomResponse, status_code=status.HTTP_201_CREATED)
async def create_chatroom(
    chatroom_data: ChatroomCreate,
    current_user: Profile = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
) -> ChatroomResponse:
    """
    채팅방 생성

    - **sellerId**: 판매자 프로필 ID
    - **buyerId**: 구매자 프로필 ID

    요청자는 판매자 또는 구매자 중 하나여야 합니다.
    """
    if current_user.id not in (chatroom_data.seller_id, chatroom_data.buyer_id):
        raise AuthorizationException("You can only create chatrooms where you are the seller or buyer")

    return await chatroom_service.create_chatroom(db, chatroom_data.seller_id, chatroom_data.buyer_id)


@router.post("/chatrooms/get-or-create", response_model=ChatroomResponse)
async def get_or_create_chatroom(
    chatroom_data: ChatroomCreate,
    current_user: Profile = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
) -> ChatroomResponse:
    """판매자/구매자 간 기존 채팅방 반환, 없으면 생성"""
    if current_user.id not in (chatroom_data.seller_id, chatroom_data.buyer_id):
        raise AuthorizationException("You can only access chatrooms where you are the seller or buyer")

    return await chatroom_service.get_or_create_chatroom(db, chatroom_data.seller_id, chatroom_data.buyer_id)


@router.get("/chatrooms/{chatroom_id}/messages", response_model=List[MessageResponse])
async def get_chatroom_messages(
    chatroom_id: UUID,
    page: int = Query(1, description="페이지 번호 (1부터)"),
    page_size: int = Query(settings.chat_default_page_size, alias="pageSize", description="페이지 크기"),
    current_user: Profile = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
) -> List[MessageResponse]:
    """채팅방 메시지 목록 조회 (페이지네이션)"""
    if not await chatroom_service.user_belongs_to_chatroom(db, current_user.id, chatroom_id):
        raise chatroom_access_denied_error()

    # 범위를 벗어난 값은 오류 대신 기본값으로 보정
    if page < 1:
        page = 1
    if page_size < 1 or page_size > settings.chat_max_page_size:
        page_size = settings.chat_default_page_size

    return await message_service.get_messages(db, chatroom_id, page, page_size)
