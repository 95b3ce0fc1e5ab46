from uuid import UUID

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.ext.asyncio import AsyncSession

from swapstreet.core.errors import invalid_token_error, profile_not_found_error
from swapstreet.database import AsyncSessionLocal, get_db
from swapstreet.models.profiles import Profile
from swapstreet.realtime.backend import ChatBackend, DatabaseChatBackend
from swapstreet.realtime.connection_manager import manager
from swapstreet.realtime.hub import ChatHub
from swapstreet.services.listing_search_service import ListingSearchIndex, default_index
from swapstreet.utils.auth import get_user_id_from_token

# 토큰 발급은 외부 인증 서비스 담당
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/signin")


async def get_current_user_id(token: str = Depends(oauth2_scheme)) -> UUID:
    """토큰의 사용자 ID (프로필이 아직 없어도 됨)"""
    user_id = get_user_id_from_token(token)
    if user_id is None:
        raise invalid_token_error()
    return user_id


async def get_current_user(
        user_id: UUID = Depends(get_current_user_id),
        db: AsyncSession = Depends(get_db)
) -> Profile:
    """
    현재 인증된 사용자(프로필) 조회

    토큰의 sub 클레임은 프로필 UUID입니다.
    """
    profile = await db.get(Profile, user_id)
    if not profile:
        raise profile_not_found_error(user_id)

    return profile


def get_search_index() -> ListingSearchIndex:
    return default_index


def get_chat_backend() -> ChatBackend:
    return DatabaseChatBackend(AsyncSessionLocal)


def get_chat_hub(backend: ChatBackend = Depends(get_chat_backend)) -> ChatHub:
    return ChatHub(manager, backend)
