"""
Profile service layer.

A profile's id is the auth user's id (the token ``sub`` claim), so each
user owns at most one profile.
"""

from typing import Optional
from uuid import UUID

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from swapstreet.core.errors import profile_exists_error, profile_not_found_error
from swapstreet.core.logging import get_logger, log_database_operation
from swapstreet.models.profiles import Profile
from swapstreet.schemas.profile import ProfileCreate, ProfileResponse, ProfileUpdate
from swapstreet.utils.time_utils import utc_now

logger = get_logger(__name__)


async def find_profile_by_id(db: AsyncSession, profile_id: UUID) -> Optional[Profile]:
    return await db.get(Profile, profile_id)


async def get_profile(db: AsyncSession, profile_id: UUID) -> Optional[ProfileResponse]:
    """프로필 조회 (없으면 None)"""
    profile = await find_profile_by_id(db, profile_id)
    return ProfileResponse.model_validate(profile) if profile else None


async def profile_exists(db: AsyncSession, profile_id: UUID) -> bool:
    result = await db.execute(
        select(func.count()).select_from(Profile).where(Profile.id == profile_id)
    )
    return result.scalar_one() > 0


async def create_profile(db: AsyncSession, user_id: UUID, data: ProfileCreate) -> ProfileResponse:
    """
    인증된 사용자의 프로필 생성

    Raises:
        ConflictException: 이미 프로필이 있는 경우
    """
    if await profile_exists(db, user_id):
        raise profile_exists_error()

    now = utc_now()
    profile = Profile(
        id=user_id,
        first_name=data.first_name.strip(),
        last_name=data.last_name.strip(),
        bio=data.bio,
        fsa=data.fsa.upper(),
        profile_image_path=data.profile_image_path,
        banner_image_path=data.banner_image_path,
        status="active",
        verified_seller=False,
        rating=0,
        created_at=now,
        updated_at=now
    )

    db.add(profile)
    await db.commit()
    await db.refresh(profile)
    log_database_operation(logger, "INSERT", "profiles", affected_rows=1, profile_id=str(user_id))

    return ProfileResponse.model_validate(profile)


async def update_profile(db: AsyncSession, user_id: UUID, data: ProfileUpdate) -> ProfileResponse:
    """전달된 필드만 수정합니다."""
    profile = await find_profile_by_id(db, user_id)
    if not profile:
        raise profile_not_found_error(user_id)

    if data.first_name and data.first_name.strip():
        profile.first_name = data.first_name.strip()
    if data.last_name and data.last_name.strip():
        profile.last_name = data.last_name.strip()
    if data.bio is not None:
        profile.bio = data.bio
    if data.fsa:
        profile.fsa = data.fsa.upper()
    if data.profile_image_path is not None:
        profile.profile_image_path = data.profile_image_path
    if data.banner_image_path is not None:
        profile.banner_image_path = data.banner_image_path
    if data.status is not None:
        profile.status = data.status

    profile.updated_at = utc_now()

    await db.commit()
    await db.refresh(profile)
    log_database_operation(logger, "UPDATE", "profiles", affected_rows=1, profile_id=str(user_id))

    return ProfileResponse.model_validate(profile)


async def delete_profile(db: AsyncSession, user_id: UUID) -> None:
    profile = await find_profile_by_id(db, user_id)
    if not profile:
        raise profile_not_found_error(user_id)

    await db.delete(profile)
    await db.commit()
    log_database_operation(logger, "DELETE", "profiles", affected_rows=1, profile_id=str(user_id))
