from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from swapstreet.api.dependencies import get_current_user_id
from swapstreet.core.errors import profile_not_found_error
from swapstreet.database import get_db
from swapstreet.schemas.profile import ProfileCreate, ProfileExistsResponse, ProfileResponse, ProfileUpdate
from swapstreet.services import profile_service

router = APIRouter(prefix="/api/profile", tags=["Profile"])


@router.get("/me", response_model=ProfileResponse)
async def get_my_profile(
    user_id: UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
) -> ProfileResponse:
    """현재 사용자의 프로필 조회"""
    profile = await profile_service.get_profile(db, user_id)
    if not profile:
        raise profile_not_found_error(user_id)
    return profile


@router.get("/exists", response_model=ProfileExistsResponse)
async def check_profile_exists(
    user_id: UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
) -> ProfileExistsResponse:
    """현재 사용자의 프로필 존재 여부 (가입 직후 프로필 생성 화면 분기용)"""
    return ProfileExistsResponse(exists=await profile_service.profile_exists(db, user_id))


@router.get("/{user_id}", response_model=ProfileResponse)
async def get_profile(
    user_id: UUID,
    db: AsyncSession = Depends(get_db)
) -> ProfileResponse:
    """
    특정 사용자의 프로필 조회

    인증 없이 조회할 수 있는 공개 엔드포인트입니다.
    """
    profile = await profile_service.get_profile(db, user_id)
    if not profile:
        raise profile_not_found_error(user_id)
    return profile


@router.post("", response_model=ProfileResponse, status_code=status.HTTP_201_CREATED)
async def create_profile(
    profile_data: ProfileCreate,
    user_id: UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
) -> ProfileResponse:
    """
    현재 사용자의 프로필 생성

    - **firstName**, **lastName**: 필수
    - **fsa**: 우편번호 앞 3자리 (예: M5V), 대문자로 저장

    이미 프로필이 있으면 409를 반환합니다.
    """
    return await profile_service.create_profile(db, user_id, profile_data)


@router.patch("", response_model=ProfileResponse)
async def update_profile(
    profile_data: ProfileUpdate,
    user_id: UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
) -> ProfileResponse:
    """현재 사용자의 프로필 부분 수정"""
    return await profile_service.update_profile(db, user_id, profile_data)


@router.delete("")
async def delete_profile(
    user_id: UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    await profile_service.delete_profile(db, user_id)
    return {"message": "Profile deleted successfully"}
