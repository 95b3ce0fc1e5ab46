from datetime import datetime
from typing import Literal, Optional
from uuid import UUID

from pydantic import Field

from swapstreet.schemas.base import CamelModel

# Forward sortation area, e.g. M5V
FSA_PATTERN = r"^[A-Za-z]\d[A-Za-z]$"

ProfileStatus = Literal["active", "suspended", "deactivated", "pending_verification", "banned"]


class ProfileCreate(CamelModel):
    """프로필 생성 스키마 (프로필 ID는 토큰의 사용자 ID)"""
    first_name: str = Field(..., min_length=1, max_length=100, description="이름")
    last_name: str = Field(..., min_length=1, max_length=100, description="성")
    bio: Optional[str] = Field(None, max_length=500, description="소개")
    fsa: str = Field(..., pattern=FSA_PATTERN, description="우편번호 앞 3자리")
    profile_image_path: Optional[str] = Field(None, max_length=255)
    banner_image_path: Optional[str] = Field(None, max_length=255)


class ProfileUpdate(CamelModel):
    """
    프로필 부분 수정 스키마

    None인 필드는 변경하지 않습니다. 이름/성이 공백뿐이면 무시합니다.
    """
    first_name: Optional[str] = Field(None, max_length=100)
    last_name: Optional[str] = Field(None, max_length=100)
    bio: Optional[str] = Field(None, max_length=500)
    fsa: Optional[str] = Field(None, pattern=FSA_PATTERN)
    profile_image_path: Optional[str] = Field(None, max_length=255)
    banner_image_path: Optional[str] = Field(None, max_length=255)
    status: Optional[ProfileStatus] = None


class ProfileResponse(CamelModel):
    id: UUID
    status: str
    verified_seller: bool = False
    first_name: str
    last_name: str
    rating: float = 0.0
    bio: Optional[str] = None
    fsa: str
    profile_image_path: Optional[str] = None
    banner_image_path: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ProfileExistsResponse(CamelModel):
    exists: bool
