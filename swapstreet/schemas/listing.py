import base64
from datetime import datetime
from decimal import Decimal
from typing import Optional, List
from uuid import UUID

from pydantic import ConfigDict, Field

from swapstreet.schemas.base import CamelModel


class ListingCursor(CamelModel):
    """
    Resume position inside a ranked listing scan.

    The token handed to clients is base64 of the compact UTF-8 JSON
    ``{"rank": ..., "createdAt": ..., "id": ...}``. ``rank`` is None for
    cursors produced in "recent listings" mode.
    """
    model_config = ConfigDict(frozen=True)

    rank: Optional[float] = None
    created_at: datetime
    id: UUID

    def encode(self) -> str:
        payload = self.model_dump_json(by_alias=True)
        return base64.b64encode(payload.encode("utf-8")).decode("ascii")

    @classmethod
    def decode(cls, encoded: Optional[str]) -> Optional["ListingCursor"]:
        """Inverse of ``encode``. Returns None for blank or malformed tokens."""
        if encoded is None or not encoded.strip():
            return None

        try:
            raw = base64.b64decode(encoded.strip(), validate=True)
            return cls.model_validate_json(raw)
        except ValueError:
            # binascii.Error and pydantic.ValidationError are both ValueErrors
            return None


class ListingResponse(CamelModel):
    id: UUID
    name: str
    description: Optional[str] = None
    price: float
    profile_id: UUID
    created_at: datetime
    updated_at: Optional[datetime] = None


class ListingImageResponse(CamelModel):
    image_path: str = Field(..., max_length=255)
    display_order: int
    for_tryon: bool = False
    image_url: str = Field(..., description="공개 버킷 기준 이미지 URL")


class ListingWithImages(CamelModel):
    """리스팅과 해당 이미지 묶음"""
    listing: ListingResponse
    images: List[ListingImageResponse] = Field(default_factory=list)


class SearchResponse(CamelModel):
    items: List[ListingWithImages] = Field(default_factory=list)
    limit: int
    next_cursor: Optional[str] = None
    has_next_page: bool = False


# =============================================================================
# 리스팅 등록/수정
# =============================================================================

class ListingImageCreate(CamelModel):
    image_path: str = Field(..., min_length=1, max_length=255, description="공개 버킷 객체 키")
    display_order: int = Field(1, ge=0, description="1이 대표 이미지")
    for_tryon: bool = False


class ListingUpdate(CamelModel):
    """리스팅 수정 스키마 (PUT: 모든 필드 교체)"""
    name: str = Field(..., min_length=1, max_length=255)
    price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    description: Optional[str] = Field(None, max_length=1000)


class ListingCreate(ListingUpdate):
    """리스팅 등록 스키마. 판매자는 요청한 사용자입니다."""
    images: List[ListingImageCreate] = Field(default_factory=list)


class WishlistResponse(CamelModel):
    """위시리스트 리스팅 ID 목록 (display_order 순)"""
    listing_ids: List[UUID] = Field(default_factory=list)
