from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from swapstreet.api.dependencies import get_current_user
from swapstreet.core.errors import listing_not_found_error
from swapstreet.database import get_db
from swapstreet.models.profiles import Profile
from swapstreet.schemas.listing import ListingCreate, ListingUpdate, ListingWithImages
from swapstreet.services import listing_service

router = APIRouter(prefix="/api/listings", tags=["Listings"])


@router.get("", response_model=List[ListingWithImages])
async def get_listings(db: AsyncSession = Depends(get_db)) -> List[ListingWithImages]:
    """전체 리스팅 목록 (최신순)"""
    return await listing_service.get_listings(db)


@router.get("/profile/{profile_id}", response_model=List[ListingWithImages])
async def get_profile_listings(
    profile_id: UUID,
    db: AsyncSession = Depends(get_db)
) -> List[ListingWithImages]:
    """판매자별 리스팅 목록"""
    return await listing_service.get_listings_by_profile(db, profile_id)


@router.get("/{listing_id}", response_model=ListingWithImages)
async def get_listing(
    listing_id: UUID,
    db: AsyncSession = Depends(get_db)
) -> ListingWithImages:
    listing = await listing_service.get_listing(db, listing_id)
    if not listing:
        raise listing_not_found_error(listing_id)
    return listing


@router.post("", response_model=ListingWithImages, status_code=status.HTTP_201_CREATED)
async def create_listing(
    listing_data: ListingCreate,
    current_user: Profile = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
) -> ListingWithImages:
    """
    리스팅 등록

    판매자는 요청한 사용자의 프로필입니다. 이미지는 이미 업로드된
    공개 버킷 객체 키(imagePath)로 전달합니다.
    """
    return await listing_service.create_listing(db, current_user.id, listing_data)


@router.put("/{listing_id}", response_model=ListingWithImages)
async def update_listing(
    listing_id: UUID,
    listing_data: ListingUpdate,
    current_user: Profile = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
) -> ListingWithImages:
    """리스팅 수정 (판매자 본인만)"""
    return await listing_service.update_listing(db, listing_id, current_user.id, listing_data)


@router.delete("/{listing_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_listing(
    listing_id: UUID,
    current_user: Profile = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
) -> None:
    """리스팅 삭제 (판매자 본인만, 이미지 포함)"""
    await listing_service.delete_listing(db, listing_id, current_user.id)
