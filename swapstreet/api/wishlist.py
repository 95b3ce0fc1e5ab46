from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from swapstreet.api.dependencies import get_current_user
from swapstreet.database import get_db
from swapstreet.models.profiles import Profile
from swapstreet.schemas.listing import WishlistResponse
from swapstreet.services import wishlist_service

# 위시리스트는 항상 토큰 사용자의 것
router = APIRouter(prefix="/api/wishlist", tags=["Wishlist"])


@router.get("", response_model=WishlistResponse)
async def get_wishlist(
    current_user: Profile = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
) -> WishlistResponse:
    return WishlistResponse(listing_ids=await wishlist_service.get_wishlist(db, current_user.id))


@router.post("/{listing_id}", response_model=WishlistResponse, status_code=status.HTTP_201_CREATED)
async def add_to_wishlist(
    listing_id: UUID,
    current_user: Profile = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
) -> WishlistResponse:
    """위시리스트 끝에 추가. 없는 리스팅은 404, 중복은 409."""
    listing_ids = await wishlist_service.add_to_wishlist(db, current_user.id, listing_id)
    return WishlistResponse(listing_ids=listing_ids)


@router.delete("/{listing_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_from_wishlist(
    listing_id: UUID,
    current_user: Profile = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
) -> None:
    await wishlist_service.remove_from_wishlist(db, current_user.id, listing_id)
