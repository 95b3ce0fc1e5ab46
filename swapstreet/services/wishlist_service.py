"""
Wishlist service layer.

A profile's wishlist is an ordered set of listing ids. New items go to the
end (``max(display_order) + 1``).
"""

from typing import List
from uuid import UUID

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from swapstreet.core.errors import listing_not_found_error, wishlist_item_exists_error, wishlist_item_not_found_error
from swapstreet.core.logging import get_logger, log_database_operation
from swapstreet.models.listings import Listing
from swapstreet.models.wishlists import Wishlist
from swapstreet.utils.time_utils import utc_now

logger = get_logger(__name__)


async def get_wishlist(db: AsyncSession, profile_id: UUID) -> List[UUID]:
    """위시리스트 리스팅 ID 목록 (display_order 오름차순)"""
    result = await db.execute(
        select(Wishlist.listing_id)
        .join(Listing, Listing.id == Wishlist.listing_id)
        .where(Wishlist.profile_id == profile_id)
        .order_by(Wishlist.display_order, Wishlist.created_at)
    )
    return list(result.scalars().all())


async def add_to_wishlist(db: AsyncSession, profile_id: UUID, listing_id: UUID) -> List[UUID]:
    """
    위시리스트 끝에 리스팅 추가

    Raises:
        ResourceNotFoundException: 리스팅이 없는 경우
        ConflictException: 이미 위시리스트에 있는 경우
    """
    if await db.get(Listing, listing_id) is None:
        raise listing_not_found_error(listing_id)

    if await _find_item(db, profile_id, listing_id) is not None:
        raise wishlist_item_exists_error()

    result = await db.execute(
        select(func.max(Wishlist.display_order)).where(Wishlist.profile_id == profile_id)
    )
    last_order = result.scalar_one_or_none() or 0

    db.add(Wishlist(
        profile_id=profile_id,
        listing_id=listing_id,
        display_order=last_order + 1,
        created_at=utc_now()
    ))
    await db.commit()
    log_database_operation(logger, "INSERT", "wishlists", affected_rows=1, listing_id=str(listing_id))

    return await get_wishlist(db, profile_id)


async def remove_from_wishlist(db: AsyncSession, profile_id: UUID, listing_id: UUID) -> None:
    item = await _find_item(db, profile_id, listing_id)
    if item is None:
        raise wishlist_item_not_found_error()

    await db.delete(item)
    await db.commit()
    log_database_operation(logger, "DELETE", "wishlists", affected_rows=1, listing_id=str(listing_id))


async def _find_item(db: AsyncSession, profile_id: UUID, listing_id: UUID):
    result = await db.execute(
        select(Wishlist).where(Wishlist.profile_id == profile_id, Wishlist.listing_id == listing_id)
    )
    return result.scalar_one_or_none()
