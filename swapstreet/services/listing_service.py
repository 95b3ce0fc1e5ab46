"""
Listing service layer.

CRUD for a seller's listings. Every response pairs the listing with its
images, the same shape search results use.
"""

from typing import List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from swapstreet.core.errors import listing_not_found_error, listing_owner_error
from swapstreet.core.logging import get_logger, log_database_operation
from swapstreet.models.listings import Listing, ListingImage
from swapstreet.schemas.listing import ListingCreate, ListingUpdate, ListingWithImages
from swapstreet.services.listing_search_service import with_images
from swapstreet.utils.time_utils import utc_now

logger = get_logger(__name__)


async def find_listing_by_id(db: AsyncSession, listing_id: UUID) -> Optional[Listing]:
    return await db.get(Listing, listing_id)


async def get_listing(db: AsyncSession, listing_id: UUID) -> Optional[ListingWithImages]:
    listing = await find_listing_by_id(db, listing_id)
    if not listing:
        return None

    items = await with_images(db, [listing])
    return items[0]


async def get_listings(db: AsyncSession) -> List[ListingWithImages]:
    """전체 리스팅 (최신순)"""
    result = await db.execute(
        select(Listing).order_by(Listing.created_at.desc(), Listing.id.desc())
    )
    return await with_images(db, result.scalars().all())


async def get_listings_by_profile(db: AsyncSession, profile_id: UUID) -> List[ListingWithImages]:
    """판매자의 리스팅 (최신순)"""
    result = await db.execute(
        select(Listing)
        .where(Listing.profile_id == profile_id)
        .order_by(Listing.created_at.desc(), Listing.id.desc())
    )
    return await with_images(db, result.scalars().all())


async def create_listing(db: AsyncSession, profile_id: UUID, data: ListingCreate) -> ListingWithImages:
    """리스팅과 이미지를 한 트랜잭션으로 저장"""
    now = utc_now()
    listing = Listing(
        name=data.name.strip(),
        price=data.price,
        description=data.description,
        profile_id=profile_id,
        created_at=now,
        updated_at=now
    )
    db.add(listing)
    await db.flush()

    db.add_all([
        ListingImage(
            listing_id=listing.id,
            image_path=image.image_path,
            display_order=image.display_order,
            for_tryon=image.for_tryon
        )
        for image in data.images
    ])
    await db.commit()
    log_database_operation(
        logger, "INSERT", "listings", affected_rows=1,
        listing_id=str(listing.id), image_count=len(data.images)
    )

    return await get_listing(db, listing.id)


async def update_listing(
    db: AsyncSession,
    listing_id: UUID,
    owner_id: UUID,
    data: ListingUpdate
) -> ListingWithImages:
    """
    리스팅 수정 (이름, 가격, 설명 교체)

    Raises:
        ResourceNotFoundException: 리스팅이 없는 경우
        AuthorizationException: 요청자가 판매자가 아닌 경우
    """
    listing = await _owned_listing(db, listing_id, owner_id)

    listing.name = data.name.strip()
    listing.price = data.price
    listing.description = data.description
    listing.updated_at = utc_now()

    await db.commit()
    log_database_operation(logger, "UPDATE", "listings", affected_rows=1, listing_id=str(listing_id))

    return await get_listing(db, listing_id)


async def delete_listing(db: AsyncSession, listing_id: UUID, owner_id: UUID) -> None:
    """리스팅 삭제 (이미지 포함)"""
    listing = await _owned_listing(db, listing_id, owner_id, load_images=True)
    await db.delete(listing)
    await db.commit()
    log_database_operation(logger, "DELETE", "listings", affected_rows=1, listing_id=str(listing_id))


async def _owned_listing(
    db: AsyncSession,
    listing_id: UUID,
    owner_id: UUID,
    load_images: bool = False
) -> Listing:
    query = select(Listing).where(Listing.id == listing_id)
    if load_images:
        query = query.options(selectinload(Listing.images))

    result = await db.execute(query)
    listing = result.scalar_one_or_none()
    if not listing:
        raise listing_not_found_error(listing_id)
    if listing.profile_id != owner_id:
        raise listing_owner_error()
    return listing
