"""
Listing search service.

Ranking is owned by a ``ListingSearchIndex``; this module only translates the
opaque pagination cursor and shapes the page (each listing paired with its
images).
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence
from uuid import UUID

from sqlalchemy import Float, and_, case, cast, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from swapstreet.core.config import settings
from swapstreet.core.logging import get_logger
from swapstreet.models.listings import Listing, ListingImage
from swapstreet.schemas.listing import (
    ListingCursor,
    ListingImageResponse,
    ListingResponse,
    ListingWithImages,
    SearchResponse,
)

logger = get_logger(__name__)

NAME_MATCH_RANK = 2.0
DESCRIPTION_MATCH_RANK = 1.0


@dataclass
class RankedListing:
    listing: Listing
    rank: Optional[float]  # None in "recent listings" mode


class ListingSearchIndex(ABC):
    """Ranked listing lookup, ordered by (rank, created_at, id) descending."""

    @abstractmethod
    async def search(
        self,
        db: AsyncSession,
        query: Optional[str],
        limit: int,
        after: Optional[ListingCursor] = None
    ) -> List[RankedListing]:
        """Return at most ``limit`` hits strictly after ``after``."""


class SqlListingSearchIndex(ListingSearchIndex):
    """
    Case-insensitive substring match over listing name and description.

    A blank query lists the most recent listings (rank None). Otherwise a
    name match ranks above a description-only match.
    """

    async def search(
        self,
        db: AsyncSession,
        query: Optional[str],
        limit: int,
        after: Optional[ListingCursor] = None
    ) -> List[RankedListing]:
        if not query or not query.strip():
            return await self._recent(db, limit, after)
        return await self._ranked(db, query.strip(), limit, after)

    async def _recent(
        self,
        db: AsyncSession,
        limit: int,
        after: Optional[ListingCursor]
    ) -> List[RankedListing]:
        stmt = select(Listing)
        if after is not None:
            stmt = stmt.where(_after_created_at_and_id(after))

        stmt = stmt.order_by(Listing.created_at.desc(), Listing.id.desc()).limit(limit)
        result = await db.execute(stmt)
        return [RankedListing(listing=row, rank=None) for row in result.scalars().all()]

    async def _ranked(
        self,
        db: AsyncSession,
        query: str,
        limit: int,
        after: Optional[ListingCursor]
    ) -> List[RankedListing]:
        pattern = f"%{_escape_like(query)}%"
        name_match = Listing.name.ilike(pattern, escape="\\")
        description_match = Listing.description.ilike(pattern, escape="\\")

        rank = cast(
            case((name_match, NAME_MATCH_RANK), else_=DESCRIPTION_MATCH_RANK),
            Float
        )

        stmt = select(Listing, rank.label("rank")).where(or_(name_match, description_match))

        if after is not None:
            if after.rank is not None:
                stmt = stmt.where(or_(
                    rank < after.rank,
                    and_(rank == after.rank, Listing.created_at < after.created_at),
                    and_(
                        rank == after.rank,
                        Listing.created_at == after.created_at,
                        Listing.id < after.id
                    )
                ))
            else:
                # cursor from recent mode
                stmt = stmt.where(_after_created_at_and_id(after))

        stmt = stmt.order_by(rank.desc(), Listing.created_at.desc(), Listing.id.desc()).limit(limit)
        result = await db.execute(stmt)
        return [RankedListing(listing=row[0], rank=float(row[1])) for row in result.all()]


def _after_created_at_and_id(after: ListingCursor):
    return or_(
        Listing.created_at < after.created_at,
        and_(Listing.created_at == after.created_at, Listing.id < after.id)
    )


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


default_index = SqlListingSearchIndex()


# =============================================================================
# Search Operations
# =============================================================================

async def search_listings(
    db: AsyncSession,
    query: Optional[str],
    page_size: int,
    cursor: Optional[str] = None,
    index: Optional[ListingSearchIndex] = None
) -> SearchResponse:
    """리스팅 검색 (커서 기반 페이지네이션)"""
    index = index or default_index
    page_size = max(1, min(page_size, settings.search_max_page_size))

    # 잘못된 커서는 첫 페이지부터 조회
    after = ListingCursor.decode(cursor)
    if cursor and after is None:
        logger.info("Ignoring malformed listing cursor")

    hits = await index.search(db, query, page_size + 1, after)

    has_next_page = len(hits) > page_size
    page = hits[:page_size]

    next_cursor = None
    if has_next_page:
        last = page[-1]
        next_cursor = ListingCursor(
            rank=last.rank,
            created_at=last.listing.created_at,
            id=last.listing.id
        ).encode()

    return SearchResponse(
        items=await with_images(db, [hit.listing for hit in page]),
        limit=page_size,
        next_cursor=next_cursor,
        has_next_page=has_next_page
    )


async def with_images(db: AsyncSession, listings: Sequence[Listing]) -> List[ListingWithImages]:
    """리스팅마다 이미지 목록을 붙여 응답 형태로 변환"""
    images = await get_images_for_listings(db, [listing.id for listing in listings])
    return [
        ListingWithImages(
            listing=ListingResponse.model_validate(listing),
            images=images.get(listing.id, [])
        )
        for listing in listings
    ]


async def get_images_for_listings(
    db: AsyncSession,
    listing_ids: Sequence[UUID]
) -> Dict[UUID, List[ListingImageResponse]]:
    """리스팅별 이미지 목록 (display_order 오름차순)"""
    if not listing_ids:
        return {}

    result = await db.execute(
        select(ListingImage)
        .where(ListingImage.listing_id.in_(listing_ids))
        .order_by(ListingImage.listing_id, ListingImage.display_order)
    )

    grouped: Dict[UUID, List[ListingImageResponse]] = {}
    for image in result.scalars().all():
        grouped.setdefault(image.listing_id, []).append(
            ListingImageResponse(
                image_path=image.image_path,
                display_order=image.display_order,
                for_tryon=bool(image.for_tryon),
                image_url=build_image_url(image.image_path)
            )
        )
    return grouped


def build_image_url(image_path: str) -> str:
    return f"{settings.image_base_url.rstrip('/')}/{image_path.lstrip('/')}"
