from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from swapstreet.api.dependencies import get_search_index
from swapstreet.core.config import settings
from swapstreet.database import get_db
from swapstreet.schemas.listing import SearchResponse
from swapstreet.services import listing_search_service
from swapstreet.services.listing_search_service import ListingSearchIndex

router = APIRouter(prefix="/api/search", tags=["Search"])


@router.get("/search", response_model=SearchResponse)
async def search_listings(
    q: Optional[str] = Query(None, description="검색어 (비어 있으면 최신순)"),
    cursor: Optional[str] = Query(None, description="이전 응답의 nextCursor"),
    limit: int = Query(settings.search_default_limit, description="페이지 크기"),
    index: ListingSearchIndex = Depends(get_search_index),
    db: AsyncSession = Depends(get_db)
) -> SearchResponse:
    """리스팅 검색 (커서 기반 페이지네이션)"""
    page_size = min(limit, settings.search_max_limit)
    return await listing_search_service.search_listings(db, q, page_size, cursor, index=index)
