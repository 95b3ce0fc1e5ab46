from .chat import ChatroomCreate, ChatroomResponse, MessageResponse
from .listing import (
    ListingCursor,
    ListingResponse,
    ListingImageResponse,
    ListingWithImages,
    SearchResponse,
    ListingImageCreate,
    ListingCreate,
    ListingUpdate,
    WishlistResponse,
)
from .profile import ProfileCreate, ProfileUpdate, ProfileResponse, ProfileExistsResponse

__all__ = [
    "ChatroomCreate",
    "ChatroomResponse",
    "MessageResponse",
    "ListingCursor",
    "ListingResponse",
    "ListingImageResponse",
    "ListingWithImages",
    "SearchResponse",
    "ListingImageCreate",
    "ListingCreate",
    "ListingUpdate",
    "WishlistResponse",
    "ProfileCreate",
    "ProfileUpdate",
    "ProfileResponse",
    "ProfileExistsResponse",
]
