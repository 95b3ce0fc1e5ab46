"""
Services layer for data access and external communications.

This layer handles:
- Database queries and operations
- Profiles, listings and wishlists
- Listing search and cursor translation
"""

from . import profile_service
from . import chatroom_service
from . import message_service
from . import listing_search_service
from . import listing_service
from . import wishlist_service

__all__ = [
    "profile_service",
    "chatroom_service",
    "message_service",
    "listing_search_service",
    "listing_service",
    "wishlist_service"
]
