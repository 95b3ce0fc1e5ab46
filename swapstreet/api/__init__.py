from .chat import router as chat_router
from .health import router as health_router
from .listings import router as listings_router
from .profile import router as profile_router
from .search import router as search_router
from .websocket import router as websocket_router
from .wishlist import router as wishlist_router

__all__ = [
    "chat_router",
    "health_router",
    "listings_router",
    "profile_router",
    "search_router",
    "websocket_router",
    "wishlist_router",
]
