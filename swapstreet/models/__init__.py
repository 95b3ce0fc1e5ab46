from .profiles import Profile
from .chatrooms import Chatroom
from .messages import Message
from .listings import Listing, ListingImage
from .wishlists import Wishlist

__all__ = [
    "Profile",
    "Chatroom",
    "Message",
    "Listing",
    "ListingImage",
    "Wishlist",
]
