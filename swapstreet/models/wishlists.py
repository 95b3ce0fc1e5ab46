import uuid
from sqlalchemy import Column, DateTime, Integer, ForeignKey, UniqueConstraint, Uuid
from sqlalchemy.orm import relationship
from swapstreet.database.postgres import Base
from swapstreet.utils.time_utils import utc_now


class Wishlist(Base):
    __tablename__ = "wishlists"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    profile_id = Column(Uuid, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True)
    listing_id = Column(Uuid, ForeignKey("listings.id", ondelete="CASCADE"), nullable=False)
    display_order = Column(Integer, nullable=False, default=1)  # Appended items get max + 1
    created_at = Column(DateTime(timezone=True), default=utc_now)

    # 프로필당 리스팅 하나는 한 번만
    __table_args__ = (UniqueConstraint("profile_id", "listing_id", name="uq_wishlist_profile_listing"),)

    # Relationships
    listing = relationship("Listing")

    def __repr__(self):
        return f"<Wishlist(profile_id={self.profile_id}, listing_id={self.listing_id}, display_order={self.display_order})>"
