import uuid
from sqlalchemy import Column, String, DateTime, Numeric, Integer, Boolean, ForeignKey, Uuid
from sqlalchemy.orm import relationship
from swapstreet.database.postgres import Base
from swapstreet.utils.time_utils import utc_now


class Listing(Base):
    __tablename__ = "listings"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(255), nullable=False)
    price = Column(Numeric(10, 2), nullable=False, default=0)
    description = Column(String(1000), nullable=True)
    profile_id = Column(Uuid, ForeignKey("profiles.id"), nullable=False, index=True)  # Seller
    created_at = Column(DateTime(timezone=True), default=utc_now, index=True)
    updated_at = Column(DateTime(timezone=True), default=utc_now, onupdate=utc_now)

    # Relationships
    profile = relationship("Profile")
    images = relationship(
        "ListingImage",
        back_populates="listing",
        order_by="ListingImage.display_order",
        cascade="all, delete-orphan",
    )

    def __repr__(self):
        return f"<Listing(id={self.id}, name={self.name}, profile_id={self.profile_id})>"


class ListingImage(Base):
    __tablename__ = "listing_images"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    listing_id = Column(Uuid, ForeignKey("listings.id", ondelete="CASCADE"), nullable=False, index=True)
    image_path = Column(String(255), nullable=False)  # Object key in the public bucket
    display_order = Column(Integer, default=0)  # 1 is the primary image
    for_tryon = Column(Boolean, default=False)

    # Relationships
    listing = relationship("Listing", back_populates="images")

    def __repr__(self):
        return f"<ListingImage(listing_id={self.listing_id}, display_order={self.display_order})>"
