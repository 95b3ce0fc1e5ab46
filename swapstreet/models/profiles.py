import uuid
from sqlalchemy import Column, String, DateTime, Boolean, Numeric, Uuid
from swapstreet.database.postgres import Base
from swapstreet.utils.time_utils import utc_now


class Profile(Base):
    __tablename__ = "profiles"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)  # Same as the auth user id
    status = Column(String(20), default="active", nullable=False)  # active, suspended, deactivated, pending_verification, banned
    verified_seller = Column(Boolean, default=False)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    rating = Column(Numeric(18, 2), default=0)
    bio = Column(String(500), nullable=True)
    fsa = Column(String(3), nullable=False)  # Forward sortation area (first 3 chars of postal code)
    profile_image_path = Column(String(255), nullable=True)
    banner_image_path = Column(String(255), nullable=True)
    created_at = Column(DateTime(timezone=True), default=utc_now)
    updated_at = Column(DateTime(timezone=True), default=utc_now, onupdate=utc_now)

    def __repr__(self):
        return f"<Profile(id={self.id}, first_name={self.first_name}, last_name={self.last_name})>"
