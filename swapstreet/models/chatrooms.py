import uuid
from sqlalchemy import Column, DateTime, ForeignKey, Uuid
from sqlalchemy.orm import relationship
from swapstreet.database.postgres import Base
from swapstreet.utils.time_utils import utc_now


class Chatroom(Base):
    __tablename__ = "chatrooms"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    creation_time = Column(DateTime(timezone=True), default=utc_now)
    seller_id = Column(Uuid, ForeignKey("profiles.id"), nullable=False, index=True)
    buyer_id = Column(Uuid, ForeignKey("profiles.id"), nullable=False, index=True)

    # Relationships
    seller = relationship("Profile", foreign_keys=[seller_id])
    buyer = relationship("Profile", foreign_keys=[buyer_id])
    messages = relationship(
        "Message",
        back_populates="chatroom",
        order_by="Message.send_date",
        cascade="all, delete-orphan",
    )

    def __repr__(self):
        return f"<Chatroom(id={self.id}, seller_id={self.seller_id}, buyer_id={self.buyer_id})>"
