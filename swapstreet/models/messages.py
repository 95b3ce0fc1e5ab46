import uuid
from sqlalchemy import Column, DateTime, Text, ForeignKey, Uuid
from sqlalchemy.orm import relationship
from swapstreet.database.postgres import Base
from swapstreet.utils.time_utils import utc_now


class Message(Base):
    __tablename__ = "messages"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    send_date = Column(DateTime(timezone=True), default=utc_now, index=True)
    content = Column(Text, nullable=False)
    chatroom_id = Column(Uuid, ForeignKey("chatrooms.id", ondelete="CASCADE"), nullable=False, index=True)
    author_id = Column(Uuid, ForeignKey("profiles.id"), nullable=False, index=True)

    # Relationships
    chatroom = relationship("Chatroom", back_populates="messages")
    author = relationship("Profile")

    def __repr__(self):
        return f"<Message(id={self.id}, chatroom_id={self.chatroom_id}, author_id={self.author_id})>"
