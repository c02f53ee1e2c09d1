"""
In-app notification model
"""
import uuid
from sqlalchemy import Column, String, Text, DateTime, Boolean, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime
from talenthub.core.database import Base


class Notification(Base):
    __tablename__ = "notifications"

    id = Column(String(50), primary_key=True, index=True, default=lambda: str(uuid.uuid4()))
    userId = Column(String(50), ForeignKey("users.id"), nullable=False, index=True)
    type = Column(String(30), nullable=False, default="system")
    title = Column(String(200), nullable=False)
    message = Column(Text, nullable=False)
    read = Column(Boolean, nullable=False, default=False)
    readAt = Column(DateTime, nullable=True)
    createdAt = Column(DateTime, default=datetime.utcnow)

    user = relationship("User", back_populates="notifications")

    def __repr__(self):
        return f"<Notification {self.title} for User #{self.userId}>"
