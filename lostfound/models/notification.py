from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime
from datetime import datetime
from lostfound.database import Base


class Notification(Base):
    __tablename__ = "notifications"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, nullable=False, index=True)
    type = Column(String(20), nullable=False, default="match")  # match, message, update, system
    title = Column(String(200), nullable=False)
    message = Column(Text, nullable=False)
    link = Column(String(300))
    is_read = Column(Boolean, default=False, index=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    def __repr__(self):
        return f"<Notification(id={self.id}, user_id={self.user_id}, type='{self.type}')>"
