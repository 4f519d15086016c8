from sqlalchemy import Column, Integer, String, Text, Date, DateTime
from sqlalchemy.orm import relationship
from datetime import datetime
from lostfound.database import Base


class Item(Base):
    """A lost or found item report"""
    __tablename__ = "items"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, nullable=False, index=True)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=False)
    category = Column(String(50), nullable=False, index=True)  # electronics, documents, keys, bags, ...
    status = Column(String(10), nullable=False, index=True)  # lost, found
    item_status = Column(String(20), nullable=False, default="active", index=True)  # active, reunited, closed

    location_lost = Column(String(300))
    location_found = Column(String(300))
    location_details = Column(Text)
    date_lost = Column(Date)
    date_found = Column(Date)
    color = Column(String(50))
    brand = Column(String(100))

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    lost_matches = relationship(
        "Match",
        foreign_keys="Match.lost_item_id",
        back_populates="lost_item",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    found_matches = relationship(
        "Match",
        foreign_keys="Match.found_item_id",
        back_populates="found_item",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self):
        return f"<Item(id={self.id}, status='{self.status}', title='{self.title}')>"
