from sqlalchemy import Column, Integer, String, Float, Text, ForeignKey, DateTime, JSON, UniqueConstraint
from sqlalchemy.orm import relationship
from datetime import datetime
from lostfound.database import Base

MATCH_STATUSES = ("pending", "confirmed", "rejected")


class Match(Base):
    """Scored pairing of a lost item and a found item awaiting a decision"""
    __tablename__ = "matches"
    __table_args__ = (
        UniqueConstraint("lost_item_id", "found_item_id", name="uq_matches_lost_found"),
    )

    id = Column(Integer, primary_key=True, index=True)
    lost_item_id = Column(Integer, ForeignKey("items.id", ondelete="CASCADE"), nullable=False, index=True)
    found_item_id = Column(Integer, ForeignKey("items.id", ondelete="CASCADE"), nullable=False, index=True)
    match_score = Column(Float, nullable=False)
    match_details = Column(JSON)  # Breakdown of sub-scores
    status = Column(String(20), nullable=False, default="pending")  # pending, confirmed, rejected
    notes = Column(Text)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    lost_item = relationship("Item", foreign_keys=[lost_item_id], back_populates="lost_matches")
    found_item = relationship("Item", foreign_keys=[found_item_id], back_populates="found_matches")

    def is_participant(self, user_id: int) -> bool:
        return user_id in (self.lost_item.user_id, self.found_item.user_id)

    def __repr__(self):
        return f"<Match(id={self.id}, lost={self.lost_item_id}, found={self.found_item_id}, score={self.match_score}, status='{self.status}')>"
