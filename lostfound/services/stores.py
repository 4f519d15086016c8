"""SQLAlchemy-backed item, match and notification stores"""
from functools import wraps
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError, OperationalError, TimeoutError as PoolTimeoutError
from sqlalchemy.orm import Session, aliased, joinedload
from typing import Any, Dict, List, Optional, Tuple
from lostfound.exceptions import Forbidden, InvalidInput, NotFound, StoreUnavailable
from lostfound.models import Item, Match, Notification
import logging

logger = logging.getLogger(__name__)


def translate_store_errors(func):
    """Surface timeouts and lost connections as StoreUnavailable"""

    @wraps(func)
    def wrapper(self, *args, **kwargs):
        try:
            return func(self, *args, **kwargs)
        except (OperationalError, PoolTimeoutError) as e:
            self.db.rollback()
            logger.error(f"Store call {func.__name__} failed: {e}")
            raise StoreUnavailable(f"{func.__name__} failed: {e.__class__.__name__}") from e

    return wrapper


class ItemStore:
    """Read access to lost/found item reports"""

    def __init__(self, db: Session):
        self.db = db

    @translate_store_errors
    def get_item(self, item_id: int) -> Item:
        item = self.db.query(Item).filter(Item.id == item_id).first()
        if not item:
            raise NotFound(f"Item {item_id} not found")
        return item

    @translate_store_errors
    def list_active_items(self, status: str) -> List[Item]:
        return (
            self.db.query(Item)
            .filter(Item.status == status, Item.item_status == "active")
            .order_by(Item.id)
            .all()
        )

    @translate_store_errors
    def create_item(self, user_id: int, **fields) -> Item:
        item = Item(user_id=user_id, item_status="active", **fields)
        self.db.add(item)
        self.db.commit()
        self.db.refresh(item)
        return item


class MatchStore:
    """Persistence of match records, keyed by the unique (lost, found) pair"""

    def __init__(self, db: Session):
        self.db = db

    def _query(self):
        return self.db.query(Match).options(
            joinedload(Match.lost_item),
            joinedload(Match.found_item),
        )

    @translate_store_errors
    def find_match(self, lost_item_id: int, found_item_id: int) -> Optional[Match]:
        return self._query().filter(
            Match.lost_item_id == lost_item_id,
            Match.found_item_id == found_item_id,
        ).first()

    @translate_store_errors
    def upsert_match(
        self,
        lost_item_id: int,
        found_item_id: int,
        match_score: float,
        match_details: Optional[Dict[str, Any]] = None,
    ) -> Tuple[Match, bool]:
        """
        Insert a pending match, or re-score the existing one for the pair
        Status of an existing match is never touched
        Returns: (match, created)
        """
        existing = self.find_match(lost_item_id, found_item_id)
        if existing:
            return self._rescore(existing, match_score, match_details), False

        match = Match(
            lost_item_id=lost_item_id,
            found_item_id=found_item_id,
            match_score=match_score,
            match_details=match_details,
            status="pending",
        )
        self.db.add(match)
        try:
            self.db.commit()
        except IntegrityError:
            # A concurrent pass inserted the same pair first
            self.db.rollback()
            logger.info(f"Match ({lost_item_id}, {found_item_id}) already exists, updating instead")
            existing = self.find_match(lost_item_id, found_item_id)
            if not existing:
                raise
            return self._rescore(existing, match_score, match_details), False

        self.db.refresh(match)
        return match, True

    def _rescore(self, match: Match, match_score: float, match_details: Optional[Dict[str, Any]]) -> Match:
        match.match_score = match_score
        match.match_details = match_details
        self.db.commit()
        self.db.refresh(match)
        return match

    @translate_store_errors
    def get_match(self, match_id: int) -> Match:
        match = self._query().filter(Match.id == match_id).first()
        if not match:
            raise NotFound(f"Match {match_id} not found")
        return match

    @translate_store_errors
    def update_match_status(self, match_id: int, status: str, notes: Optional[str] = None) -> Match:
        match = self.get_match(match_id)
        match.status = status
        if notes is not None:
            match.notes = notes
        self.db.commit()
        self.db.refresh(match)
        return match

    @translate_store_errors
    def list_matches_for_user(self, user_id: int) -> List[Match]:
        lost_item = aliased(Item)
        found_item = aliased(Item)
        return (
            self._query()
            .join(lost_item, Match.lost_item_id == lost_item.id)
            .join(found_item, Match.found_item_id == found_item.id)
            .filter(or_(lost_item.user_id == user_id, found_item.user_id == user_id))
            .order_by(Match.match_score.desc(), Match.id.asc())
            .all()
        )

    def rollback(self):
        self.db.rollback()


class NotificationStore:
    """A user's notification inbox"""

    MAX_PAGE_SIZE = 100

    def __init__(self, db: Session):
        self.db = db

    @translate_store_errors
    def list_for_user(self, user_id: int, limit: int = 20, offset: int = 0) -> Tuple[List[Notification], int, int]:
        """
        Newest first, one page at a time
        Returns: (notifications, total, unread_count)
        """
        limit = min(limit, self.MAX_PAGE_SIZE)
        query = self.db.query(Notification).filter(Notification.user_id == user_id)
        notifications = (
            query.order_by(Notification.created_at.desc(), Notification.id.desc())
            .offset(offset)
            .limit(limit)
            .all()
        )
        total = query.count()
        unread = query.filter(Notification.is_read.is_(False)).count()
        return notifications, total, unread

    @translate_store_errors
    def mark_read(self, notification_id: int, user_id: int) -> Notification:
        notification = self.db.query(Notification).filter(Notification.id == notification_id).first()
        if not notification:
            raise NotFound(f"Notification {notification_id} not found")
        if notification.user_id != user_id:
            raise Forbidden(f"Notification {notification_id} belongs to another user")

        notification.is_read = True
        self.db.commit()
        self.db.refresh(notification)
        return notification

    @translate_store_errors
    def delete_for_user(self, user_id: int, notification_ids: List[int]) -> int:
        """
        Delete the given notifications, all of which must belong to the user
        Unknown ids are ignored
        Returns: number of rows deleted
        """
        if not notification_ids:
            raise InvalidInput("notificationId or notificationIds is required")

        owners = (
            self.db.query(Notification.id, Notification.user_id)
            .filter(Notification.id.in_(notification_ids))
            .all()
        )
        foreign = [row.id for row in owners if row.user_id != user_id]
        if foreign:
            raise Forbidden(f"Notifications {foreign} belong to another user")

        deleted = (
            self.db.query(Notification)
            .filter(Notification.id.in_(notification_ids))
            .delete(synchronize_session=False)
        )
        self.db.commit()
        logger.info(f"User {user_id} deleted {deleted} notification(s)")
        return deleted
