"""Notification sinks for newly created matches"""
from typing import Callable, List, NamedTuple, Optional
from sqlalchemy.orm import Session
from lostfound.models import Notification
import logging

logger = logging.getLogger(__name__)


class MatchNotice(NamedTuple):
    user_id: int
    title: str
    message: str
    link: str


def build_match_notices(
    match_id: int, lost_user_id: int, lost_title: str, found_user_id: int, found_title: str
) -> List[MatchNotice]:
    """One notice for each participant of a new match"""
    link = f"/matches/{match_id}"
    return [
        MatchNotice(
            user_id=lost_user_id,
            title="Potential Match Found!",
            message=f'A potential match for your lost item "{lost_title}" was found!',
            link=link,
        ),
        MatchNotice(
            user_id=found_user_id,
            title="Your Found Item May Help!",
            message=f'Your found item "{found_title}" may match a lost item someone is looking for!',
            link=link,
        ),
    ]


class NotificationSink:
    """Receives match notices; implementations must not block the caller for long"""

    def notify(self, user_id: int, title: str, message: str, link: Optional[str] = None) -> None:
        raise NotImplementedError


class DatabaseNotificationSink(NotificationSink):
    """Stores notices as Notification rows, each in its own session"""

    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    def notify(self, user_id: int, title: str, message: str, link: Optional[str] = None) -> None:
        db = self.session_factory()
        try:
            db.add(Notification(user_id=user_id, type="match", title=title, message=message, link=link))
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()


class CeleryNotificationSink(NotificationSink):
    """Hands notices to the task queue"""

    def notify(self, user_id: int, title: str, message: str, link: Optional[str] = None) -> None:
        from lostfound.tasks.celery_tasks import send_notification_task

        send_notification_task.delay(user_id, title, message, link)
