"""Celery background tasks for match evaluation and notification delivery"""
from celery import Celery
from lostfound.config import get_settings
from lostfound.database import SessionLocal
from lostfound.exceptions import StoreUnavailable
from lostfound.services.match_manager import MatchLifecycleManager
from lostfound.services.notifications import CeleryNotificationSink, DatabaseNotificationSink
from typing import Optional
import logging

logger = logging.getLogger(__name__)

settings = get_settings()

# Initialize Celery
celery_app = Celery(
    "lostfound_tasks",
    broker=settings.celery_broker_url,
    backend=settings.celery_result_backend
)

celery_app.conf.task_routes = {
    "evaluate_item_task": {"queue": "matching"},
    "send_notification_task": {"queue": "notifications"},
}


@celery_app.task(
    name="evaluate_item_task",
    autoretry_for=(StoreUnavailable,),
    retry_backoff=True,
    retry_kwargs={"max_retries": settings.evaluation_max_retries},
)
def evaluate_item_task(item_id: int, expected_status: Optional[str] = None):
    """
    Background match evaluation for a newly reported item.
    StoreUnavailable is retried with exponential backoff, anything else is final.
    """
    db = SessionLocal()

    try:
        manager = MatchLifecycleManager.from_session(db, CeleryNotificationSink())
        matches = manager.evaluate_new_item(item_id, expected_status)
        return {
            "status": "success",
            "item_id": item_id,
            "match_ids": [m.id for m in matches],
        }

    finally:
        db.close()


@celery_app.task(name="send_notification_task")
def send_notification_task(user_id: int, title: str, message: str, link: Optional[str] = None):
    """Persist a notification for a user"""
    DatabaseNotificationSink(SessionLocal).notify(user_id, title, message, link)
    return {"status": "sent", "user_id": user_id}


def schedule_match_evaluation(item_id: int, expected_status: Optional[str] = None) -> bool:
    """
    Queue match evaluation for an item that was just stored.
    Never raises: a failure here must not fail the item's own creation.
    """
    try:
        evaluate_item_task.delay(item_id, expected_status)
        return True
    except Exception as e:
        logger.error(f"Could not queue match evaluation for item {item_id}: {e}")
        return False
