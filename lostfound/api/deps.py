"""Shared FastAPI dependencies"""
from fastapi import Depends, Header, HTTPException
from sqlalchemy.orm import Session
from typing import Optional
from lostfound.database import SessionLocal, get_db
from lostfound.services.match_manager import MatchLifecycleManager
from lostfound.services.notifications import DatabaseNotificationSink, NotificationSink
from lostfound.services.stores import NotificationStore


def get_current_user_id(x_user_id: Optional[int] = Header(default=None)) -> int:
    """Caller identity, resolved upstream by the authentication layer"""
    if x_user_id is None:
        raise HTTPException(status_code=401, detail="Unauthorized")
    return x_user_id


def get_notification_sink() -> NotificationSink:
    return DatabaseNotificationSink(SessionLocal)


def get_match_manager(
    db: Session = Depends(get_db),
    sink: NotificationSink = Depends(get_notification_sink),
) -> MatchLifecycleManager:
    return MatchLifecycleManager.from_session(db, sink)


def get_notification_store(db: Session = Depends(get_db)) -> NotificationStore:
    return NotificationStore(db)
