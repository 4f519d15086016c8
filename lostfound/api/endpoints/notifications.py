"""Notification inbox endpoints: list, mark read and delete"""
from fastapi import APIRouter, Depends, Query
from lostfound.api.deps import get_current_user_id, get_notification_store
from lostfound.schemas import (
    NotificationDeleteRequest,
    NotificationDeleteResponse,
    NotificationListResponse,
    NotificationResponse,
)
from lostfound.services.stores import NotificationStore

router = APIRouter(prefix="/notifications")


@router.get("", response_model=NotificationListResponse)
def list_notifications(
    limit: int = Query(default=20, ge=1),
    offset: int = Query(default=0, ge=0),
    user_id: int = Depends(get_current_user_id),
    store: NotificationStore = Depends(get_notification_store),
):
    """The caller's notifications, newest first; limit is capped at 100"""
    notifications, total, unread = store.list_for_user(user_id, limit, offset)
    return NotificationListResponse(
        success=True,
        total=total,
        unread_count=unread,
        limit=min(limit, NotificationStore.MAX_PAGE_SIZE),
        offset=offset,
        notifications=[NotificationResponse.model_validate(n) for n in notifications],
    )


@router.post("/{notification_id}/read", response_model=NotificationResponse)
def mark_notification_read(
    notification_id: int,
    user_id: int = Depends(get_current_user_id),
    store: NotificationStore = Depends(get_notification_store),
):
    return store.mark_read(notification_id, user_id)


@router.post("/delete", response_model=NotificationDeleteResponse)
def delete_notifications(
    request: NotificationDeleteRequest,
    user_id: int = Depends(get_current_user_id),
    store: NotificationStore = Depends(get_notification_store),
):
    """Delete one or several of the caller's notifications"""
    count = store.delete_for_user(user_id, request.ids)
    return NotificationDeleteResponse(
        success=True,
        message=f"{count} notification(s) deleted",
        count=count,
    )
