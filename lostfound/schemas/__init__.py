from lostfound.schemas.item_schema import ItemCreate, ItemResponse
from lostfound.schemas.match_schema import (
    CheckLostRequest,
    CheckFoundRequest,
    MatchDecisionRequest,
    MatchResponse,
    MatchCheckResponse,
    MatchListResponse,
)
from lostfound.schemas.notification_schema import (
    NotificationResponse,
    NotificationListResponse,
    NotificationDeleteRequest,
    NotificationDeleteResponse,
)

__all__ = [
    "ItemCreate",
    "ItemResponse",
    "CheckLostRequest",
    "CheckFoundRequest",
    "MatchDecisionRequest",
    "MatchResponse",
    "MatchCheckResponse",
    "MatchListResponse",
    "NotificationResponse",
    "NotificationListResponse",
    "NotificationDeleteRequest",
    "NotificationDeleteResponse",
]
