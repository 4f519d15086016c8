from lostfound.models.item import Item
from lostfound.models.match import Match
from lostfound.models.notification import Notification

__all__ = [
    "Item",
    "Match",
    "Notification",
]
