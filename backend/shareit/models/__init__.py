"""SQLAlchemy models for ShareIt.

All models are imported here so that Alembic's autogenerate can discover
them via Base.metadata. If you add a new model, import it in this file.
"""

from shareit.models.booking import Booking, BookingStatus
from shareit.models.comment import Comment
from shareit.models.item import Item
from shareit.models.item_request import ItemRequest
from shareit.models.user import User

__all__ = [
    "Booking",
    "BookingStatus",
    "Comment",
    "Item",
    "ItemRequest",
    "User",
]
