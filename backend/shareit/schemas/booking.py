"""Pydantic v2 request/response schemas for booking endpoints."""

from datetime import datetime

from pydantic import ConfigDict, field_validator

from shareit.models.booking import BookingStatus
from shareit.schemas.common import CamelModel, to_naive_local
from shareit.schemas.item import ItemResponse
from shareit.schemas.user import UserResponse

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class BookingCreate(CamelModel):
    """Schema for booking an item.

    Ordering of ``start``/``end`` is checked by the booking service so that it
    is reported as an ``INVALID_TIME_RANGE`` error rather than a 422.
    """

    item_id: int
    start: datetime
    end: datetime

    @field_validator("start", "end")
    @classmethod
    def _naive_local(cls, value: datetime) -> datetime:
        return to_naive_local(value)


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class BookingResponse(CamelModel):
    """Booking with the resolved item and booker."""

    id: int
    start: datetime
    end: datetime
    status: BookingStatus
    item: ItemResponse
    booker: UserResponse

    model_config = ConfigDict(from_attributes=True)
