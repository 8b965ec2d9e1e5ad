"""Pydantic v2 request/response schemas for item and comment endpoints."""

from datetime import datetime

from pydantic import ConfigDict, Field

from shareit.schemas.common import CamelModel
from shareit.services.item_service import ItemDetails

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class ItemCreate(CamelModel):
    """Schema for listing a new item."""

    name: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1, max_length=512)
    available: bool
    request_id: int | None = None


class ItemUpdate(CamelModel):
    """Schema for partially updating an item. All fields optional."""

    name: str | None = Field(None, max_length=255)
    description: str | None = Field(None, max_length=512)
    available: bool | None = None


class CommentCreate(CamelModel):
    text: str = Field(..., min_length=1, max_length=1024)


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class ItemResponse(CamelModel):
    """Item as returned from create/update and nested in bookings and requests."""

    id: int
    name: str
    description: str
    available: bool
    request_id: int | None = None

    model_config = ConfigDict(from_attributes=True)


class BookingShortResponse(CamelModel):
    """Reference to a booking used for ``lastBooking``/``nextBooking``."""

    id: int
    booker_id: int

    model_config = ConfigDict(from_attributes=True)


class CommentResponse(CamelModel):
    id: int
    text: str
    author_name: str
    created: datetime

    model_config = ConfigDict(from_attributes=True)


class ItemDetailResponse(ItemResponse):
    """Item with comments and, for its owner, the adjacent approved bookings."""

    last_booking: BookingShortResponse | None = None
    next_booking: BookingShortResponse | None = None
    comments: list[CommentResponse] = []

    @classmethod
    def from_details(cls, details: ItemDetails) -> "ItemDetailResponse":
        item = details.item
        return cls(
            id=item.id,
            name=item.name,
            description=item.description,
            available=item.available,
            request_id=item.request_id,
            last_booking=(
                BookingShortResponse.model_validate(details.last_booking) if details.last_booking else None
            ),
            next_booking=(
                BookingShortResponse.model_validate(details.next_booking) if details.next_booking else None
            ),
            comments=[CommentResponse.model_validate(c) for c in details.comments],
        )
