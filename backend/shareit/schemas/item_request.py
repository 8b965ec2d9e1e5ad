"""Pydantic v2 request/response schemas for item request endpoints."""

from datetime import datetime

from pydantic import Field

from shareit.schemas.common import CamelModel
from shareit.schemas.item import ItemResponse
from shareit.services.item_request_service import ItemRequestDetails


class ItemRequestCreate(CamelModel):
    """Schema for asking for an item nobody has listed yet."""

    description: str = Field(..., min_length=1, max_length=512)


class ItemRequestResponse(CamelModel):
    """A request and the items offered in answer to it."""

    id: int
    description: str
    created: datetime
    items: list[ItemResponse] = []

    @classmethod
    def from_details(cls, details: ItemRequestDetails) -> "ItemRequestResponse":
        request = details.request
        return cls(
            id=request.id,
            description=request.description,
            created=request.created,
            items=[ItemResponse.model_validate(item) for item in details.items],
        )
