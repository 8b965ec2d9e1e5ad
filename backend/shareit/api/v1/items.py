"""Items API routes — listing, search, and comments."""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from shareit.api.deps import get_current_user_id, get_db
from shareit.schemas.common import MessageResponse
from shareit.schemas.item import (
    CommentCreate,
    CommentResponse,
    ItemCreate,
    ItemDetailResponse,
    ItemResponse,
    ItemUpdate,
)
from shareit.services import item_service

router = APIRouter(prefix="/api/v1/items", tags=["items"])


@router.post(
    "",
    response_model=ItemResponse,
    status_code=status.HTTP_201_CREATED,
    summary="List a new item",
)
async def create_item(
    body: ItemCreate,
    db: AsyncSession = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
) -> ItemResponse:
    """Create an item owned by the caller, optionally answering a request."""
    item = await item_service.create_item(
        db,
        owner_id=user_id,
        name=body.name,
        description=body.description,
        available=body.available,
        request_id=body.request_id,
    )
    return ItemResponse.model_validate(item)


@router.get("", response_model=list[ItemDetailResponse], summary="List the caller's items")
async def list_items(
    db: AsyncSession = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
) -> list[ItemDetailResponse]:
    details = await item_service.list_owner_items(db, user_id)
    return [ItemDetailResponse.from_details(d) for d in details]


@router.get("/search", response_model=list[ItemDetailResponse], summary="Search available items")
async def search_items(
    text: str = Query("", description="Substring of the name or description"),
    db: AsyncSession = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
) -> list[ItemDetailResponse]:
    details = await item_service.search_items(db, user_id, text)
    return [ItemDetailResponse.from_details(d) for d in details]


@router.get("/{item_id}", response_model=ItemDetailResponse, summary="Get an item by ID")
async def get_item(
    item_id: int,
    db: AsyncSession = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
) -> ItemDetailResponse:
    """Item with comments; its owner also gets ``lastBooking`` and ``nextBooking``."""
    details = await item_service.get_item_details(db, user_id, item_id)
    return ItemDetailResponse.from_details(details)


@router.patch("/{item_id}", response_model=ItemResponse, summary="Update an item")
async def update_item(
    item_id: int,
    body: ItemUpdate,
    db: AsyncSession = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
) -> ItemResponse:
    item = await item_service.update_item(
        db,
        user_id,
        item_id,
        name=body.name,
        description=body.description,
        available=body.available,
    )
    return ItemResponse.model_validate(item)


@router.delete("/{item_id}", response_model=MessageResponse, summary="Delete an item")
async def delete_item(
    item_id: int,
    db: AsyncSession = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
) -> MessageResponse:
    await item_service.delete_item(db, user_id, item_id)
    return MessageResponse(message="Item deleted")


@router.post("/{item_id}/comment", response_model=CommentResponse, summary="Comment on a rented item")
async def add_comment(
    item_id: int,
    body: CommentCreate,
    db: AsyncSession = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
) -> CommentResponse:
    comment = await item_service.add_comment(db, user_id, item_id, body.text)
    return CommentResponse.model_validate(comment)
