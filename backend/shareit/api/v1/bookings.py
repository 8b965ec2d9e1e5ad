"""Bookings API router.

Ownership rule: a booking is visible to its booker and to the owner of the
booked item; only the owner approves or rejects it.
"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from shareit.api.deps import get_current_user_id, get_db
from shareit.config import settings
from shareit.schemas.booking import BookingCreate, BookingResponse
from shareit.services import booking_service
from shareit.services.booking_state import parse_booking_state

router = APIRouter(prefix="/api/v1/bookings", tags=["bookings"])


@router.post(
    "",
    response_model=BookingResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Book an item",
)
async def create_booking(
    body: BookingCreate,
    db: AsyncSession = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
) -> BookingResponse:
    """Create a WAITING booking for the caller.

    Validates that:
    - The caller and the item exist, and the caller does not own the item.
    - The item is available.
    - ``start`` is before ``end`` and neither lies in the past.
    """
    booking = await booking_service.create_booking(db, user_id, body.item_id, body.start, body.end)
    return BookingResponse.model_validate(booking)


@router.get("", response_model=list[BookingResponse], summary="List the caller's bookings")
async def list_bookings_by_booker(
    state: str = Query("ALL", description="ALL, CURRENT, PAST, FUTURE, WAITING or REJECTED"),
    from_: int = Query(0, alias="from", description="Zero-based offset"),
    size: int = Query(settings.default_page_size, description="Maximum number of results"),
    db: AsyncSession = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
) -> list[BookingResponse]:
    bookings = await booking_service.list_bookings_by_booker(
        db, user_id, parse_booking_state(state), from_, size
    )
    return [BookingResponse.model_validate(b) for b in bookings]


@router.get(
    "/owner",
    response_model=list[BookingResponse],
    summary="List bookings of the caller's items",
)
async def list_bookings_by_owner(
    state: str = Query("ALL", description="ALL, CURRENT, PAST, FUTURE, WAITING or REJECTED"),
    from_: int = Query(0, alias="from", description="Zero-based offset"),
    size: int = Query(settings.default_page_size, description="Maximum number of results"),
    db: AsyncSession = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
) -> list[BookingResponse]:
    bookings = await booking_service.list_bookings_by_owner(
        db, user_id, parse_booking_state(state), from_, size
    )
    return [BookingResponse.model_validate(b) for b in bookings]


@router.get("/{booking_id}", response_model=BookingResponse, summary="Get a booking by ID")
async def get_booking(
    booking_id: int,
    db: AsyncSession = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
) -> BookingResponse:
    """Visible to the booker and the item's owner only."""
    booking = await booking_service.get_booking(db, user_id, booking_id)
    return BookingResponse.model_validate(booking)


@router.patch("/{booking_id}", response_model=BookingResponse, summary="Approve or reject a booking")
async def decide_booking(
    booking_id: int,
    approved: bool = Query(..., description="true to approve, false to reject"),
    db: AsyncSession = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
) -> BookingResponse:
    booking = await booking_service.decide_booking(db, booking_id, user_id, approved)
    return BookingResponse.model_validate(booking)
