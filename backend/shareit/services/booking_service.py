"""Booking service — create, decide, fetch and list bookings.

Ownership rule: only the owner of the booked item may approve or reject a
booking; only the owner or the booker may read it.
"""

import logging
from datetime import datetime

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from shareit.exceptions import (
    ConflictStateError,
    InvalidTimeRangeError,
    NotFoundError,
    UnauthorizedError,
    UnavailableError,
)
from shareit.models.booking import Booking, BookingStatus
from shareit.models.item import Item
from shareit.services.booking_state import BookingState, state_clause
from shareit.services.item_service import get_item, item_is_available
from shareit.services.pagination import page_request
from shareit.services.user_service import ensure_user_exists, get_user

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _check_time_range(start: datetime, end: datetime, now: datetime) -> None:
    if start >= end:
        raise InvalidTimeRangeError("Booking start must be strictly before its end")
    if start < now or end < now:
        raise InvalidTimeRangeError("Booking must not start or end in the past")


async def _get_booking(db: AsyncSession, booking_id: int, for_update: bool = False) -> Booking:
    query = select(Booking).where(Booking.id == booking_id)
    if for_update:
        query = query.with_for_update().execution_options(populate_existing=True)
    result = await db.execute(query)
    booking = result.scalar_one_or_none()
    if booking is None:
        raise NotFoundError(f"Booking with id {booking_id} does not exist")
    return booking


def _item_lock_query(item_id: int) -> Select:
    return select(Item.id).where(Item.id == item_id).with_for_update()


async def _check_no_approved_overlap(db: AsyncSession, booking: Booking) -> None:
    """Raise 409 if another approved booking of the same item overlaps this one."""
    result = await db.execute(
        select(Booking.id)
        .where(
            Booking.item_id == booking.item_id,
            Booking.id != booking.id,
            Booking.status == BookingStatus.APPROVED,
            Booking.start < booking.end,
            Booking.end > booking.start,
        )
        .limit(1)
    )
    conflicting_id = result.scalar_one_or_none()
    if conflicting_id is not None:
        raise ConflictStateError(
            f"Booking {booking.id} overlaps approved booking {conflicting_id} of item {booking.item_id}"
        )


# ---------------------------------------------------------------------------
# Operations
# ---------------------------------------------------------------------------


async def create_booking(
    db: AsyncSession,
    booker_id: int,
    item_id: int,
    start: datetime,
    end: datetime,
    now: datetime | None = None,
) -> Booking:
    """Create a WAITING booking of ``item_id`` for ``booker_id``.

    Raises:
        NotFoundError: If the booker or item does not exist, or the booker owns the item.
        UnavailableError: If the item is not available.
        InvalidTimeRangeError: If ``start >= end`` or the window lies in the past.
    """
    now = now or datetime.now()

    booker = await get_user(db, booker_id)
    item = await get_item(db, item_id)
    if item.owner_id == booker_id:
        raise NotFoundError(f"Item with id {item_id} is not available for booking by its owner")
    if not await item_is_available(db, item_id):
        raise UnavailableError(f"Item with id {item_id} is not available for booking")
    _check_time_range(start, end, now)

    booking = Booking(start=start, end=end, item=item, booker=booker, status=BookingStatus.WAITING)
    db.add(booking)
    await db.flush()
    await db.refresh(booking)
    logger.info("User %s booked item %s from %s to %s (booking %s)", booker_id, item_id, start, end, booking.id)
    return booking


async def decide_booking(db: AsyncSession, booking_id: int, user_id: int, approved: bool) -> Booking:
    """Approve or reject a WAITING booking on behalf of the item's owner.

    The booking row is locked for the rest of the transaction, so of two
    concurrent decisions the second one sees the first one's status. Approvals
    also lock the booked item's row before the overlap check, so approvals of
    different bookings of the same item run one at a time.

    Raises:
        NotFoundError: If the booking does not exist.
        UnauthorizedError: If ``user_id`` does not own the booked item.
        ConflictStateError: If the booking is no longer WAITING, or approving it
            would overlap another approved booking of the item.
    """
    booking = await _get_booking(db, booking_id, for_update=True)
    if booking.item.owner_id != user_id:
        raise UnauthorizedError(f"Only the owner of item {booking.item_id} may decide booking {booking_id}")

    target = BookingStatus.APPROVED if approved else BookingStatus.REJECTED
    if booking.status != BookingStatus.WAITING:
        raise ConflictStateError(f"Booking {booking_id} has already been decided: {booking.status.value}")
    if target == BookingStatus.APPROVED:
        await db.execute(_item_lock_query(booking.item_id))
        await _check_no_approved_overlap(db, booking)

    booking.transition_to(target)
    await db.flush()
    await db.refresh(booking)
    logger.info("Booking %s set to %s by owner %s", booking_id, target.value, user_id)
    return booking


async def get_booking(db: AsyncSession, user_id: int, booking_id: int) -> Booking:
    """Return a booking visible to its booker or the item's owner.

    Raises:
        NotFoundError: If the booking does not exist.
        UnauthorizedError: If ``user_id`` is neither the booker nor the owner.
    """
    booking = await _get_booking(db, booking_id)
    if user_id not in (booking.booker_id, booking.item.owner_id):
        raise UnauthorizedError(
            f"Booking {booking_id} is visible only to its booker or the owner of the item"
        )
    return booking


async def list_bookings_by_owner(
    db: AsyncSession,
    owner_id: int,
    state: BookingState = BookingState.ALL,
    from_: int = 0,
    size: int = 10,
    now: datetime | None = None,
) -> list[Booking]:
    """Bookings of items owned by ``owner_id`` matching ``state``, newest start first.

    Raises:
        NotFoundError: If the owner does not exist.
        InvalidArgumentError: On bad paging parameters.
    """
    page = page_request(from_, size)
    await ensure_user_exists(db, owner_id)
    now = now or datetime.now()

    query = (
        select(Booking)
        .join(Item, Booking.item_id == Item.id)
        .where(Item.owner_id == owner_id, state_clause(state, now))
        .order_by(Booking.start.desc(), Booking.id)
    )
    result = await db.execute(page.apply(query))
    return list(result.scalars().all())


async def list_bookings_by_booker(
    db: AsyncSession,
    booker_id: int,
    state: BookingState = BookingState.ALL,
    from_: int = 0,
    size: int = 10,
    now: datetime | None = None,
) -> list[Booking]:
    """Bookings made by ``booker_id`` matching ``state``, newest start first.

    Raises:
        NotFoundError: If the booker does not exist.
        InvalidArgumentError: On bad paging parameters.
    """
    page = page_request(from_, size)
    await ensure_user_exists(db, booker_id)
    now = now or datetime.now()

    query = (
        select(Booking)
        .where(Booking.booker_id == booker_id, state_clause(state, now))
        .order_by(Booking.start.desc(), Booking.id)
    )
    result = await db.execute(page.apply(query))
    return list(result.scalars().all())
