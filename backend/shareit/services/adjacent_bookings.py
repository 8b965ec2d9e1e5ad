"""Last/next approved booking of an item, used to annotate item listings."""

from datetime import datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from shareit.models.booking import Booking, BookingStatus


async def get_last_booking(db: AsyncSession, item_id: int, now: datetime) -> Booking | None:
    """Approved booking that started at or before ``now`` with the latest end."""
    result = await db.execute(
        select(Booking)
        .where(
            Booking.item_id == item_id,
            Booking.status == BookingStatus.APPROVED,
            Booking.start <= now,
        )
        .order_by(Booking.end.desc(), Booking.id)
        .limit(1)
    )
    return result.scalar_one_or_none()


async def get_next_booking(db: AsyncSession, item_id: int, now: datetime) -> Booking | None:
    """Approved booking starting at or after ``now`` with the earliest start."""
    result = await db.execute(
        select(Booking)
        .where(
            Booking.item_id == item_id,
            Booking.status == BookingStatus.APPROVED,
            Booking.start >= now,
        )
        .order_by(Booking.start, Booking.id)
        .limit(1)
    )
    return result.scalar_one_or_none()
