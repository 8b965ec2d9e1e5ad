"""Booking state filters — temporal/status views over bookings relative to "now".

A ``BookingState`` is never stored. It selects bookings either in Python
(``classify``) or in SQL (``state_clause``); both use the same boundaries:

* CURRENT  ``start <= now <= end`` (a booking ending exactly now is still current)
* PAST     ``end < now``
* FUTURE   ``start > now``
* WAITING  ``status == WAITING``
* REJECTED ``status in (REJECTED, CANCELED)``
"""

import enum
from datetime import datetime

from sqlalchemy import ColumnElement, and_, true

from shareit.exceptions import InvalidArgumentError
from shareit.models.booking import Booking, BookingStatus

NOT_APPROVED_STATUSES: tuple[BookingStatus, ...] = (BookingStatus.REJECTED, BookingStatus.CANCELED)


class BookingState(str, enum.Enum):
    """Filter accepted by the booking listings."""

    ALL = "ALL"
    CURRENT = "CURRENT"
    PAST = "PAST"
    FUTURE = "FUTURE"
    WAITING = "WAITING"
    REJECTED = "REJECTED"


def parse_booking_state(value: str | None) -> BookingState:
    """Parse a state name case-insensitively; missing means ALL.

    Raises:
        InvalidArgumentError: If the name is not a known state.
    """
    if value is None:
        return BookingState.ALL
    try:
        return BookingState[value.strip().upper()]
    except KeyError:
        raise InvalidArgumentError(f"Unknown state: {value}") from None


def classify(booking: Booking, now: datetime, state: BookingState) -> bool:
    """Return True when ``booking`` belongs to ``state`` at instant ``now``."""
    if state is BookingState.ALL:
        return True
    if state is BookingState.CURRENT:
        return booking.start <= now <= booking.end
    if state is BookingState.PAST:
        return booking.end < now
    if state is BookingState.FUTURE:
        return booking.start > now
    if state is BookingState.WAITING:
        return booking.status == BookingStatus.WAITING
    if state is BookingState.REJECTED:
        return booking.status in NOT_APPROVED_STATUSES
    raise InvalidArgumentError(f"Unknown state: {state}")


def state_clause(state: BookingState, now: datetime) -> ColumnElement[bool]:
    """SQL predicate equivalent to ``classify(booking, now, state)``."""
    if state is BookingState.ALL:
        return true()
    if state is BookingState.CURRENT:
        return and_(Booking.start <= now, Booking.end >= now)
    if state is BookingState.PAST:
        return Booking.end < now
    if state is BookingState.FUTURE:
        return Booking.start > now
    if state is BookingState.WAITING:
        return Booking.status == BookingStatus.WAITING
    if state is BookingState.REJECTED:
        return Booking.status.in_(NOT_APPROVED_STATUSES)
    raise InvalidArgumentError(f"Unknown state: {state}")
