"""Booking model — a renter's claim on an item for a time window."""

import enum
from datetime import datetime

from sqlalchemy import DateTime, Enum, ForeignKey, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship

from shareit.database import Base, IntegerPrimaryKeyMixin
from shareit.exceptions import ConflictStateError


class BookingStatus(str, enum.Enum):
    """Owner's decision on a booking."""

    WAITING = "WAITING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    CANCELED = "CANCELED"  # stored value only; nothing transitions into it


BOOKING_TRANSITIONS: dict[BookingStatus, set[BookingStatus]] = {
    BookingStatus.WAITING: {BookingStatus.APPROVED, BookingStatus.REJECTED},
    BookingStatus.APPROVED: set(),
    BookingStatus.REJECTED: set(),
    BookingStatus.CANCELED: set(),
}


def assert_booking_transition(current: BookingStatus, target: BookingStatus) -> None:
    """Raise ``ConflictStateError`` unless ``current -> target`` is allowed."""
    if target not in BOOKING_TRANSITIONS.get(current, set()):
        raise ConflictStateError(f"Booking status {current.value} cannot be changed to {target.value}")


class Booking(IntegerPrimaryKeyMixin, Base):
    """A booking of an item by a user, decided by the item's owner."""

    __tablename__ = "bookings"

    start: Mapped[datetime] = mapped_column("start_time", DateTime, nullable=False)
    end: Mapped[datetime] = mapped_column("end_time", DateTime, nullable=False)
    item_id: Mapped[int] = mapped_column(
        ForeignKey("items.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    booker_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    status: Mapped[BookingStatus] = mapped_column(
        Enum(BookingStatus, name="booking_status"),
        nullable=False,
        default=BookingStatus.WAITING,
        index=True,
    )

    # Relationships
    item: Mapped["Item"] = relationship(lazy="selectin")  # type: ignore[name-defined]  # noqa: F821
    booker: Mapped["User"] = relationship(lazy="selectin")  # type: ignore[name-defined]  # noqa: F821

    __table_args__ = (Index("ix_bookings_start_end", "start_time", "end_time"),)

    def transition_to(self, target: BookingStatus) -> None:
        assert_booking_transition(self.status, target)
        self.status = target

    def __repr__(self) -> str:
        return (
            f"<Booking(id={self.id}, item_id={self.item_id}, booker_id={self.booker_id}, "
            f"start={self.start}, end={self.end}, status={self.status})>"
        )
