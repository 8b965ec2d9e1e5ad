"""Item request model — a user asking for something nobody has listed yet."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from shareit.database import Base, IntegerPrimaryKeyMixin


class ItemRequest(IntegerPrimaryKeyMixin, Base):
    """A free-text request that other users answer by listing items."""

    __tablename__ = "requests"

    description: Mapped[str] = mapped_column(String(512), nullable=False)
    requester_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    created: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.now, index=True)

    requester: Mapped["User"] = relationship(lazy="selectin")  # type: ignore[name-defined]  # noqa: F821

    def __repr__(self) -> str:
        return f"<ItemRequest(id={self.id}, requester_id={self.requester_id})>"
