"""Comment model — feedback left by users who actually rented an item."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from shareit.database import Base, IntegerPrimaryKeyMixin


class Comment(IntegerPrimaryKeyMixin, Base):
    """A comment on an item."""

    __tablename__ = "comments"

    text: Mapped[str] = mapped_column(String(1024), nullable=False)
    item_id: Mapped[int] = mapped_column(
        ForeignKey("items.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    author_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    created: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.now)

    author: Mapped["User"] = relationship(lazy="selectin")  # type: ignore[name-defined]  # noqa: F821

    @property
    def author_name(self) -> str:
        return self.author.name

    def __repr__(self) -> str:
        return f"<Comment(id={self.id}, item_id={self.item_id}, author_id={self.author_id})>"
