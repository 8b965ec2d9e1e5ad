"""User model — people who own, request, and book items."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from shareit.database import Base, IntegerPrimaryKeyMixin


class User(IntegerPrimaryKeyMixin, Base):
    """A registered user; the same account can both lend and borrow."""

    __tablename__ = "users"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(512), unique=True, index=True, nullable=False)

    def __repr__(self) -> str:
        return f"<User id={self.id} email={self.email!r}>"
