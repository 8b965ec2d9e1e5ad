"""Shared API dependencies — single import point for all routers.

Re-exports the database session dependency and resolves the caller's
identity, so router modules can import everything they need from one place::

    from shareit.api.deps import get_current_user_id, get_db
"""

from fastapi import Header

from shareit.config import settings
from shareit.database import get_db


async def get_current_user_id(
    user_id: int = Header(..., alias=settings.user_id_header, description="Id of the acting user"),
) -> int:
    """Return the acting user's id from the identity header.

    Existence of the user is checked by the service that needs it, so that a
    missing user surfaces as the operation's own ``NOT_FOUND`` error.
    """
    return user_id


__all__ = [
    "get_db",
    "get_current_user_id",
]
