"""User service — registration, lookup, profile updates."""

import logging

from sqlalchemy import delete, exists, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from shareit.exceptions import DuplicateEmailError, NotFoundError
from shareit.models.user import User

logger = logging.getLogger(__name__)


async def get_user(db: AsyncSession, user_id: int) -> User:
    """Return the user or raise ``NotFoundError``."""
    user = await db.get(User, user_id)
    if user is None:
        raise NotFoundError(f"User with id {user_id} does not exist")
    return user


async def user_exists(db: AsyncSession, user_id: int) -> bool:
    result = await db.execute(select(exists().where(User.id == user_id)))
    return bool(result.scalar())


async def ensure_user_exists(db: AsyncSession, user_id: int) -> None:
    if not await user_exists(db, user_id):
        raise NotFoundError(f"User with id {user_id} does not exist")


async def _check_email_free(db: AsyncSession, email: str, exclude_user_id: int | None = None) -> None:
    query = select(User.id).where(User.email == email)
    if exclude_user_id is not None:
        query = query.where(User.id != exclude_user_id)
    result = await db.execute(query)
    if result.first() is not None:
        logger.info("Email %s is already registered", email)
        raise DuplicateEmailError(f"Email {email} is already registered")


async def _flush_user(db: AsyncSession, email: str) -> None:
    """Flush pending changes; a concurrent registration of the same email trips the unique index."""
    try:
        await db.flush()
    except IntegrityError as exc:
        logger.info("Email %s was registered concurrently", email)
        raise DuplicateEmailError(f"Email {email} is already registered") from exc


async def create_user(db: AsyncSession, name: str, email: str) -> User:
    await _check_email_free(db, email)

    user = User(name=name, email=email)
    db.add(user)
    await _flush_user(db, email)
    await db.refresh(user)
    logger.info("Created user %s", user.id)
    return user


async def list_users(db: AsyncSession) -> list[User]:
    result = await db.execute(select(User).order_by(User.id))
    return list(result.scalars().all())


async def update_user(
    db: AsyncSession,
    user_id: int,
    name: str | None = None,
    email: str | None = None,
) -> User:
    """Partially update a user. Blank values leave the field unchanged.

    Raises:
        NotFoundError: If the user does not exist.
        DuplicateEmailError: If another user already has ``email``.
    """
    user = await get_user(db, user_id)

    if email is not None and email.strip():
        await _check_email_free(db, email, exclude_user_id=user_id)
        user.email = email
    if name is not None and name.strip():
        user.name = name

    await _flush_user(db, user.email)
    await db.refresh(user)
    logger.info("Updated user %s", user_id)
    return user


async def delete_user(db: AsyncSession, user_id: int) -> None:
    """Delete a user; their items, bookings, comments and requests cascade. Unknown ids are ignored."""
    result = await db.execute(delete(User).where(User.id == user_id))
    # Rows removed by ON DELETE CASCADE stay in the identity map otherwise.
    db.expunge_all()
    if result.rowcount:
        logger.info("Deleted user %s", user_id)
    else:
        logger.info("User %s not found, nothing to delete", user_id)
