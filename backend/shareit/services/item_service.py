"""Item service — listing items, annotating them with bookings, and comments."""

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import datetime

from sqlalchemy import delete, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from shareit.exceptions import NotFoundError, UnauthorizedError, UnavailableError
from shareit.models.booking import Booking, BookingStatus
from shareit.models.comment import Comment
from shareit.models.item import Item
from shareit.models.item_request import ItemRequest
from shareit.services.adjacent_bookings import get_last_booking, get_next_booking
from shareit.services.user_service import ensure_user_exists, get_user

logger = logging.getLogger(__name__)


@dataclass
class ItemDetails:
    """An item plus the data shown alongside it."""

    item: Item
    last_booking: Booking | None = None
    next_booking: Booking | None = None
    comments: list[Comment] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


async def get_item(db: AsyncSession, item_id: int) -> Item:
    """Return the item or raise ``NotFoundError``."""
    item = await db.get(Item, item_id)
    if item is None:
        raise NotFoundError(f"Item with id {item_id} does not exist")
    return item


async def item_is_available(db: AsyncSession, item_id: int) -> bool:
    """Whether the owner currently offers ``item_id`` for booking.

    Raises:
        NotFoundError: If the item does not exist.
    """
    item = await get_item(db, item_id)
    return item.available


async def _get_owned_item(db: AsyncSession, item_id: int, user_id: int) -> Item:
    item = await get_item(db, item_id)
    if item.owner_id != user_id:
        raise UnauthorizedError(f"Only the owner may modify item {item_id}")
    return item


async def _comments_by_item(db: AsyncSession, item_ids: list[int]) -> dict[int, list[Comment]]:
    grouped: dict[int, list[Comment]] = defaultdict(list)
    if not item_ids:
        return grouped
    result = await db.execute(
        select(Comment).where(Comment.item_id.in_(item_ids)).order_by(Comment.created, Comment.id)
    )
    for comment in result.scalars().all():
        grouped[comment.item_id].append(comment)
    return grouped


async def _details(
    db: AsyncSession,
    items: list[Item],
    user_id: int,
    now: datetime,
) -> list[ItemDetails]:
    """Attach comments to every item, and last/next bookings to those ``user_id`` owns."""
    comments = await _comments_by_item(db, [item.id for item in items])
    details = []
    for item in items:
        entry = ItemDetails(item=item, comments=comments.get(item.id, []))
        if item.owner_id == user_id:
            entry.last_booking = await get_last_booking(db, item.id, now)
            entry.next_booking = await get_next_booking(db, item.id, now)
        details.append(entry)
    return details


# ---------------------------------------------------------------------------
# Items
# ---------------------------------------------------------------------------


async def create_item(
    db: AsyncSession,
    owner_id: int,
    name: str,
    description: str,
    available: bool,
    request_id: int | None = None,
) -> Item:
    """Register an item, optionally answering an item request.

    Raises:
        NotFoundError: If the owner or the referenced request does not exist.
    """
    owner = await get_user(db, owner_id)
    request = None
    if request_id is not None:
        request = await db.get(ItemRequest, request_id)
        if request is None:
            raise NotFoundError(f"Item request with id {request_id} does not exist")

    item = Item(name=name, description=description, available=available, owner=owner, request=request)
    db.add(item)
    await db.flush()
    await db.refresh(item)
    logger.info("User %s listed item %s", owner_id, item.id)
    return item


async def get_item_details(
    db: AsyncSession,
    user_id: int,
    item_id: int,
    now: datetime | None = None,
) -> ItemDetails:
    """Item with comments; the owner also sees the last and next approved bookings."""
    item = await get_item(db, item_id)
    [details] = await _details(db, [item], user_id, now or datetime.now())
    return details


async def update_item(
    db: AsyncSession,
    user_id: int,
    item_id: int,
    name: str | None = None,
    description: str | None = None,
    available: bool | None = None,
) -> Item:
    """Partially update an item. Blank strings leave the field unchanged.

    Raises:
        NotFoundError: If the user or item does not exist.
        UnauthorizedError: If ``user_id`` does not own the item.
    """
    await ensure_user_exists(db, user_id)
    item = await _get_owned_item(db, item_id, user_id)

    if name is not None and name.strip():
        item.name = name
    if description is not None and description.strip():
        item.description = description
    if available is not None:
        item.available = available

    await db.flush()
    await db.refresh(item)
    logger.info("User %s updated item %s", user_id, item_id)
    return item


async def delete_item(db: AsyncSession, user_id: int, item_id: int) -> None:
    """Delete an owned item with its bookings and comments. Unknown ids are ignored."""
    item = await db.get(Item, item_id)
    if item is None:
        logger.info("Item %s not found, nothing to delete", item_id)
        return
    if item.owner_id != user_id:
        raise UnauthorizedError(f"Only the owner may delete item {item_id}")

    await db.execute(delete(Item).where(Item.id == item_id))
    db.expunge_all()
    logger.info("User %s deleted item %s", user_id, item_id)


async def list_owner_items(
    db: AsyncSession,
    owner_id: int,
    now: datetime | None = None,
) -> list[ItemDetails]:
    """All items of ``owner_id`` ordered by id, with bookings and comments."""
    result = await db.execute(select(Item).where(Item.owner_id == owner_id).order_by(Item.id))
    items = list(result.scalars().all())
    return await _details(db, items, owner_id, now or datetime.now())


async def search_items(
    db: AsyncSession,
    user_id: int,
    text: str | None,
    now: datetime | None = None,
) -> list[ItemDetails]:
    """Available items whose name or description contains ``text``, case-insensitively."""
    if text is None or not text.strip():
        return []

    pattern = f"%{text}%"
    result = await db.execute(
        select(Item)
        .where(
            Item.available.is_(True),
            or_(Item.name.ilike(pattern), Item.description.ilike(pattern)),
        )
        .order_by(Item.id)
    )
    items = list(result.scalars().all())
    return await _details(db, items, user_id, now or datetime.now())


async def items_by_request(db: AsyncSession, request_ids: list[int]) -> dict[int, list[Item]]:
    """Items answering each of ``request_ids``, keyed by request id."""
    grouped: dict[int, list[Item]] = defaultdict(list)
    if not request_ids:
        return grouped
    result = await db.execute(select(Item).where(Item.request_id.in_(request_ids)).order_by(Item.id))
    for item in result.scalars().all():
        grouped[item.request_id].append(item)
    return grouped


# ---------------------------------------------------------------------------
# Comments
# ---------------------------------------------------------------------------


async def add_comment(
    db: AsyncSession,
    user_id: int,
    item_id: int,
    text: str,
    now: datetime | None = None,
) -> Comment:
    """Comment on an item the user has rented.

    Raises:
        NotFoundError: If the item or user does not exist.
        UnauthorizedError: If the owner tries to comment on their own item.
        UnavailableError: If the user has no approved booking of the item that
            has already started.
    """
    now = now or datetime.now()
    item = await get_item(db, item_id)
    author = await get_user(db, user_id)
    if item.owner_id == user_id:
        raise UnauthorizedError(f"The owner may not comment on their own item {item_id}")

    result = await db.execute(
        select(Booking.id)
        .where(
            Booking.item_id == item_id,
            Booking.booker_id == user_id,
            Booking.status == BookingStatus.APPROVED,
            Booking.start <= now,
        )
        .limit(1)
    )
    if result.scalar_one_or_none() is None:
        raise UnavailableError(f"User {user_id} has not rented item {item_id} and may not comment on it")

    comment = Comment(text=text, item_id=item.id, author=author, created=now)
    db.add(comment)
    await db.flush()
    await db.refresh(comment)
    logger.info("User %s commented on item %s (comment %s)", user_id, item_id, comment.id)
    return comment
