"""Item request service — ask for items and see which items answered."""

import logging
from dataclasses import dataclass, field
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from shareit.exceptions import NotFoundError
from shareit.models.item import Item
from shareit.models.item_request import ItemRequest
from shareit.services.item_service import items_by_request
from shareit.services.pagination import page_request
from shareit.services.user_service import ensure_user_exists, get_user

logger = logging.getLogger(__name__)


@dataclass
class ItemRequestDetails:
    """A request together with the items listed in response to it."""

    request: ItemRequest
    items: list[Item] = field(default_factory=list)


async def _with_items(db: AsyncSession, requests: list[ItemRequest]) -> list[ItemRequestDetails]:
    answers = await items_by_request(db, [request.id for request in requests])
    return [ItemRequestDetails(request=request, items=answers.get(request.id, [])) for request in requests]


async def create_request(
    db: AsyncSession,
    user_id: int,
    description: str,
    now: datetime | None = None,
) -> ItemRequest:
    """Register a request on behalf of ``user_id``.

    Raises:
        NotFoundError: If the requester does not exist.
    """
    requester = await get_user(db, user_id)
    request = ItemRequest(description=description, requester=requester, created=now or datetime.now())
    db.add(request)
    await db.flush()
    await db.refresh(request)
    logger.info("User %s created item request %s", user_id, request.id)
    return request


async def get_request(db: AsyncSession, user_id: int, request_id: int) -> ItemRequestDetails:
    """Any existing user may view any request.

    Raises:
        NotFoundError: If the user or request does not exist.
    """
    await ensure_user_exists(db, user_id)
    request = await db.get(ItemRequest, request_id)
    if request is None:
        raise NotFoundError(f"Item request with id {request_id} does not exist")
    [details] = await _with_items(db, [request])
    return details


async def list_own_requests(db: AsyncSession, user_id: int) -> list[ItemRequestDetails]:
    """The user's requests, newest first."""
    await ensure_user_exists(db, user_id)
    result = await db.execute(
        select(ItemRequest)
        .where(ItemRequest.requester_id == user_id)
        .order_by(ItemRequest.created.desc(), ItemRequest.id.desc())
    )
    return await _with_items(db, list(result.scalars().all()))


async def list_other_requests(
    db: AsyncSession,
    user_id: int,
    from_: int = 0,
    size: int = 10,
) -> list[ItemRequestDetails]:
    """Requests made by everyone except ``user_id``, newest first, paged by offset.

    Raises:
        NotFoundError: If the user does not exist.
        InvalidArgumentError: On bad paging parameters.
    """
    page = page_request(from_, size)
    await ensure_user_exists(db, user_id)
    query = (
        select(ItemRequest)
        .where(ItemRequest.requester_id != user_id)
        .order_by(ItemRequest.created.desc(), ItemRequest.id.desc())
    )
    result = await db.execute(page.apply(query))
    return await _with_items(db, list(result.scalars().all()))
