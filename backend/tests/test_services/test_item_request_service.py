"""Tests for item requests and the items answering them."""

from datetime import datetime, timedelta

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from shareit.exceptions import InvalidArgumentError, NotFoundError
from shareit.services import item_request_service, item_service

NOW = datetime(2030, 6, 15, 12, 0, 0)


class TestItemRequests:
    async def test_create_and_answer(self, db_session: AsyncSession, owner, booker) -> None:
        request = await item_request_service.create_request(db_session, booker.id, "Need a tent", now=NOW)
        assert request.created == NOW

        tent = await item_service.create_item(db_session, owner.id, "Tent", "Two-person tent", True, request.id)

        details = await item_request_service.get_request(db_session, owner.id, request.id)
        assert details.request.id == request.id
        assert [i.id for i in details.items] == [tent.id]

    async def test_unknown_requester(self, db_session: AsyncSession) -> None:
        with pytest.raises(NotFoundError):
            await item_request_service.create_request(db_session, 9999, "Need a tent")

    async def test_unknown_request(self, db_session: AsyncSession, owner) -> None:
        with pytest.raises(NotFoundError):
            await item_request_service.get_request(db_session, owner.id, 9999)

    async def test_own_requests_newest_first(self, db_session: AsyncSession, booker, owner) -> None:
        older = await item_request_service.create_request(db_session, booker.id, "Tent", now=NOW)
        newer = await item_request_service.create_request(
            db_session, booker.id, "Kayak", now=NOW + timedelta(hours=1)
        )
        await item_request_service.create_request(db_session, owner.id, "Bike", now=NOW)

        details = await item_request_service.list_own_requests(db_session, booker.id)
        assert [d.request.id for d in details] == [newer.id, older.id]
        assert all(d.items == [] for d in details)

    async def test_other_requests_paged(self, db_session: AsyncSession, booker, owner) -> None:
        created = [
            await item_request_service.create_request(
                db_session, booker.id, f"Thing {k}", now=NOW + timedelta(hours=k)
            )
            for k in range(4)
        ]
        await item_request_service.create_request(db_session, owner.id, "Own request", now=NOW)
        newest_first = [r.id for r in reversed(created)]

        details = await item_request_service.list_other_requests(db_session, owner.id, 1, 2)
        assert [d.request.id for d in details] == newest_first[1:3]

        assert await item_request_service.list_other_requests(db_session, booker.id, 1, 10) == []

    async def test_bad_paging(self, db_session: AsyncSession, owner) -> None:
        with pytest.raises(InvalidArgumentError):
            await item_request_service.list_other_requests(db_session, owner.id, -1, 10)
