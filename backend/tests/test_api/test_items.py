"""Tests for item and comment endpoints."""

from datetime import datetime, timedelta

import pytest
from httpx import AsyncClient

from shareit.models import BookingStatus

pytestmark = pytest.mark.asyncio

DAY = timedelta(days=1)


# ---------------------------------------------------------------------------
# POST /api/v1/items
# ---------------------------------------------------------------------------


class TestCreateItem:
    async def test_create_success(self, client: AsyncClient, owner_headers: dict) -> None:
        response = await client.post(
            "/api/v1/items",
            json={"name": "Ladder", "description": "Aluminium ladder", "available": True},
            headers=owner_headers,
        )
        assert response.status_code == 201
        data = response.json()
        assert data["name"] == "Ladder"
        assert data["available"] is True
        assert data["requestId"] is None

    async def test_answers_request(self, client: AsyncClient, owner_headers: dict, booker_headers: dict) -> None:
        response = await client.post("/api/v1/requests", json={"description": "Need a tent"}, headers=booker_headers)
        request_id = response.json()["id"]

        response = await client.post(
            "/api/v1/items",
            json={"name": "Tent", "description": "Two-person tent", "available": True, "requestId": request_id},
            headers=owner_headers,
        )
        assert response.status_code == 201
        assert response.json()["requestId"] == request_id

    async def test_unknown_owner(self, client: AsyncClient) -> None:
        response = await client.post(
            "/api/v1/items",
            json={"name": "Ladder", "description": "Aluminium ladder", "available": True},
            headers={"X-Sharer-User-Id": "9999"},
        )
        assert response.status_code == 404

    async def test_missing_identity_header(self, client: AsyncClient) -> None:
        response = await client.post(
            "/api/v1/items",
            json={"name": "Ladder", "description": "Aluminium ladder", "available": True},
        )
        assert response.status_code == 422

    async def test_missing_available(self, client: AsyncClient, owner_headers: dict) -> None:
        response = await client.post(
            "/api/v1/items",
            json={"name": "Ladder", "description": "Aluminium ladder"},
            headers=owner_headers,
        )
        assert response.status_code == 422


# ---------------------------------------------------------------------------
# GET /api/v1/items, /api/v1/items/{id}, /api/v1/items/search
# ---------------------------------------------------------------------------


class TestReadItems:
    async def test_owner_sees_adjacent_bookings(
        self, client: AsyncClient, item, booker, owner_headers: dict, booking_factory
    ) -> None:
        now = datetime.now()
        last = await booking_factory(item, booker, now - 3 * DAY, now - 2 * DAY)
        nxt = await booking_factory(item, booker, now + 2 * DAY, now + 3 * DAY)

        response = await client.get(f"/api/v1/items/{item.id}", headers=owner_headers)
        assert response.status_code == 200
        data = response.json()
        assert data["lastBooking"] == {"id": last.id, "bookerId": booker.id}
        assert data["nextBooking"] == {"id": nxt.id, "bookerId": booker.id}
        assert data["comments"] == []

    async def test_non_owner_sees_no_bookings(
        self, client: AsyncClient, item, booker, booker_headers: dict, booking_factory
    ) -> None:
        now = datetime.now()
        await booking_factory(item, booker, now + 2 * DAY, now + 3 * DAY)

        response = await client.get(f"/api/v1/items/{item.id}", headers=booker_headers)
        assert response.status_code == 200
        data = response.json()
        assert data["lastBooking"] is None
        assert data["nextBooking"] is None

    async def test_get_missing(self, client: AsyncClient, owner_headers: dict) -> None:
        response = await client.get("/api/v1/items/9999", headers=owner_headers)
        assert response.status_code == 404

    async def test_list_own_items(self, client: AsyncClient, item, owner_headers: dict, booker_headers: dict) -> None:
        response = await client.get("/api/v1/items", headers=owner_headers)
        assert response.status_code == 200
        assert [i["id"] for i in response.json()] == [item.id]

        response = await client.get("/api/v1/items", headers=booker_headers)
        assert response.json() == []

    async def test_search(self, client: AsyncClient, item, booker_headers: dict) -> None:
        response = await client.get("/api/v1/items/search", params={"text": "DRILL"}, headers=booker_headers)
        assert response.status_code == 200
        assert [i["id"] for i in response.json()] == [item.id]

    async def test_search_blank(self, client: AsyncClient, item, booker_headers: dict) -> None:
        response = await client.get("/api/v1/items/search", params={"text": ""}, headers=booker_headers)
        assert response.status_code == 200
        assert response.json() == []


# ---------------------------------------------------------------------------
# PATCH / DELETE /api/v1/items/{id}
# ---------------------------------------------------------------------------


class TestUpdateDeleteItem:
    async def test_owner_updates(self, client: AsyncClient, item, owner_headers: dict) -> None:
        response = await client.patch(
            f"/api/v1/items/{item.id}", json={"available": False}, headers=owner_headers
        )
        assert response.status_code == 200
        data = response.json()
        assert data["available"] is False
        assert data["name"] == "Drill"

    async def test_non_owner_update_forbidden(self, client: AsyncClient, item, stranger_headers: dict) -> None:
        response = await client.patch(
            f"/api/v1/items/{item.id}", json={"name": "Stolen"}, headers=stranger_headers
        )
        assert response.status_code == 403
        assert response.json()["error"] == "UNAUTHORIZED"

    async def test_owner_deletes(self, client: AsyncClient, item, owner_headers: dict) -> None:
        item_id = item.id
        response = await client.delete(f"/api/v1/items/{item_id}", headers=owner_headers)
        assert response.status_code == 200

        response = await client.get(f"/api/v1/items/{item_id}", headers=owner_headers)
        assert response.status_code == 404

    async def test_non_owner_delete_forbidden(self, client: AsyncClient, item, stranger_headers: dict) -> None:
        response = await client.delete(f"/api/v1/items/{item.id}", headers=stranger_headers)
        assert response.status_code == 403


# ---------------------------------------------------------------------------
# POST /api/v1/items/{id}/comment
# ---------------------------------------------------------------------------


class TestComments:
    async def test_comment_after_rental(
        self, client: AsyncClient, item, booker, booker_headers: dict, booking_factory
    ) -> None:
        now = datetime.now()
        await booking_factory(item, booker, now - 3 * DAY, now - 2 * DAY)

        response = await client.post(
            f"/api/v1/items/{item.id}/comment", json={"text": "Worked great"}, headers=booker_headers
        )
        assert response.status_code == 200
        data = response.json()
        assert data["text"] == "Worked great"
        assert data["authorName"] == "Booker"
        assert "created" in data

        response = await client.get(f"/api/v1/items/{item.id}", headers=booker_headers)
        assert [c["text"] for c in response.json()["comments"]] == ["Worked great"]

    async def test_comment_without_rental(
        self, client: AsyncClient, item, booker, booker_headers: dict, booking_factory
    ) -> None:
        now = datetime.now()
        await booking_factory(item, booker, now + 2 * DAY, now + 3 * DAY)
        await booking_factory(item, booker, now - 3 * DAY, now - 2 * DAY, BookingStatus.REJECTED)

        response = await client.post(
            f"/api/v1/items/{item.id}/comment", json={"text": "Hmm"}, headers=booker_headers
        )
        assert response.status_code == 400
        assert response.json()["error"] == "UNAVAILABLE"

    async def test_owner_cannot_comment(self, client: AsyncClient, item, owner_headers: dict) -> None:
        response = await client.post(
            f"/api/v1/items/{item.id}/comment", json={"text": "Mine"}, headers=owner_headers
        )
        assert response.status_code == 403
