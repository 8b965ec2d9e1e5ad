"""Item request API routes."""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from shareit.api.deps import get_current_user_id, get_db
from shareit.config import settings
from shareit.schemas.item_request import ItemRequestCreate, ItemRequestResponse
from shareit.services import item_request_service

router = APIRouter(prefix="/api/v1/requests", tags=["requests"])


@router.post(
    "",
    response_model=ItemRequestResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Request an item",
)
async def create_request(
    body: ItemRequestCreate,
    db: AsyncSession = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
) -> ItemRequestResponse:
    request = await item_request_service.create_request(db, user_id, body.description)
    return ItemRequestResponse(id=request.id, description=request.description, created=request.created)


@router.get("", response_model=list[ItemRequestResponse], summary="List the caller's requests")
async def list_own_requests(
    db: AsyncSession = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
) -> list[ItemRequestResponse]:
    details = await item_request_service.list_own_requests(db, user_id)
    return [ItemRequestResponse.from_details(d) for d in details]


@router.get("/all", response_model=list[ItemRequestResponse], summary="List other users' requests")
async def list_other_requests(
    from_: int = Query(0, alias="from", description="Zero-based offset"),
    size: int = Query(settings.default_page_size, description="Maximum number of results"),
    db: AsyncSession = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
) -> list[ItemRequestResponse]:
    details = await item_request_service.list_other_requests(db, user_id, from_, size)
    return [ItemRequestResponse.from_details(d) for d in details]


@router.get("/{request_id}", response_model=ItemRequestResponse, summary="Get a request by ID")
async def get_request(
    request_id: int,
    db: AsyncSession = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
) -> ItemRequestResponse:
    details = await item_request_service.get_request(db, user_id, request_id)
    return ItemRequestResponse.from_details(details)
