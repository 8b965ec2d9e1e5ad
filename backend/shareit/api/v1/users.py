"""Users CRUD API routes."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from shareit.api.deps import get_db
from shareit.schemas.common import MessageResponse
from shareit.schemas.user import UserCreate, UserResponse, UserUpdate
from shareit.services import user_service

router = APIRouter(prefix="/api/v1/users", tags=["users"])


@router.post(
    "",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a user",
)
async def create_user(body: UserCreate, db: AsyncSession = Depends(get_db)) -> UserResponse:
    """Register a user. Emails are unique across all users."""
    user = await user_service.create_user(db, name=body.name, email=body.email)
    return UserResponse.model_validate(user)


@router.get("", response_model=list[UserResponse], summary="List users")
async def list_users(db: AsyncSession = Depends(get_db)) -> list[UserResponse]:
    users = await user_service.list_users(db)
    return [UserResponse.model_validate(u) for u in users]


@router.get("/{user_id}", response_model=UserResponse, summary="Get a user by ID")
async def get_user(user_id: int, db: AsyncSession = Depends(get_db)) -> UserResponse:
    user = await user_service.get_user(db, user_id)
    return UserResponse.model_validate(user)


@router.patch("/{user_id}", response_model=UserResponse, summary="Update a user")
async def update_user(user_id: int, body: UserUpdate, db: AsyncSession = Depends(get_db)) -> UserResponse:
    """Partially update a user. Only non-blank fields are changed."""
    user = await user_service.update_user(db, user_id, name=body.name, email=body.email)
    return UserResponse.model_validate(user)


@router.delete("/{user_id}", response_model=MessageResponse, summary="Delete a user")
async def delete_user(user_id: int, db: AsyncSession = Depends(get_db)) -> MessageResponse:
    """Delete a user and everything they own, booked, requested, or wrote."""
    await user_service.delete_user(db, user_id)
    return MessageResponse(message="User deleted")
