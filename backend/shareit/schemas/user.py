"""Pydantic v2 request/response schemas for user endpoints."""

from pydantic import ConfigDict, EmailStr, Field, field_validator
from pydantic.networks import validate_email

from shareit.schemas.common import CamelModel

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class UserCreate(CamelModel):
    """Schema for registering a user."""

    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr


class UserUpdate(CamelModel):
    """Schema for partially updating a user. All fields optional."""

    name: str | None = Field(None, max_length=255)
    email: str | None = None

    @field_validator("email")
    @classmethod
    def _blank_email_is_unset(cls, value: str | None) -> str | None:
        if value is None or not value.strip():
            return None
        return validate_email(value)[1]


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class UserResponse(CamelModel):
    """Public user profile."""

    id: int
    name: str
    email: str

    model_config = ConfigDict(from_attributes=True)
