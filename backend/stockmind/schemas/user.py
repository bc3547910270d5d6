"""Schemas for user accounts."""
from pydantic import BaseModel, EmailStr, Field, field_validator, ValidationInfo
from typing import Any, Optional

from stockmind.config import settings
from stockmind.schemas.common import reject_null
from stockmind.utils.serialization import serialize_datetime


class RegisterRequest(BaseModel):
    """Request schema for /api/auth/register."""
    email: EmailStr
    password: str = Field(..., min_length=settings.password_min_length)
    firstName: Optional[str] = None
    lastName: Optional[str] = None


class LoginRequest(BaseModel):
    """Request schema for /api/auth/login."""
    email: EmailStr
    password: str = Field(..., min_length=1)


class ProfileUpdate(BaseModel):
    """Fields a user may change on their profile."""
    email: Optional[EmailStr] = None
    firstName: Optional[str] = None
    lastName: Optional[str] = None
    profileImageUrl: Optional[str] = None

    @field_validator("email")
    @classmethod
    def not_null(cls, value: Any, info: ValidationInfo) -> Any:
        return reject_null(value, info)


class UserResponse(BaseModel):
    """Public view of a user (never includes the password hash)."""
    id: str
    email: str
    firstName: Optional[str] = None
    lastName: Optional[str] = None
    profileImageUrl: Optional[str] = None
    createdAt: Optional[str] = None

    @classmethod
    def from_orm(cls, obj) -> "UserResponse":
        """Convert SQLAlchemy model to response model."""
        return cls(
            id=obj.id,
            email=obj.email,
            firstName=obj.first_name,
            lastName=obj.last_name,
            profileImageUrl=obj.profile_image_url,
            createdAt=serialize_datetime(obj.created_at),
        )
