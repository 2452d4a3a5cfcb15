"""User schemas for request/response validation."""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, EmailStr, Field

from catalog_api.models.user import UserRole


class UserBase(BaseModel):
    """Base user schema."""
    username: str = Field(..., min_length=1, max_length=50)
    email: EmailStr


class UserRegister(UserBase):
    """Schema for self-registration; the role is always the default."""
    password: str = Field(..., min_length=6)


class UserCreate(UserRegister):
    """Schema for creating a user (admin)."""
    role: Optional[UserRole] = None


class UserUpdate(BaseModel):
    """Schema for updating a user. Unset fields are left untouched."""
    username: Optional[str] = Field(None, min_length=1, max_length=50)
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(None, min_length=6)
    role: Optional[UserRole] = None
    is_active: Optional[bool] = None


class UserResponse(UserBase):
    """Schema for user response, never carries the password hash."""
    id: int
    role: UserRole
    is_active: bool
    created_at: datetime

    class Config:
        from_attributes = True
