"""Authentication schemas."""
from pydantic import BaseModel, Field

from catalog_api.models.user import UserRole


class LoginRequest(BaseModel):
    """Credentials posted to /auth/login."""
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class SessionUser(BaseModel):
    """Public-safe summary of the logged in user."""
    username: str
    role: UserRole
    user_id: int


class LoginResponse(BaseModel):
    """JWT token plus the user it was issued to."""
    access_token: str
    token_type: str = "bearer"
    user: SessionUser


class CurrentUser(BaseModel):
    """Identity decoded from a bearer token."""
    user_id: int
    username: str
    role: UserRole
