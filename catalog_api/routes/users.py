"""User management routes."""
from typing import List

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from catalog_api.auth import authorize, get_current_user, require_admin
from catalog_api.database import get_db
from catalog_api.errors import ForbiddenError, NotFoundError
from catalog_api.models.user import UserRole
from catalog_api.schemas.auth import CurrentUser
from catalog_api.schemas.common import MessageResponse
from catalog_api.schemas.user import UserCreate, UserResponse, UserUpdate
from catalog_api.services.users import UserService

router = APIRouter(prefix="/users", tags=["Users"])

ADMIN_ONLY_FIELDS = {"role", "is_active"}


@router.post(
    "/",
    response_model=MessageResponse[UserResponse],
    status_code=status.HTTP_201_CREATED,
)
def create_user(
    user_data: UserCreate,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(require_admin)
):
    """Create a new user (admin only)."""
    user = UserService(db).create(user_data)
    return {"message": "User created successfully", "data": UserResponse.model_validate(user)}


@router.get("/", response_model=MessageResponse[List[UserResponse]])
def list_users(
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(require_admin)
):
    """List all users (admin only)."""
    users = UserService(db).list()
    return {
        "message": "Users retrieved successfully",
        "data": [UserResponse.model_validate(u) for u in users],
    }


@router.get("/search", response_model=MessageResponse[List[UserResponse]])
def search_users(
    username: str = Query(..., min_length=1, description="Part of the username"),
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    """Search users by username."""
    users = UserService(db).search_by_username(username)
    if not users:
        raise NotFoundError("No users found with the given username")
    return {
        "message": "Users found successfully",
        "data": [UserResponse.model_validate(u) for u in users],
    }


@router.get("/{user_id}", response_model=MessageResponse[UserResponse])
def get_user(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    """Get a specific user."""
    user = UserService(db).find_by_id(user_id)
    return {"message": "User retrieved successfully", "data": UserResponse.model_validate(user)}


def _check_can_edit(current_user: CurrentUser, user_id: int, user_update: UserUpdate) -> None:
    """Admins edit anyone; others only themselves and never their role or status."""
    if authorize(current_user.role, {UserRole.ADMIN}):
        return
    if current_user.user_id != user_id:
        raise ForbiddenError("Forbidden resource")
    if ADMIN_ONLY_FIELDS & user_update.model_fields_set:
        raise ForbiddenError("Only administrators can change role or status")


@router.patch("/{user_id}", response_model=MessageResponse[UserResponse])
def update_user(
    user_id: int,
    user_update: UserUpdate,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    """Update fields of a user (admin, or the user themselves)."""
    _check_can_edit(current_user, user_id, user_update)
    user = UserService(db).update(user_id, user_update)
    return {"message": "User updated successfully", "data": UserResponse.model_validate(user)}


@router.put("/{user_id}", response_model=MessageResponse[UserResponse])
def replace_user(
    user_id: int,
    user_update: UserUpdate,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    """Replace a user; behaves like PATCH, unset fields are kept."""
    _check_can_edit(current_user, user_id, user_update)
    user = UserService(db).update(user_id, user_update)
    return {"message": "User replaced successfully", "data": UserResponse.model_validate(user)}


@router.delete("/{user_id}", response_model=MessageResponse)
def delete_user(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(require_admin)
):
    """Permanently delete a user (admin only)."""
    UserService(db).remove(user_id)
    return {"message": "User deleted successfully"}


@router.patch("/{user_id}/activate", response_model=MessageResponse[UserResponse])
def activate_user(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(require_admin)
):
    """Re-enable login for a user (admin only)."""
    user = UserService(db).activate(user_id)
    return {"message": "User activated successfully", "data": UserResponse.model_validate(user)}


@router.patch("/{user_id}/deactivate", response_model=MessageResponse[UserResponse])
def deactivate_user(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(require_admin)
):
    """Disable login for a user (admin only)."""
    user = UserService(db).deactivate(user_id)
    return {"message": "User deactivated successfully", "data": UserResponse.model_validate(user)}
