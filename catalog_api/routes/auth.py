"""Authentication routes."""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from catalog_api.auth import get_current_user
from catalog_api.database import get_db
from catalog_api.schemas.auth import CurrentUser, LoginRequest, LoginResponse
from catalog_api.schemas.common import MessageResponse
from catalog_api.schemas.user import UserRegister, UserResponse
from catalog_api.services.auth import AuthService

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/login", response_model=LoginResponse)
def login(credentials: LoginRequest, db: Session = Depends(get_db)):
    """Exchange username and password for a bearer token."""
    return AuthService(db).login(credentials.username, credentials.password)


@router.post(
    "/register",
    response_model=MessageResponse[UserResponse],
    status_code=status.HTTP_201_CREATED,
)
def register(user_data: UserRegister, db: Session = Depends(get_db)):
    """Create a new account with the default role."""
    user = AuthService(db).register(user_data)
    return {"message": "User registered successfully", "data": user}


@router.get("/me", response_model=CurrentUser)
def read_current_user(current_user: CurrentUser = Depends(get_current_user)):
    """Return the identity carried by the bearer token."""
    return current_user
