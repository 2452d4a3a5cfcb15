"""Auth service - credential checks, token issuance and registration."""
import logging

from sqlalchemy.orm import Session

from catalog_api.auth import create_access_token, verify_password
from catalog_api.errors import UnauthorizedError
from catalog_api.schemas.auth import LoginResponse, SessionUser
from catalog_api.schemas.user import UserRegister, UserResponse
from catalog_api.services.users import UserService

logger = logging.getLogger(__name__)


class AuthService:
    """Orchestrates login and registration on top of UserService."""

    def __init__(self, db: Session):
        self.users = UserService(db)

    def validate_credentials(self, username: str, password: str) -> UserResponse:
        """Return the user without its password hash, or raise UnauthorizedError.

        Unknown user, inactive account and wrong password all produce the
        same message.
        """
        user = self.users.find_by_username(username)
        if not user:
            logger.warning(f"Login failed: unknown user {username!r}")
            raise UnauthorizedError("Invalid credentials")
        if not user.is_active:
            logger.warning(f"Login failed: user {username!r} is deactivated")
            raise UnauthorizedError("Invalid credentials")
        if not verify_password(password, user.hashed_password):
            logger.warning(f"Login failed: bad password for {username!r}")
            raise UnauthorizedError("Invalid credentials")
        return UserResponse.model_validate(user)

    def issue_session(self, user) -> LoginResponse:
        """Sign a token for an already validated user."""
        username = getattr(user, "username", None)
        user_id = getattr(user, "id", None)
        if user_id is None:
            user_id = getattr(user, "user_id", None)
        if not username or user_id is None:
            raise UnauthorizedError("Invalid user")

        token = create_access_token(user_id=user_id, username=username, role=user.role)
        logger.info(f"Issued access token for {username!r}")
        return LoginResponse(
            access_token=token,
            user=SessionUser(username=username, role=user.role, user_id=user_id),
        )

    def login(self, username: str, password: str) -> LoginResponse:
        return self.issue_session(self.validate_credentials(username, password))

    def register(self, user_data: UserRegister) -> UserResponse:
        # Self-registration never picks its own role
        registration = UserRegister(**user_data.model_dump(include={"username", "email", "password"}))
        user = self.users.create(registration)
        return UserResponse.model_validate(user)
