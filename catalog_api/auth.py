"""Password hashing, JWT tokens and role-based access dependencies."""
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Iterable, Optional

import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from passlib.context import CryptContext

from catalog_api.config import settings
from catalog_api.errors import ForbiddenError, UnauthorizedError
from catalog_api.models.user import UserRole
from catalog_api.schemas.auth import CurrentUser

logger = logging.getLogger(__name__)

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS,
)
bearer_scheme = HTTPBearer(auto_error=False)


def get_password_hash(password: str) -> str:
    """Hash a plaintext password with the configured bcrypt cost."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Check a plaintext password against a stored hash."""
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        # Malformed or unknown hash format
        return False


def create_access_token(
    user_id: int,
    username: str,
    role: UserRole,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """Sign a token carrying the subject id, username and role."""
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))
    payload: Dict[str, Any] = {
        "sub": str(user_id),
        "username": username,
        "role": UserRole(role).value,
        "iat": int(now.timestamp()),
        "exp": int(expire.timestamp()),
    }
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> CurrentUser:
    """Verify signature and expiry, and return the caller's identity."""
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise UnauthorizedError("Token has expired")
    except jwt.InvalidTokenError:
        raise UnauthorizedError("Invalid token")

    try:
        return CurrentUser(
            user_id=int(payload["sub"]),
            username=payload["username"],
            role=payload["role"],
        )
    except (KeyError, TypeError, ValueError):
        raise UnauthorizedError("Invalid token")


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> CurrentUser:
    """Resolve the bearer token on the request into a CurrentUser."""
    if credentials is None:
        raise UnauthorizedError("Not authenticated")
    return decode_access_token(credentials.credentials)


def authorize(caller_role: Optional[UserRole], required_roles: Iterable[UserRole]) -> bool:
    """Return True when the caller's role satisfies the required role set.

    An empty set places no restriction. A missing caller role is denied.
    """
    required = set(required_roles)
    if not required:
        return True
    if caller_role is None:
        return False
    return caller_role in required


def require_roles(*roles: UserRole):
    """Build a dependency that only lets the given roles through."""
    required = frozenset(roles)

    async def role_checker(current_user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
        if not authorize(current_user.role, required):
            logger.warning(
                f"User {current_user.username!r} with role {current_user.role.value} "
                f"denied, requires one of {sorted(r.value for r in required)}"
            )
            raise ForbiddenError("Forbidden resource")
        return current_user

    return role_checker


require_admin = require_roles(UserRole.ADMIN)
require_user = require_roles()
