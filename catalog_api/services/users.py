"""User service - account CRUD over the users table."""
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from catalog_api.auth import get_password_hash
from catalog_api.errors import ConflictError, NotFoundError
from catalog_api.models.user import User, UserRole
from catalog_api.schemas.user import UserRegister, UserUpdate

logger = logging.getLogger(__name__)

USER_DEFAULTS: Dict[str, Any] = {
    "role": UserRole.USER,
    "created_at": lambda: datetime.now(timezone.utc),
}


def apply_defaults(values: Mapping[str, Any], defaults: Mapping[str, Any]) -> Dict[str, Any]:
    """Merge defaults under values.

    Keys missing from ``values`` (or set to None) take the default; callable
    defaults are called at merge time so timestamps are fresh.
    """
    merged = dict(values)
    for key, default in defaults.items():
        if merged.get(key) is None:
            merged[key] = default() if callable(default) else default
    return merged


class UserService:
    """Create, read, update and delete user accounts."""

    def __init__(self, db: Session):
        self.db = db

    def create(self, user_data: UserRegister) -> User:
        values = apply_defaults(user_data.model_dump(), USER_DEFAULTS)
        password = values.pop("password")
        user = User(**values, hashed_password=get_password_hash(password))
        self.db.add(user)
        self._commit("Username or email already exists")
        self.db.refresh(user)
        logger.info(f"Created user {user.username!r} (id={user.id}, role={user.role.value})")
        return user

    def find_by_username(self, username: str) -> Optional[User]:
        return self.db.query(User).filter(User.username == username).first()

    def find_by_id(self, user_id: int) -> User:
        user = self.db.query(User).filter(User.id == user_id).first()
        if not user:
            raise NotFoundError("User not found")
        return user

    def list(self) -> List[User]:
        return self.db.query(User).order_by(User.id).all()

    def search_by_username(self, term: str) -> List[User]:
        """Case-insensitive substring search on username.

        LIKE wildcards in the term match literally.
        """
        query = self.db.query(User)
        if term:
            pattern = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
            query = query.filter(User.username.ilike(f"%{pattern}%", escape="\\"))
        return query.order_by(User.id).all()

    def update(self, user_id: int, user_update: UserUpdate) -> User:
        user = self.find_by_id(user_id)

        # None means "leave as is": every user column is required
        update_data = user_update.model_dump(exclude_unset=True, exclude_none=True)
        password = update_data.pop("password", None)
        if password is not None:
            update_data["hashed_password"] = get_password_hash(password)

        for field, value in update_data.items():
            setattr(user, field, value)

        self._commit("Username or email already exists")
        self.db.refresh(user)
        logger.info(f"Updated user id={user.id} fields={sorted(update_data)}")
        return user

    def remove(self, user_id: int) -> None:
        user = self.find_by_id(user_id)
        self.db.delete(user)
        self.db.commit()
        logger.info(f"Deleted user id={user_id}")

    def activate(self, user_id: int) -> User:
        return self._set_active(user_id, True)

    def deactivate(self, user_id: int) -> User:
        return self._set_active(user_id, False)

    def _set_active(self, user_id: int, active: bool) -> User:
        user = self.find_by_id(user_id)
        user.is_active = active
        self.db.commit()
        self.db.refresh(user)
        logger.info(f"User id={user_id} {'activated' if active else 'deactivated'}")
        return user

    def _commit(self, conflict_message: str) -> None:
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            logger.warning(f"Unique constraint rejected user write: {conflict_message}")
            raise ConflictError(conflict_message)
