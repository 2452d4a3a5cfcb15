"""Script to create the initial admin user."""
import argparse
import getpass
import logging

from catalog_api.database import SessionLocal, init_db
from catalog_api.errors import ConflictError
from catalog_api.logging_config import configure_logging
from catalog_api.models.user import User, UserRole
from catalog_api.schemas.user import UserCreate
from catalog_api.services.users import UserService

logger = logging.getLogger("create_admin")


def create_admin(username: str, email: str, password: str) -> None:
    """Create an admin user unless one already exists."""
    init_db()

    db = SessionLocal()
    try:
        admin = db.query(User).filter(User.role == UserRole.ADMIN).first()
        if admin:
            logger.info(f"Admin user already exists: {admin.username}")
            return

        try:
            user = UserService(db).create(
                UserCreate(username=username, email=email, password=password, role=UserRole.ADMIN)
            )
        except ConflictError as e:
            logger.error(f"Could not create admin: {e.message}")
            raise SystemExit(1)
        logger.info(f"Admin user {user.username!r} created (id={user.id})")
    finally:
        db.close()


def main():
    parser = argparse.ArgumentParser(description="Create the initial catalog admin user")
    parser.add_argument("--username", default="admin")
    parser.add_argument("--email", default="admin@example.com")
    parser.add_argument("--password", help="prompted for when omitted")
    args = parser.parse_args()

    configure_logging()
    password = args.password or getpass.getpass("Admin password: ")
    create_admin(args.username, args.email, password)


if __name__ == "__main__":
    main()
