"""
Create the platform administrator account.

Reads ADMIN_EMAIL and ADMIN_PASSWORD from the environment. Running it again
once the account exists does nothing.
"""

import sys
from typing import Optional, Tuple

from sqlalchemy.orm import Session

from hostelhub.config.settings import settings
from hostelhub.core.logging import get_logger, setup_logging
from hostelhub.core.security import hash_password
from hostelhub.db.init_db import init_db
from hostelhub.db.session import SessionLocal
from hostelhub.models.base.enums import UserRole
from hostelhub.models.user.user import User
from hostelhub.repositories.user.user_repository import UserRepository

logger = get_logger(__name__)


def seed_admin(db: Session, email: str, password: str) -> Tuple[User, bool]:
    """
    Return the admin user for ``email`` and whether it was created now.
    """
    users = UserRepository(db)
    existing = users.find_by_email(email.lower())
    if existing is not None:
        logger.info("Admin already exists", extra={"email": existing.email})
        return existing, False

    admin = users.create(
        User(email=email.lower(), password_hash=hash_password(password), role=UserRole.ADMIN)
    )
    db.commit()
    logger.info("Admin created", extra={"email": admin.email})
    return admin, True


def main(argv: Optional[list] = None) -> int:
    setup_logging()
    if not settings.ADMIN_EMAIL or not settings.ADMIN_PASSWORD:
        logger.error("ADMIN_EMAIL and ADMIN_PASSWORD must be set")
        return 1

    if not settings.is_production():
        init_db()

    db = SessionLocal()
    try:
        seed_admin(db, settings.ADMIN_EMAIL, settings.ADMIN_PASSWORD)
    finally:
        db.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
