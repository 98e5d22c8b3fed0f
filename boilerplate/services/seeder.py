"""Seed the database with demonstration accounts.

Destroys and recreates the database. Never run this against production data.
"""

import logging
import sys

from boilerplate.core.config import settings
from boilerplate.db.base import SessionLocal
from boilerplate.domain.role import Role
from boilerplate.services.user import UserService

logger = logging.getLogger(__name__)

DEMO_USERS = [
    ("Administrator", "admin@mail.com", "admin", Role.admin),
    ("Manager", "manager@mail.com", "manager", Role.manager),
    ("Guest", "guest@mail.com", "guest", Role.guest),
]


def seed(service: UserService) -> None:
    service.initialise()
    for name, email, password, role in DEMO_USERS:
        service.add_user(name, email, password, role)
    logger.info("Seeded %d demonstration users", len(DEMO_USERS))


def main() -> int:
    logging.basicConfig(level=settings.log_level.upper())
    if settings.is_production:
        logger.error("Refusing to seed: ENVIRONMENT is production")
        return 1

    db = SessionLocal()
    try:
        seed(UserService(db))
    finally:
        db.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
