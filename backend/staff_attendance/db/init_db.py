"""
Database initialization and bootstrapping.
Creates tables when configured to and seeds the administrator account.
"""

from staff_attendance import models  # noqa: F401  registers every table on Base.metadata
from staff_attendance.core.config import settings
from staff_attendance.core.logging import get_logger
from staff_attendance.core.security import hash_password
from staff_attendance.db import session as db_session
from staff_attendance.db.base import Base
from staff_attendance.db.repositories.user_repository import UserRepository
from staff_attendance.models.user import UserRole

logger = get_logger(__name__)


async def create_tables() -> None:
    """Create all tables that do not exist yet."""
    async with db_session.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    logger.info("Database tables initialized", extra={"tables": sorted(Base.metadata.tables)})


async def seed_initial_data() -> None:
    """Create the administrator account on first start."""
    async with db_session.async_session_maker() as session:
        users = UserRepository(session)
        if await users.get_by_username(settings.ADMIN_USERNAME):
            logger.info("Admin account present, seeding skipped")
            return

        await users.create(
            username=settings.ADMIN_USERNAME,
            password_hash=hash_password(settings.ADMIN_PASSWORD),
            role=UserRole.ADMIN,
            staff_id=None,
        )
        await session.commit()
        logger.info("Admin account created", extra={"username": settings.ADMIN_USERNAME})
