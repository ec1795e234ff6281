"""Bootstrap of the initial administrator account."""

import logging

from config import Settings
from errors import DuplicateKeyError
from repos.storage import Storage

logger = logging.getLogger(__name__)


async def ensure_admin_user(storage: Storage, settings: Settings):
    """
    Create the configured administrator unless that username already exists.

    Args:
        storage: Active storage
        settings: Application settings with the ADMIN_* values

    Returns:
        The existing or newly created admin user
    """
    existing = await storage.users.get_by_field("username", settings.ADMIN_USERNAME)
    if existing is not None:
        return existing

    try:
        admin = await storage.users.create(
            {
                "name": settings.ADMIN_NAME,
                "email": settings.ADMIN_EMAIL,
                "username": settings.ADMIN_USERNAME,
                "password": settings.ADMIN_PASSWORD,
                "role": "admin",
                "position": "Administrator",
            }
        )
    except DuplicateKeyError as e:
        # Email taken by a different account; leave the existing data alone
        logger.warning("Admin user not seeded: %s", e)
        return None

    logger.info("Seeded admin user '%s'", admin.username)
    return admin
