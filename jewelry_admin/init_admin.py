"""
Create the super-admin account if it does not exist yet.

    python -m jewelry_admin.init_admin

Email and password come from ADMIN_EMAIL / ADMIN_PASSWORD.
"""
import asyncio
import logging
from typing import Any, Dict, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase

from .config.database import get_database_manager
from .config.settings import get_settings
from .models.admin import AdminDocument, AdminPermissions, CrudPermissions, hash_password
from .utils.serializers import utcnow

logger = logging.getLogger(__name__)
settings = get_settings()

SUPER_ADMIN_PERMISSIONS = AdminPermissions(
    products=CrudPermissions(create=True, read=True, update=True, delete=True),
    orders=CrudPermissions(create=False, read=True, update=True, delete=False),
    customers=CrudPermissions(create=True, read=True, update=True, delete=True),
)


async def ensure_super_admin(db: AsyncIOMotorDatabase, email: str, password: str) -> Optional[Dict[str, Any]]:
    """
    Insert the super-admin unless an admin with ``email`` already exists.

    Returns:
        The inserted document, or None when the account was already there
    """
    admin = AdminDocument(
        name="Super Admin",
        email=email,
        password=password,
        role="super-admin",
        is_active=True,
        permissions=SUPER_ADMIN_PERMISSIONS,
    )

    if await db.admins.find_one({"email": admin.email}, {"_id": 1}):
        logger.info(f"Admin already exists: {admin.email}")
        return None

    now = utcnow()
    admin_doc = admin.to_mongo()
    admin_doc.update({
        "password": hash_password(password),
        "createdAt": now,
        "updatedAt": now,
    })
    await db.admins.insert_one(admin_doc)

    logger.info(f"✅ Super Admin created: {admin.email}")
    return admin_doc


async def main() -> None:
    db_manager = get_database_manager()
    await db_manager.connect()
    try:
        if not db_manager.is_connected():
            logger.error("❌ Cannot create admin without a database connection")
            return
        await ensure_super_admin(db_manager.get_database(), settings.admin_email, settings.admin_password)
    finally:
        await db_manager.disconnect()


if __name__ == "__main__":
    logging.basicConfig(level=settings.log_level.upper())
    asyncio.run(main())
