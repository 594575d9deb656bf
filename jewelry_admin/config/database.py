"""
Database configuration and connection management.
Handles MongoDB connection lifecycle and database operations.
"""
import logging
from typing import Optional
from contextlib import asynccontextmanager
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from fastapi import FastAPI, HTTPException

from .settings import get_settings

logger = logging.getLogger(__name__)
settings = get_settings()

UNIQUE = {"unique": True}
NEWEST_FIRST = [("createdAt", -1)]

# collection -> [(keys, create_index options)], matching the storefront schemas
INDEXES = {
    "products": [("sku", UNIQUE), ("category", {}), ("isActive", {}), ("stock", {}), (NEWEST_FIRST, {})],
    "orders": [
        ("orderId", UNIQUE),
        ("user", {}),
        ("status", {}),
        ("shippingAddress.email", {}),
        (NEWEST_FIRST, {}),
    ],
    "coupons": [("code", UNIQUE), ("isActive", {}), ("startDate", {}), ("expiryDate", {})],
    "shippings": [("zipCode", UNIQUE), ("state", {})],
    "reviews": [("status", {}), ([("user", 1), ("product", 1), ("orderId", 1)], UNIQUE)],
    "policies": [("key", UNIQUE)],
    "admins": [("email", UNIQUE)],
    "users": [(NEWEST_FIRST, {})],
}


class DatabaseManager:
    """Manages MongoDB database connection and operations."""

    def __init__(self):
        self.client: Optional[AsyncIOMotorClient] = None
        self.database: Optional[AsyncIOMotorDatabase] = None

    async def connect(self) -> None:
        """Establish connection to MongoDB."""
        try:
            logger.info("🚀 Connecting to MongoDB...")

            self.client = AsyncIOMotorClient(
                settings.mongodb_url,
                serverSelectionTimeoutMS=settings.server_selection_timeout_ms,
                connectTimeoutMS=settings.connect_timeout_ms,
                socketTimeoutMS=settings.socket_timeout_ms,
                maxPoolSize=settings.max_pool_size,
                minPoolSize=settings.min_pool_size,
                retryWrites=settings.retry_writes,
                tz_aware=True,
            )

            await self.client.admin.command('ping')
            self.database = self.client[settings.database_name]
            logger.info("✅ Connected to MongoDB successfully")

        except Exception as db_error:
            # The app still starts; DB-backed routes answer 503 until a restart
            logger.warning(f"⚠️  MongoDB connection failed: {db_error}")

    async def disconnect(self) -> None:
        """Close MongoDB connection."""
        try:
            if self.client is not None:
                self.client.close()
                logger.info("🔌 MongoDB connection closed")
        except Exception as e:
            logger.error(f"Error during database disconnect: {e}")

    async def create_indexes(self) -> None:
        """Create the indexes the storefront models declare."""
        if self.database is None:
            logger.warning("Database not connected, skipping index creation")
            return

        try:
            for collection, indexes in INDEXES.items():
                for keys, options in indexes:
                    await self.database[collection].create_index(keys, **options)

            logger.info("✅ Database indexes created successfully")

        except Exception as index_error:
            logger.warning(f"⚠️  Failed to create indexes: {index_error}")

    def get_database(self) -> AsyncIOMotorDatabase:
        """Get database instance."""
        if self.database is None:
            raise RuntimeError("Database not connected. Call connect() first.")
        return self.database

    def is_connected(self) -> bool:
        """Check if database is connected."""
        return self.database is not None


# Global database manager instance
db_manager = DatabaseManager()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """FastAPI lifespan context manager for database connection."""
    # Startup
    try:
        logger.info(f"💎 Starting {settings.app_name}...")
        await db_manager.connect()
        await db_manager.create_indexes()

        app.state.db_manager = db_manager

    except Exception as e:
        logger.error(f"❌ Failed to initialize application: {e}")

    yield

    # Shutdown
    await db_manager.disconnect()


async def get_database() -> AsyncIOMotorDatabase:
    """FastAPI dependency to get database instance."""
    if not db_manager.is_connected():
        raise HTTPException(
            status_code=503,
            detail="Database unavailable, please try again later"
        )
    return db_manager.get_database()


def get_database_manager() -> DatabaseManager:
    """Get database manager instance."""
    return db_manager
