# vegshop/db.py
import logging

from fastapi import Request
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from vegshop.core.config import Settings

logger = logging.getLogger(__name__)

VEGETABLES = "vegetables"
DAILY_STOCK = "daily_stock"
USERS = "users"


def connect(settings: Settings) -> AsyncIOMotorClient:
    """Build the process-wide client. Motor connects lazily on first operation."""
    logger.info(f"Creating MongoDB client for database '{settings.db_name}'")
    return AsyncIOMotorClient(settings.mongo_uri)


async def get_db(request: Request) -> AsyncIOMotorDatabase:
    """Dependency that hands the shared database handle to a request."""
    return request.app.state.db
