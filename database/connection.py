from motor.motor_asyncio import AsyncIOMotorClient
from pymongo.errors import PyMongoError
from fastapi import Request
from typing import Optional
import logging
import os

from database.store import DocumentStore

logger = logging.getLogger(__name__)


def create_store(url: Optional[str] = None, db_name: Optional[str] = None) -> DocumentStore:
    # motor connects lazily; only URI parsing and SRV lookup can fail here.
    try:
        client = AsyncIOMotorClient(
            url or os.getenv("MONGODB_URL", "mongodb://localhost:27017"),
            serverSelectionTimeoutMS=int(os.getenv("MONGODB_TIMEOUT_MS", "5000")),
        )
    except PyMongoError as exc:
        logger.error("MongoDB connection error: %s", exc)
        return DocumentStore(None)
    return DocumentStore(client[db_name or os.getenv("MONGODB_DB", "rideHailingApp")], client=client)


def get_store(request: Request) -> DocumentStore:
    """Dependency returning the store attached to the app in create_app()."""
    return request.app.store
