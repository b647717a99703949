"""MongoDB client and collection helpers.

One process-wide MongoClient, created lazily from MONGODB_URI. The catalog
collections are read-only for this service; `itineraries` is read/write.
"""

from __future__ import annotations

import logging
from typing import Optional

from pymongo import ASCENDING, MongoClient
from pymongo.database import Database

from tripcraft import config
from tripcraft.integrations.exceptions import IntegrationError

logger = logging.getLogger(__name__)

DESTINATIONS = "destinations"
HOTELS = "hotels"
RESTAURANTS = "restaurants"
ITINERARIES = "itineraries"

_client: Optional[MongoClient] = None


def get_mongo_client() -> MongoClient:
    global _client
    if _client is not None:
        return _client
    if not config.MONGODB_URI:
        raise IntegrationError("MONGODB_URI not set")
    _client = MongoClient(config.MONGODB_URI, serverSelectionTimeoutMS=config.MONGODB_TIMEOUT_MS)
    return _client


def get_database() -> Database:
    return get_mongo_client()[config.MONGODB_DB]


def ensure_indexes(db: Database) -> None:
    """Indexes backing the owner listing and the expiry sweep filter."""
    itineraries = db[ITINERARIES]
    itineraries.create_index([("user", ASCENDING)])
    itineraries.create_index([("isTemporary", ASCENDING), ("expiresAt", ASCENDING)])


def close_mongo_client() -> None:
    global _client
    if _client is not None:
        _client.close()
        logger.info("MongoDB client closed")
    _client = None
