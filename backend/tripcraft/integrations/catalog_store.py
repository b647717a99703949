"""Filtered reads over the destination, hotel and restaurant collections."""

from __future__ import annotations

import logging
from typing import List, Optional

from pymongo.database import Database

from tripcraft.integrations.mongo_client import DESTINATIONS, HOTELS, RESTAURANTS
from tripcraft.models.entities import Activity, Hotel, Restaurant

logger = logging.getLogger(__name__)


class CatalogStore:
    def __init__(self, db: Database):
        self._destinations = db[DESTINATIONS]
        self._hotels = db[HOTELS]
        self._restaurants = db[RESTAURANTS]

    def available_categories(self, city: str) -> List[str]:
        return sorted(self._destinations.distinct("categories", {"locationCity": city}))

    def activities_matching(self, city: str, interests: List[str], limit: int) -> List[Activity]:
        """Activities in `city` tagged with any interest, by category or by type."""
        if not interests:
            return []
        query = {
            "locationCity": city,
            "$or": [
                {"categories": {"$in": interests}},
                {"type": {"$in": interests}},
            ],
        }
        docs = self._destinations.find(query).limit(limit)
        return [Activity.from_document(d) for d in docs]

    def activities_in_city(self, city: str, limit: int) -> List[Activity]:
        docs = self._destinations.find({"locationCity": city, "type": {"$ne": "restaurant"}}).limit(limit)
        return [Activity.from_document(d) for d in docs]

    def hotels_in_city(self, city: str, price_tiers: Optional[List[str]] = None, limit: int = 0) -> List[Hotel]:
        query: dict = {"locationCity": city}
        if price_tiers is not None:
            query["priceRange"] = {"$in": price_tiers}
        cursor = self._hotels.find(query)
        if limit:
            cursor = cursor.limit(limit)
        return [Hotel.from_document(d) for d in cursor]

    def restaurants_matching(
        self,
        city: str,
        cuisines: Optional[List[str]] = None,
        categories: Optional[List[str]] = None,
        limit: int = 0,
    ) -> List[Restaurant]:
        query: dict = {"locationCity": city}
        if cuisines:
            query["cuisine"] = {"$in": cuisines}
        if categories:
            query["categories"] = {"$in": categories}
        logger.info(f"Restaurant query: {query}")
        cursor = self._restaurants.find(query)
        if limit:
            cursor = cursor.limit(limit)
        return [Restaurant.from_document(d) for d in cursor]
