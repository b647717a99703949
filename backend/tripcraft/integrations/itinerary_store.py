"""
Persistence and lifecycle of generated itineraries.

Anonymous generations are stored as temporary records that expire after
TEMPORARY_ITINERARY_TTL_HOURS; the expiry sweep deletes them. Saving a
temporary itinerary copies it into a new permanent record owned by the
caller and leaves the original for the sweep.

Datetimes are naive UTC, matching what pymongo hands back by default.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import List, Optional

from bson import ObjectId
from bson.errors import InvalidId
from pymongo import DESCENDING, ReturnDocument
from pymongo.collection import Collection

from tripcraft import config
from tripcraft.integrations.exceptions import (
    AuthenticationRequiredError,
    InvalidItineraryError,
    ItineraryNotFoundError,
    NotAuthorizedError,
)
from tripcraft.models.itinerary import DayPlan, Itinerary, ItineraryPlan, check_day_sequence
from tripcraft.models.trip_preferences import TravelerPrefs

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _object_id(itinerary_id: str) -> ObjectId:
    try:
        return ObjectId(itinerary_id)
    except (InvalidId, TypeError):
        raise ItineraryNotFoundError("Itinerary not found")


class ItineraryStore:
    def __init__(self, collection: Collection, ttl_hours: int = config.TEMPORARY_ITINERARY_TTL_HOURS):
        self._col = collection
        self._ttl = timedelta(hours=ttl_hours)

    # ── create ────────────────────────────────────────────────────────────

    def create(
        self,
        plan: ItineraryPlan,
        prefs: TravelerPrefs,
        user_id: Optional[str] = None,
        using_fallback: bool = False,
    ) -> Itinerary:
        now = utcnow()
        itinerary = Itinerary(
            user=user_id,
            name=f"{prefs.city} Trip - {prefs.duration} days",
            city=prefs.city,
            duration=prefs.duration,
            interests=prefs.interests,
            budget=prefs.budget,
            travelers_type=prefs.travelers_type,
            food_preferences=prefs.food_preferences,
            days=plan.days,
            hotel=plan.hotel,
            using_fallback_generator=using_fallback,
            is_temporary=user_id is None,
            expires_at=now + self._ttl if user_id is None else None,
            generated_at=now,
            created_at=now,
            last_updated=now,
        )
        return self._insert(itinerary)

    def _insert(self, itinerary: Itinerary) -> Itinerary:
        res = self._col.insert_one(itinerary.to_document())
        return itinerary.model_copy(update={"id": str(res.inserted_id)})

    # ── read ──────────────────────────────────────────────────────────────

    def get(self, itinerary_id: str) -> Itinerary:
        doc = self._col.find_one({"_id": _object_id(itinerary_id)})
        if doc is None:
            raise ItineraryNotFoundError("Itinerary not found")
        return Itinerary.from_document(doc)

    def get_for_reader(self, itinerary_id: str, user_id: Optional[str], is_admin: bool = False) -> Itinerary:
        """Owned itineraries are private to their owner (and admins); unowned ones are public by id."""
        itinerary = self.get(itinerary_id)
        if itinerary.user is None or is_admin or itinerary.is_owned_by(user_id):
            return itinerary
        if user_id is None:
            raise AuthenticationRequiredError("Sign in to view this itinerary")
        logger.warning(f"User {user_id} attempted to read itinerary {itinerary_id} owned by {itinerary.user}")
        raise NotAuthorizedError("Not authorized to access this itinerary")

    def list_for_user(self, user_id: str) -> List[Itinerary]:
        docs = self._col.find({"user": user_id}).sort("createdAt", DESCENDING)
        return [Itinerary.from_document(d) for d in docs]

    # ── mutate ────────────────────────────────────────────────────────────

    def save_copy(self, itinerary_id: str, user_id: Optional[str], name: Optional[str] = None) -> Itinerary:
        """Clone an itinerary into a new permanent record owned by `user_id`."""
        if not user_id:
            raise AuthenticationRequiredError("Sign in to save itineraries")
        source = self.get(itinerary_id)
        if source.user is not None and not source.is_owned_by(user_id):
            raise NotAuthorizedError("Not authorized to save this itinerary")
        now = utcnow()
        copy = source.model_copy(
            update={
                "id": None,
                "user": user_id,
                "name": name or source.name,
                "is_temporary": False,
                "expires_at": None,
                "created_at": now,
                "last_updated": now,
            }
        )
        saved = self._insert(copy)
        logger.info(f"Saved itinerary {itinerary_id} as {saved.id} for user {user_id}")
        return saved

    def update(
        self,
        itinerary_id: str,
        user_id: Optional[str],
        name: Optional[str] = None,
        days: Optional[List[DayPlan]] = None,
    ) -> Itinerary:
        itinerary = self.get(itinerary_id)
        if not itinerary.is_owned_by(user_id):
            raise NotAuthorizedError("Not authorized to update this itinerary")

        patch: dict = {"lastUpdated": utcnow()}
        if name:
            patch["name"] = name
        if days is not None:
            problem = check_day_sequence(days, itinerary.duration)
            if problem:
                raise InvalidItineraryError(f"Invalid days: {problem}")
            patch["days"] = [d.model_dump() for d in days]

        doc = self._col.find_one_and_update(
            {"_id": _object_id(itinerary_id)},
            {"$set": patch},
            return_document=ReturnDocument.AFTER,
        )
        if doc is None:
            raise ItineraryNotFoundError("Itinerary not found")
        return Itinerary.from_document(doc)

    def delete(self, itinerary_id: str, user_id: Optional[str], is_admin: bool = False) -> None:
        itinerary = self.get(itinerary_id)
        if not (is_admin or itinerary.is_owned_by(user_id)):
            raise NotAuthorizedError("Not authorized to delete this itinerary")
        self._col.delete_one({"_id": _object_id(itinerary_id)})

    # ── lifecycle ─────────────────────────────────────────────────────────

    def sweep_expired(self, now: Optional[datetime] = None) -> int:
        """Hard-delete temporary itineraries whose expiry has passed. Idempotent."""
        res = self._col.delete_many({"isTemporary": True, "expiresAt": {"$lt": now or utcnow()}})
        return res.deleted_count
