"""
Candidate selection: the activities, hotels and restaurants a generation run
may draw from.

Each list is relaxed before it is replaced: activities fall back from
interest matches to anything in the city, hotels from the budget's price
tiers to any hotel in the city. Only then are placeholders substituted.
"""

import logging
from typing import Dict, List, Optional

from tripcraft import config
from tripcraft.graph.preferences import PreferenceMapper
from tripcraft.graph.state import CandidateSet
from tripcraft.integrations.catalog_store import CatalogStore
from tripcraft.integrations.exceptions import NoDestinationDataError
from tripcraft.models.entities import Activity, Hotel, Restaurant
from tripcraft.models.trip_preferences import TravelerPrefs
from tripcraft.models.vocabulary import CUISINES, DINING_CATEGORIES

logger = logging.getLogger(__name__)

BUDGET_PRICE_TIERS: Dict[str, List[str]] = {
    "Low": ["$", "$$"],
    "Medium": ["$$", "$$$"],
    "Luxury": ["$$$", "$$$$"],
}


def price_tiers_for(budget: Optional[str]) -> Optional[List[str]]:
    """Price-tier filter for a budget; None means no filter."""
    return BUDGET_PRICE_TIERS.get(budget or "")


def _tier(budget: str, low: str, medium: str, other: str) -> str:
    return low if budget == "Low" else medium if budget == "Medium" else other


class CandidateSelector:
    def __init__(
        self,
        catalog: CatalogStore,
        cuisine_mapper: Optional[PreferenceMapper] = None,
        category_mapper: Optional[PreferenceMapper] = None,
    ):
        self.catalog = catalog
        self.cuisine_mapper = cuisine_mapper or PreferenceMapper(CUISINES, config.CUISINE_ALIASES)
        self.category_mapper = category_mapper or PreferenceMapper(DINING_CATEGORIES, config.CATEGORY_ALIASES)

    def select(self, prefs: TravelerPrefs) -> CandidateSet:
        city = prefs.city
        logger.info(f"Available categories in {city}: {', '.join(self.catalog.available_categories(city))}")

        candidates = CandidateSet(
            activities=self.select_activities(prefs) or self.placeholder_activities(prefs),
            hotels=self.select_hotels(prefs) or self.placeholder_hotels(prefs),
            restaurants=self.select_restaurants(prefs) or self.placeholder_restaurants(prefs),
        )
        logger.info(
            f"Itinerary data for {city}: {len(candidates.activities)} activities, "
            f"{len(candidates.hotels)} hotels, {len(candidates.restaurants)} restaurants"
        )
        if candidates.is_empty():
            raise NoDestinationDataError("No data available for the selected destination")
        return candidates

    # ── catalog reads ─────────────────────────────────────────────────────

    def select_activities(self, prefs: TravelerPrefs) -> List[Activity]:
        activities = self.catalog.activities_matching(prefs.city, prefs.interests, config.ACTIVITY_LIMIT)
        if not activities:
            logger.info(f"No activities match {prefs.interests} in {prefs.city}; using any activity in the city")
            activities = self.catalog.activities_in_city(prefs.city, config.ACTIVITY_LIMIT)
        return activities

    def select_hotels(self, prefs: TravelerPrefs) -> List[Hotel]:
        all_hotels = self.catalog.hotels_in_city(prefs.city)
        hotels = self.catalog.hotels_in_city(prefs.city, price_tiers_for(prefs.budget), config.HOTEL_LIMIT)
        if not hotels and all_hotels:
            logger.info(f"No {prefs.budget} hotels in {prefs.city}; using any hotel in the city")
            hotels = all_hotels[: config.HOTEL_LIMIT]
        return hotels[: config.HOTEL_LIMIT]

    def select_restaurants(self, prefs: TravelerPrefs) -> List[Restaurant]:
        food = prefs.food_preferences
        cuisines = self.cuisine_mapper.resolve(food.cuisines) if food else []
        categories = self.category_mapper.resolve(food.categories) if food else []
        return self.catalog.restaurants_matching(prefs.city, cuisines, categories, config.RESTAURANT_LIMIT)

    # ── placeholders ──────────────────────────────────────────────────────

    def placeholder_activities(self, prefs: TravelerPrefs) -> List[Activity]:
        return [
            Activity(
                name="Explore the city",
                description="Take a self-guided tour of the city's landmarks and attractions",
                city=prefs.city,
            )
        ]

    def placeholder_hotels(self, prefs: TravelerPrefs) -> List[Hotel]:
        return [
            Hotel(
                name="Recommended Hotel",
                description="We recommend finding accommodations through popular booking sites",
                price_tier=_tier(prefs.budget, "$", "$$", "$$$"),
                city=prefs.city,
            )
        ]

    def placeholder_restaurants(self, prefs: TravelerPrefs) -> List[Restaurant]:
        city, budget = prefs.city, prefs.budget
        logger.info(f"No restaurants found in {city}; using suggested restaurant entries")
        return [
            Restaurant(
                name=f"{city} Traditional Restaurant",
                description="Experience authentic Saudi cuisine in a traditional setting",
                cuisine="Saudi Arabian",
                categories=["Fine Dining", "Halal"],
                price_tier=_tier(budget, "$", "$$", "$$$"),
                city=city,
            ),
            Restaurant(
                name="Al-Bayt Café",
                description="A cozy café serving local coffee, tea, and light meals",
                cuisine="Middle Eastern",
                categories=["Cafe", "Casual Dining"],
                price_tier=_tier(budget, "$", "$$", "$$"),
                city=city,
            ),
            Restaurant(
                name="Najd House",
                description="Authentic Saudi dishes from the central Najd region",
                cuisine="Saudi Arabian",
                categories=["Family Style", "Halal"],
                price_tier=_tier(budget, "$", "$$", "$$$"),
                city=city,
            ),
            Restaurant(
                name="Royal Dining Palace",
                description="Elegant restaurant featuring Saudi and international cuisines",
                cuisine="French" if budget == "Luxury" else "Middle Eastern",
                categories=["Fine Dining", "Rooftop"],
                price_tier=_tier(budget, "$$", "$$$", "$$$$"),
                city=city,
            ),
            Restaurant(
                name="Heritage Grill",
                description="Traditional grilled meats and local specialties",
                cuisine="Middle Eastern",
                categories=["Barbecue", "Casual Dining"],
                price_tier=_tier(budget, "$", "$$", "$$"),
                city=city,
            ),
        ]
