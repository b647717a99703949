import argparse
import json
from typing import List

from tripcraft.graph.preferences import to_code
from tripcraft.models.itinerary import Itinerary
from tripcraft.models.vocabulary import (
    BUDGETS,
    CUISINES,
    DESTINATION_CATEGORIES,
    DINING_CATEGORIES,
    INTEREST_TYPES,
    TRAVELER_TYPES,
)


def format_itinerary(itinerary: Itinerary) -> dict:
    """API shape of an itinerary: stored camelCase names, ISO datetimes, string id."""
    return itinerary.model_dump(mode="json", by_alias=True)


def format_itineraries(itineraries: List[Itinerary]) -> List[dict]:
    return [format_itinerary(i) for i in itineraries]


def _options(names: List[str], coded: bool = True) -> List[dict]:
    return [{"id": to_code(n) if coded else n, "label": n} for n in names]


def format_options() -> dict:
    """Vocabularies a client needs to build a generation request.

    Interests are sent as-is (they match destination types and categories);
    cuisines and dining categories are sent as codes.
    """
    return {
        "interests": _options(INTEREST_TYPES + DESTINATION_CATEGORIES, coded=False),
        "cuisines": _options(CUISINES),
        "categories": _options(DINING_CATEGORIES),
        "budgets": BUDGETS,
        "travelersTypes": TRAVELER_TYPES,
    }


if __name__ == "__main__":
    from tripcraft.graph.agents import GenerationAgents
    from tripcraft.graph.build_graph import ItineraryGenerator
    from tripcraft.graph.candidates import CandidateSelector
    from tripcraft.integrations.catalog_store import CatalogStore
    from tripcraft.integrations.itinerary_store import ItineraryStore
    from tripcraft.integrations.mongo_client import ITINERARIES, get_database
    from tripcraft.models.trip_preferences import TravelerPrefs

    parser = argparse.ArgumentParser(description="Generate one itinerary against the configured catalog")
    parser.add_argument("--city", default="Riyadh")
    parser.add_argument("--duration", type=int, default=2)
    parser.add_argument("--interests", nargs="*", default=["Historical"])
    parser.add_argument("--budget", default="Medium", choices=BUDGETS)
    parser.add_argument("--travelers", default="Solo", choices=TRAVELER_TYPES)
    parser.add_argument("--seed", type=int, default=None)
    args = parser.parse_args()

    db = get_database()
    generator = ItineraryGenerator(
        GenerationAgents(CandidateSelector(CatalogStore(db)), ItineraryStore(db[ITINERARIES]))
    )
    prefs = TravelerPrefs(
        city=args.city,
        duration=args.duration,
        interests=args.interests,
        budget=args.budget,
        travelers_type=args.travelers,
    )
    itinerary, logs = generator.generate(prefs, seed=args.seed)
    print(json.dumps({"itinerary": format_itinerary(itinerary), "logs": logs}, indent=2, default=str))
