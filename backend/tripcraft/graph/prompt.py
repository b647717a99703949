from typing import List

from tripcraft.graph.state import CandidateSet, GenerationPrompt
from tripcraft.models.entities import CatalogItem
from tripcraft.models.trip_preferences import TravelerPrefs

SYSTEM_PROMPT = "You are a travel expert AI for Saudi Arabia tourism."

OUTPUT_SCHEMA = """{
  "hotel": { "place": "EXACT_NAME", "description": "Brief description about why this hotel is recommended for the entire stay" },
  "days": [
    {
      "day": 1,
      "morning": { "activity": "EXACT_NAME", "description": "Brief description" },
      "lunch": { "restaurant": "EXACT_NAME", "description": "Brief description" },
      "afternoon": { "activity": "EXACT_NAME", "description": "Brief description" },
      "dinner": { "restaurant": "EXACT_NAME", "description": "Brief description" },
      "notes": "Any additional tips for this day"
    }
  ]
}"""


def _abbreviate(text: str, limit: int = 50) -> str:
    text = (text or "").strip()
    return text if len(text) <= limit else text[:limit] + "..."


def _listing(items: List[CatalogItem], detail) -> str:
    if not items:
        return "- None available"
    return "\n".join(f"- {item.name} ({detail(item)})" for item in items)


def describe_food_preferences(prefs: TravelerPrefs) -> str:
    food = prefs.food_preferences
    if food is None or food.is_empty():
        return "No specific preferences"
    parts = []
    if food.cuisines:
        parts.append("cuisines: " + ", ".join(food.cuisines))
    if food.categories:
        parts.append("dining styles: " + ", ".join(food.categories))
    return "; ".join(parts)


def build_prompt(prefs: TravelerPrefs, candidates: CandidateSet) -> GenerationPrompt:
    activities = _listing(candidates.activities, lambda a: _abbreviate(a.description))
    restaurants = _listing(candidates.restaurants, lambda r: r.cuisine or "Local cuisine")
    hotels = _listing(candidates.hotels, lambda h: h.price_tier or "Price not listed")

    user = f"""Based on the following user preferences, create a {prefs.duration}-day itinerary for {prefs.city}.
Interests: {', '.join(prefs.interests) or 'General sightseeing'}.
Budget: {prefs.budget}.
Travelers: {prefs.travelers_type}.
Food preferences: {describe_food_preferences(prefs)}.

Create a day-by-day itinerary with the following structure for each day:
- Morning: Activity and brief description
- Lunch: Restaurant recommendation and brief description
- Afternoon: Activity and brief description
- Dinner: Restaurant recommendation and brief description

Additionally, recommend ONE hotel for the entire stay.

Pick only from the following options:

Destinations/Activities:
{activities}

Restaurants:
{restaurants}

Hotels:
{hotels}

IMPORTANT:
- Use the exact names of places listed above. Never invent places.
- Recommend exactly ONE hotel for the entire stay.
- Include exactly {prefs.duration} days, numbered 1 to {prefs.duration}.
- Ensure activities and restaurants align with the user's interests and budget.
- Return JSON only, with no code fences or explanations, in this structure:
{OUTPUT_SCHEMA}"""

    return GenerationPrompt(system=SYSTEM_PROMPT, user=user)
