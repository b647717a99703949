"""
Local itinerary synthesizer, used whenever external generation fails.

Every day starts from a fresh shuffle of the candidates and takes from the
front, so a place never repeats within a day but may repeat across days.
Exhausted or empty lists degrade to fixed placeholder entries; this module
never raises on missing data.
"""

import random
from typing import List, Optional, Sequence, TypeVar

from tripcraft.graph.preferences import PreferenceMapper
from tripcraft.graph.state import CandidateSet
from tripcraft.models.entities import Restaurant
from tripcraft.models.itinerary import ActivitySlot, DayPlan, HotelRecommendation, ItineraryPlan, MealSlot
from tripcraft.models.trip_preferences import FoodPreferences

T = TypeVar("T")

ACTIVITY_DESCRIPTION = "Enjoy this popular attraction"
MEAL_DESCRIPTION = "Enjoy a delicious meal"

MORNING_PLACEHOLDER = ActivitySlot(activity="Explore the city", description="Discover the local attractions")
AFTERNOON_PLACEHOLDER = ActivitySlot(activity="Cultural visit", description="Experience the local culture")
LUNCH_PLACEHOLDER = MealSlot(restaurant="Local Restaurant", description="Try the local cuisine")
DINNER_PLACEHOLDER = MealSlot(restaurant="Traditional Dining", description="Experience traditional Saudi dishes")


def take_shuffled(items: Sequence[T], count: int, rng: random.Random) -> List[Optional[T]]:
    """Shuffle an index set and take `count` items; missing positions are None."""
    order = list(range(len(items)))
    rng.shuffle(order)
    picked: List[Optional[T]] = [items[i] for i in order[:count]]
    return picked + [None] * (count - len(picked))


def restaurants_for(
    restaurants: List[Restaurant],
    food_preferences: Optional[FoodPreferences],
    cuisine_mapper: PreferenceMapper,
) -> List[Restaurant]:
    """Restaurants whose cuisine the diner asked for, or all of them if none match."""
    if not food_preferences or not food_preferences.cuisines:
        return restaurants
    wanted = set(cuisine_mapper.resolve(food_preferences.cuisines))
    matching = [r for r in restaurants if r.cuisine in wanted]
    return matching or restaurants


def synthesize_itinerary(
    duration: int,
    city: str,
    interests: List[str],
    candidates: CandidateSet,
    rng: random.Random,
    cuisine_mapper: PreferenceMapper,
    food_preferences: Optional[FoodPreferences] = None,
) -> ItineraryPlan:
    if candidates.hotels:
        chosen = rng.choice(candidates.hotels)
        hotel = HotelRecommendation(
            place=chosen.name,
            description=chosen.description
            or f"A comfortable place to stay during your {duration}-day trip to {city}",
        )
    else:
        hotel = HotelRecommendation(
            place="Recommended Accommodation", description="Find a comfortable place to stay"
        )

    restaurants = restaurants_for(candidates.restaurants, food_preferences, cuisine_mapper)
    focus = interests[0] if interests else "local experiences"

    days = []
    for i in range(1, duration + 1):
        morning, afternoon = take_shuffled(candidates.activities, 2, rng)
        lunch, dinner = take_shuffled(restaurants, 2, rng)
        days.append(
            DayPlan(
                day=i,
                morning=ActivitySlot(activity=morning.name, description=morning.description or ACTIVITY_DESCRIPTION)
                if morning
                else MORNING_PLACEHOLDER,
                lunch=MealSlot(restaurant=lunch.name, description=lunch.description or MEAL_DESCRIPTION)
                if lunch
                else LUNCH_PLACEHOLDER,
                afternoon=ActivitySlot(
                    activity=afternoon.name, description=afternoon.description or ACTIVITY_DESCRIPTION
                )
                if afternoon
                else AFTERNOON_PLACEHOLDER,
                dinner=MealSlot(restaurant=dinner.name, description=dinner.description or MEAL_DESCRIPTION)
                if dinner
                else DINNER_PLACEHOLDER,
                notes=f"Day {i} in {city}: Focus on {focus}",
            )
        )

    return ItineraryPlan(hotel=hotel, days=days)
