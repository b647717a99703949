from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from tripcraft.models.trip_preferences import FoodPreferences


class ActivitySlot(BaseModel):
    activity: str
    description: str = ""


class MealSlot(BaseModel):
    restaurant: str
    description: str = ""


class DayPlan(BaseModel):
    day: int
    morning: ActivitySlot
    lunch: MealSlot
    afternoon: ActivitySlot
    dinner: MealSlot
    notes: str = ""


class HotelRecommendation(BaseModel):
    place: str
    description: str = ""


class ItineraryPlan(BaseModel):
    """The {hotel, days} body produced by either generation path."""

    hotel: HotelRecommendation
    days: List[DayPlan]


class Itinerary(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: Optional[str] = None
    user: Optional[str] = None
    name: str
    city: str
    duration: int
    interests: List[str] = []
    budget: str
    travelers_type: str
    food_preferences: Optional[FoodPreferences] = None
    days: List[DayPlan]
    hotel: HotelRecommendation
    is_ai_generated: bool = Field(default=True, alias="isAIGenerated")
    using_fallback_generator: bool = False
    is_temporary: bool = False
    expires_at: Optional[datetime] = None
    generated_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    last_updated: Optional[datetime] = None

    @field_validator("id", "user", mode="before")
    @classmethod
    def _stringify(cls, v: Any) -> Optional[str]:
        return str(v) if v is not None else None

    @classmethod
    def from_document(cls, doc: dict) -> "Itinerary":
        return cls.model_validate({**doc, "id": doc.get("_id")})

    def to_document(self) -> dict:
        """Mongo representation: camelCase keys, no id (Mongo assigns `_id`)."""
        return self.model_dump(by_alias=True, exclude={"id"})

    def is_owned_by(self, user_id: Optional[str]) -> bool:
        return self.user is not None and user_id is not None and self.user == user_id


def check_day_sequence(days: List[DayPlan], duration: int) -> Optional[str]:
    """Return why `days` breaks the day-plan invariant, or None when it holds."""
    if len(days) != duration:
        return f"expected {duration} days, got {len(days)}"
    for expected, day in enumerate(days, start=1):
        if day.day != expected:
            return f"day {expected} is numbered {day.day}"
    return None
