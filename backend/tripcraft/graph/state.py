import operator
from typing import Annotated, List, Literal, Optional

from pydantic import BaseModel, Field

from tripcraft.models.entities import Activity, Hotel, Restaurant
from tripcraft.models.itinerary import Itinerary, ItineraryPlan
from tripcraft.models.trip_preferences import TravelerPrefs

Status = Literal[
    "building_prompt",
    "awaiting_external",
    "parsed_ok",
    "external_failed",
    "result_ready",
    "persisted",
]


class CandidateSet(BaseModel):
    activities: List[Activity] = Field(default_factory=list)
    hotels: List[Hotel] = Field(default_factory=list)
    restaurants: List[Restaurant] = Field(default_factory=list)

    def is_empty(self) -> bool:
        return not (self.activities or self.hotels or self.restaurants)


class GenerationPrompt(BaseModel):
    system: str
    user: str


class RunState(BaseModel):
    prefs: TravelerPrefs
    user_id: Optional[str] = None
    seed: Optional[int] = None

    status: Status = "building_prompt"
    candidates: CandidateSet = Field(default_factory=CandidateSet)
    prompt: Optional[GenerationPrompt] = None
    plan: Optional[ItineraryPlan] = None
    using_fallback: bool = False
    failure: Optional[str] = None
    itinerary: Optional[Itinerary] = None

    logs: Annotated[List[dict], operator.add] = Field(default_factory=list)
