from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import List, Literal, Optional

from tripcraft import config

Budget = Literal["Low", "Medium", "Luxury"]
TravelersType = Literal["Solo", "Couple", "Family", "Group"]


class FoodPreferences(BaseModel):
    cuisines: List[str] = []    # snake_case cuisine codes
    categories: List[str] = []  # snake_case dining category codes

    def is_empty(self) -> bool:
        return not self.cuisines and not self.categories


class TravelerPrefs(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    city: str = Field(min_length=1)
    duration: int = Field(gt=0, le=config.MAX_DURATION_DAYS)
    interests: List[str]
    budget: Budget
    travelers_type: TravelersType
    food_preferences: Optional[FoodPreferences] = None
