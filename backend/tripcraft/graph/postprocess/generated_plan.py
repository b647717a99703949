import json
import logging
import re

from pydantic import ValidationError

from tripcraft.graph.state import CandidateSet
from tripcraft.integrations.exceptions import MalformedPlanError
from tripcraft.models.itinerary import ItineraryPlan, check_day_sequence

logger = logging.getLogger(__name__)

_FENCE = re.compile(r"^```(?:json)?\s*|\s*```$", re.IGNORECASE)


def _strip_fences(text: str) -> str:
    return _FENCE.sub("", text.strip())


def parse_generated_plan(text: str, candidates: CandidateSet, duration: int) -> ItineraryPlan:
    """
    Parse the generation service's answer into an ItineraryPlan.

    Raises MalformedPlanError when the text is not a JSON object with `hotel`
    and `days`, when a slot is missing, when the day sequence is wrong, or when
    any named place is not one of the candidates offered in the prompt.
    """
    try:
        data = json.loads(_strip_fences(text))
    except json.JSONDecodeError as e:
        raise MalformedPlanError(f"Response is not JSON: {e}") from e

    if not isinstance(data, dict) or "hotel" not in data or "days" not in data:
        raise MalformedPlanError("Response is missing 'hotel' or 'days'")

    try:
        plan = ItineraryPlan.model_validate(data)
    except ValidationError as e:
        raise MalformedPlanError(f"Response does not match the itinerary schema: {e.error_count()} errors") from e

    problem = check_day_sequence(plan.days, duration)
    if problem:
        raise MalformedPlanError(problem)

    hotels = {h.name for h in candidates.hotels}
    activities = {a.name for a in candidates.activities}
    restaurants = {r.name for r in candidates.restaurants}

    if plan.hotel.place not in hotels:
        raise MalformedPlanError(f"Unknown hotel '{plan.hotel.place}'")
    for day in plan.days:
        for slot in (day.morning, day.afternoon):
            if slot.activity not in activities:
                raise MalformedPlanError(f"Day {day.day}: unknown activity '{slot.activity}'")
        for slot in (day.lunch, day.dinner):
            if slot.restaurant not in restaurants:
                raise MalformedPlanError(f"Day {day.day}: unknown restaurant '{slot.restaurant}'")

    logger.info(f"Parsed generated plan: {len(plan.days)} days, hotel '{plan.hotel.place}'")
    return plan
