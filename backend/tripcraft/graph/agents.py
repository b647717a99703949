"""Graph nodes for itinerary generation. Each returns a partial RunState update."""

import logging
import random
from typing import Callable, Optional

from tripcraft import config
from tripcraft.graph.candidates import CandidateSelector
from tripcraft.graph.fallback import synthesize_itinerary
from tripcraft.graph.postprocess.generated_plan import parse_generated_plan
from tripcraft.graph.preferences import PreferenceMapper
from tripcraft.graph.prompt import build_prompt
from tripcraft.graph.state import RunState
from tripcraft.integrations.exceptions import IntegrationError, UpstreamAPIError
from tripcraft.integrations.itinerary_store import ItineraryStore
from tripcraft.integrations.openai_client import call_gpt
from tripcraft.models.vocabulary import CUISINES

logger = logging.getLogger(__name__)

# (system, prompt) -> raw text from the generation service
GenerateFn = Callable[[str, str], str]


class GenerationAgents:
    def __init__(
        self,
        selector: CandidateSelector,
        store: ItineraryStore,
        generate: GenerateFn = call_gpt,
        fallback_cuisine_mapper: Optional[PreferenceMapper] = None,
    ):
        self.selector = selector
        self.store = store
        self.generate = generate
        self.fallback_cuisine_mapper = fallback_cuisine_mapper or PreferenceMapper(
            CUISINES, config.CUISINE_ALIASES
        )

    def select_candidates(self, state: RunState) -> dict:
        candidates = self.selector.select(state.prefs)
        return {
            "candidates": candidates,
            "status": "building_prompt",
            "logs": [{
                "stage": "Candidates Selected",
                "message": f"Selected candidates for {state.prefs.city}",
                "counts": {
                    "activities": len(candidates.activities),
                    "hotels": len(candidates.hotels),
                    "restaurants": len(candidates.restaurants),
                },
            }],
        }

    def build_prompt(self, state: RunState) -> dict:
        return {
            "prompt": build_prompt(state.prefs, state.candidates),
            "status": "awaiting_external",
            "logs": [{"stage": "Prompt Built", "message": f"Prompt for a {state.prefs.duration}-day trip"}],
        }

    def call_external(self, state: RunState) -> dict:
        try:
            text = self.generate(state.prompt.system, state.prompt.user)
            plan = parse_generated_plan(text, state.candidates, state.prefs.duration)
        except (UpstreamAPIError, IntegrationError) as e:
            logger.warning(f"External generation failed, using fallback generator: {e}")
            return _external_failed(e)
        except Exception as e:
            # Unwrapped transport errors (socket timeouts, httpx) take the same route
            logger.exception(f"Unexpected error from the generation service, using fallback generator: {e}")
            return _external_failed(e)
        return {
            "plan": plan,
            "status": "parsed_ok",
            "logs": [{"stage": "External Generation", "message": "Generated itinerary with the AI service"}],
        }

    def synthesize_fallback(self, state: RunState) -> dict:
        prefs = state.prefs
        plan = synthesize_itinerary(
            duration=prefs.duration,
            city=prefs.city,
            interests=prefs.interests,
            candidates=state.candidates,
            rng=random.Random(state.seed),
            cuisine_mapper=self.fallback_cuisine_mapper,
            food_preferences=prefs.food_preferences,
        )
        return {
            "plan": plan,
            "using_fallback": True,
            "status": "result_ready",
            "logs": [{"stage": "Fallback Synthesized", "message": f"Built {len(plan.days)} days locally"}],
        }

    def record_itinerary(self, state: RunState) -> dict:
        itinerary = self.store.create(
            state.plan, state.prefs, user_id=state.user_id, using_fallback=state.using_fallback
        )
        logger.info(f"Persisted itinerary {itinerary.id} (temporary={itinerary.is_temporary})")
        return {
            "itinerary": itinerary,
            "status": "persisted",
            "logs": [{"stage": "Itinerary Saved", "message": f"Saved itinerary {itinerary.id}"}],
        }


def _external_failed(error: Exception) -> dict:
    reason = str(error) or type(error).__name__
    return {
        "status": "external_failed",
        "failure": reason,
        "logs": [{"stage": "External Generation Failed", "message": reason}],
    }


def route_after_external(state: RunState) -> str:
    return "synthesize_fallback" if state.status == "external_failed" else "record_itinerary"
