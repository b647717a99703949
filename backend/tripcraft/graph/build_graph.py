from typing import Optional, Tuple

from langchain_core.runnables import RunnableConfig
from langgraph.graph import END, StateGraph

from tripcraft.graph.agents import GenerationAgents, route_after_external
from tripcraft.graph.state import RunState
from tripcraft.models.itinerary import Itinerary
from tripcraft.models.trip_preferences import TravelerPrefs


# The compiled graph is shared; each run brings its own agents (stores, generate fn) via config.
def _agents(config: RunnableConfig) -> GenerationAgents:
    return config["configurable"]["agents"]


def select_candidates(state: RunState, config: RunnableConfig) -> dict:
    return _agents(config).select_candidates(state)


def build_prompt(state: RunState, config: RunnableConfig) -> dict:
    return _agents(config).build_prompt(state)


def call_external(state: RunState, config: RunnableConfig) -> dict:
    return _agents(config).call_external(state)


def synthesize_fallback(state: RunState, config: RunnableConfig) -> dict:
    return _agents(config).synthesize_fallback(state)


def record_itinerary(state: RunState, config: RunnableConfig) -> dict:
    return _agents(config).record_itinerary(state)


def build_graph():
    g = StateGraph(RunState)

    g.add_node("select_candidates", select_candidates)
    g.add_node("build_prompt", build_prompt)
    g.add_node("call_external", call_external)
    g.add_node("synthesize_fallback", synthesize_fallback)
    g.add_node("record_itinerary", record_itinerary)

    g.set_entry_point("select_candidates")
    g.add_edge("select_candidates", "build_prompt")
    g.add_edge("build_prompt", "call_external")
    g.add_conditional_edges(
        "call_external",
        route_after_external,
        {"synthesize_fallback": "synthesize_fallback", "record_itinerary": "record_itinerary"},
    )
    g.add_edge("synthesize_fallback", "record_itinerary")
    g.add_edge("record_itinerary", END)

    return g.compile()


graph = build_graph()


class ItineraryGenerator:
    """Runs the shared generation graph for one request and returns the persisted itinerary."""

    def __init__(self, agents: GenerationAgents):
        self.agents = agents

    def generate(
        self,
        prefs: TravelerPrefs,
        user_id: Optional[str] = None,
        seed: Optional[int] = None,
    ) -> Tuple[Itinerary, list]:
        result = graph.invoke(
            RunState(prefs=prefs, user_id=user_id, seed=seed),
            config={"configurable": {"agents": self.agents}},
        )
        return result["itinerary"], result.get("logs", [])
