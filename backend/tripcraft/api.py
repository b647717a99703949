import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Annotated, List, Optional

from fastapi import Body, Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from pymongo.database import Database
from pymongo.errors import PyMongoError

from tripcraft import __version__, config
from tripcraft.auth import AuthUser, get_current_user, get_optional_user
from tripcraft.graph.agents import GenerateFn, GenerationAgents
from tripcraft.graph.build_graph import ItineraryGenerator
from tripcraft.graph.candidates import CandidateSelector
from tripcraft.integrations.catalog_store import CatalogStore
from tripcraft.integrations.exceptions import TripcraftError
from tripcraft.integrations.itinerary_store import ItineraryStore
from tripcraft.integrations.mongo_client import ITINERARIES, close_mongo_client, ensure_indexes, get_database
from tripcraft.integrations.openai_client import call_gpt
from tripcraft.main import format_itineraries, format_itinerary, format_options
from tripcraft.models.itinerary import DayPlan
from tripcraft.models.trip_preferences import TravelerPrefs
from tripcraft.sweeper import ExpirySweeper

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    db = get_database()
    try:
        await asyncio.to_thread(ensure_indexes, db)
    except PyMongoError:
        logger.exception("Could not ensure itinerary indexes")

    sweeper = None
    if config.EXPIRY_SWEEP_ENABLED:
        sweeper = ExpirySweeper(ItineraryStore(db[ITINERARIES]), config.EXPIRY_SWEEP_INTERVAL_SECONDS)
        sweeper.start()
    app.state.sweeper = sweeper
    try:
        yield
    finally:
        if sweeper is not None:
            await sweeper.stop()
        close_mongo_client()


app = FastAPI(
    title="Tripcraft Itinerary API",
    description="AI itinerary generation with local fallback for the tourism platform",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(TripcraftError)
async def tripcraft_error_handler(request: Request, exc: TripcraftError):
    return JSONResponse(status_code=exc.status_code, content={"success": False, "message": exc.message})


# ── dependencies ──────────────────────────────────────────────────────────────

def get_db() -> Database:
    return get_database()


def get_itinerary_store(db: Annotated[Database, Depends(get_db)]) -> ItineraryStore:
    return ItineraryStore(db[ITINERARIES])


def get_catalog_store(db: Annotated[Database, Depends(get_db)]) -> CatalogStore:
    return CatalogStore(db)


def get_generate_fn() -> GenerateFn:
    return call_gpt


def get_generator(
    catalog: Annotated[CatalogStore, Depends(get_catalog_store)],
    store: Annotated[ItineraryStore, Depends(get_itinerary_store)],
    generate: Annotated[GenerateFn, Depends(get_generate_fn)],
) -> ItineraryGenerator:
    return ItineraryGenerator(GenerationAgents(CandidateSelector(catalog), store, generate=generate))


# ── request bodies ────────────────────────────────────────────────────────────

class SaveRequest(BaseModel):
    name: Optional[str] = None


class UpdateRequest(BaseModel):
    name: Optional[str] = None
    days: Optional[List[DayPlan]] = None


# ── routes ────────────────────────────────────────────────────────────────────

@app.get("/")
def root():
    return {
        "message": "Tripcraft Itinerary API",
        "version": __version__,
        "endpoints": {
            "health": "/health",
            "generate": "/itineraries/generate",
            "docs": "/docs",
        },
    }


@app.get("/health")
def health():
    return {"status": "healthy", "service": "Tripcraft Itinerary API"}


@app.get("/itineraries/options")
def itinerary_options():
    """Interest, cuisine and dining-category codes accepted by /itineraries/generate."""
    return format_options()


@app.post("/itineraries/generate", status_code=201)
def generate_itinerary(
    prefs: TravelerPrefs,
    generator: Annotated[ItineraryGenerator, Depends(get_generator)],
    user: Annotated[Optional[AuthUser], Depends(get_optional_user)],
):
    """
    Generate and store an itinerary.

    - **city**, **duration**, **interests**, **budget** (Low | Medium | Luxury),
      **travelersType** (Solo | Couple | Family | Group) are required
    - **foodPreferences**: optional `{cuisines: [...], categories: [...]}` codes

    Anonymous requests produce a temporary itinerary that expires after
    TEMPORARY_ITINERARY_TTL_HOURS unless saved.
    """
    logger.info(
        f"Generating itinerary: {prefs.city}, {prefs.duration} days, interests={prefs.interests}, "
        f"budget={prefs.budget}, user={user.id if user else 'anonymous'}"
    )
    try:
        itinerary, logs = generator.generate(prefs, user_id=user.id if user else None)
    except TripcraftError:
        raise
    except Exception as e:
        logger.exception(f"Error generating itinerary: {e}")
        raise HTTPException(status_code=500, detail="Failed to generate itinerary")

    return {
        "success": True,
        "message": "Itinerary generated successfully",
        "data": format_itinerary(itinerary),
        "logs": logs,
    }


@app.get("/itineraries")
def list_itineraries(
    user: Annotated[AuthUser, Depends(get_current_user)],
    store: Annotated[ItineraryStore, Depends(get_itinerary_store)],
):
    itineraries = store.list_for_user(user.id)
    return {"success": True, "count": len(itineraries), "data": format_itineraries(itineraries)}


@app.get("/itineraries/{itinerary_id}")
def get_itinerary(
    itinerary_id: str,
    user: Annotated[Optional[AuthUser], Depends(get_optional_user)],
    store: Annotated[ItineraryStore, Depends(get_itinerary_store)],
):
    itinerary = store.get_for_reader(
        itinerary_id, user.id if user else None, is_admin=bool(user and user.is_admin)
    )
    return {"success": True, "data": format_itinerary(itinerary)}


@app.put("/itineraries/{itinerary_id}")
def update_itinerary(
    itinerary_id: str,
    body: UpdateRequest,
    user: Annotated[AuthUser, Depends(get_current_user)],
    store: Annotated[ItineraryStore, Depends(get_itinerary_store)],
):
    itinerary = store.update(itinerary_id, user.id, name=body.name, days=body.days)
    return {"success": True, "message": "Itinerary updated successfully", "data": format_itinerary(itinerary)}


@app.delete("/itineraries/{itinerary_id}")
def delete_itinerary(
    itinerary_id: str,
    user: Annotated[AuthUser, Depends(get_current_user)],
    store: Annotated[ItineraryStore, Depends(get_itinerary_store)],
):
    store.delete(itinerary_id, user.id, is_admin=user.is_admin)
    return {"success": True, "message": "Itinerary deleted successfully"}


@app.post("/itineraries/{itinerary_id}/save", status_code=201)
def save_itinerary(
    itinerary_id: str,
    user: Annotated[AuthUser, Depends(get_current_user)],
    store: Annotated[ItineraryStore, Depends(get_itinerary_store)],
    body: Annotated[Optional[SaveRequest], Body()] = None,
):
    """Copy a (usually temporary) itinerary into a permanent one owned by the caller."""
    saved = store.save_copy(itinerary_id, user.id, name=body.name if body else None)
    return {
        "success": True,
        "message": "Itinerary saved successfully",
        "data": format_itinerary(saved),
        "itineraries": format_itineraries(store.list_for_user(user.id)),
    }
