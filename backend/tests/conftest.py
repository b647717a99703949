import json

import jwt
import mongomock
import pytest
from fastapi.testclient import TestClient

from tripcraft import config
from tripcraft.api import app, get_db, get_generate_fn
from tripcraft.integrations.catalog_store import CatalogStore
from tripcraft.integrations.exceptions import UpstreamAPIError
from tripcraft.integrations.itinerary_store import ItineraryStore
from tripcraft.models.trip_preferences import TravelerPrefs

JWT_TEST_SECRET = "test-secret"

DESTINATIONS = [
    {"name": "Masmak Fortress", "description": "A clay and mud-brick fort at the heart of old Riyadh",
     "locationCity": "Riyadh", "type": "Historical", "categories": ["Family-friendly"], "cost": 0,
     "coordinates": {"type": "Point", "coordinates": [46.7135, 24.6312]}},
    {"name": "Diriyah", "description": "UNESCO-listed birthplace of the first Saudi state",
     "locationCity": "Riyadh", "type": "Historical", "categories": ["Outdoor"], "cost": 50},
    {"name": "National Museum", "description": "Galleries covering the history of the peninsula",
     "locationCity": "Riyadh", "type": "Cultural", "categories": ["Indoor"], "cost": 10},
    {"name": "Edge of the World", "description": "Dramatic cliffs on the Tuwaiq escarpment",
     "locationCity": "Riyadh", "type": "Adventure", "categories": ["Outdoor"], "cost": 100},
    {"name": "Al-Balad", "description": "Historic district of coral-stone houses",
     "locationCity": "Jeddah", "type": "Historical", "categories": ["Outdoor"], "cost": 0},
]

HOTELS = [
    {"name": "Budget Inn", "description": "Simple rooms near the metro", "locationCity": "Riyadh", "priceRange": "$"},
    {"name": "Olaya Suites", "description": "Business hotel on Olaya Street", "locationCity": "Riyadh", "priceRange": "$$"},
    {"name": "Grand Riyadh", "description": "Tower hotel with skyline views", "locationCity": "Riyadh", "priceRange": "$$$"},
    {"name": "Royal Palace Hotel", "description": "Palatial suites and butler service", "locationCity": "Riyadh", "priceRange": "$$$$"},
    {"name": "Taif Hillside", "description": "Mountain retreat", "locationCity": "Taif", "priceRange": "$$$$"},
]

RESTAURANTS = [
    {"name": "Najd Village", "description": "Traditional Najdi dishes", "locationCity": "Riyadh",
     "cuisine": "khaleeji", "categories": ["Family Style"], "priceRange": "$$"},
    {"name": "Lusin", "description": "Armenian-Lebanese classics", "locationCity": "Riyadh",
     "cuisine": "Lebanese", "categories": ["Fine Dining"], "priceRange": "$$$"},
    {"name": "Il Forno", "description": "Wood-fired pizza", "locationCity": "Riyadh",
     "cuisine": "Italian", "categories": ["Casual Dining"], "priceRange": "$$"},
    {"name": "Sushi Yoshi", "description": "Omakase counter", "locationCity": "Riyadh",
     "cuisine": "Japanese", "categories": ["Fine Dining"], "priceRange": "$$$$"},
]


@pytest.fixture
def db():
    database = mongomock.MongoClient()["tourism_test"]
    database["destinations"].insert_many([dict(d) for d in DESTINATIONS])
    database["hotels"].insert_many([dict(h) for h in HOTELS])
    database["restaurants"].insert_many([dict(r) for r in RESTAURANTS])
    return database


@pytest.fixture
def catalog(db):
    return CatalogStore(db)


@pytest.fixture
def store(db):
    return ItineraryStore(db["itineraries"])


def make_prefs(**overrides) -> TravelerPrefs:
    data = {
        "city": "Riyadh",
        "duration": 2,
        "interests": ["Historical"],
        "budget": "Medium",
        "travelersType": "Solo",
    }
    data.update(overrides)
    return TravelerPrefs.model_validate(data)


@pytest.fixture
def prefs():
    return make_prefs()


def failing_generate(system: str, prompt: str) -> str:
    raise UpstreamAPIError("simulated transport error")


def plan_response(duration: int, hotel: str = "Olaya Suites",
                  activities=("Masmak Fortress", "Diriyah"),
                  restaurants=("Najd Village", "Lusin")) -> str:
    return json.dumps({
        "hotel": {"place": hotel, "description": "Central and mid-priced"},
        "days": [
            {
                "day": i,
                "morning": {"activity": activities[0], "description": "Morning visit"},
                "lunch": {"restaurant": restaurants[0], "description": "Lunch"},
                "afternoon": {"activity": activities[1], "description": "Afternoon visit"},
                "dinner": {"restaurant": restaurants[1], "description": "Dinner"},
                "notes": "Carry water",
            }
            for i in range(1, duration + 1)
        ],
    })


def token_for(user_id: str, role: str = "user") -> dict:
    token = jwt.encode({"id": user_id, "role": role}, JWT_TEST_SECRET, algorithm="HS256")
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def generate_fn():
    """Mutable holder for the generation callable the API will use."""
    return {"fn": failing_generate}


@pytest.fixture
def client(db, generate_fn, monkeypatch):
    monkeypatch.setattr(config, "JWT_SECRET", JWT_TEST_SECRET)
    app.dependency_overrides[get_db] = lambda: db
    app.dependency_overrides[get_generate_fn] = lambda: (lambda system, prompt: generate_fn["fn"](system, prompt))
    yield TestClient(app)
    app.dependency_overrides.clear()
