"""
Central configuration for the itinerary service.

Every value comes from the environment (optionally a .env file next to the
process). Nothing secret is hard-coded.
"""

import os

from dotenv import load_dotenv

load_dotenv()


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes")


# MongoDB
MONGODB_URI: str = os.getenv("MONGODB_URI", "mongodb://localhost:27017")
MONGODB_DB: str = os.getenv("MONGODB_DB", "tourism")
MONGODB_TIMEOUT_MS: int = int(os.getenv("MONGODB_TIMEOUT_MS", "3000"))

# External generation service (OpenAI or any OpenAI-compatible gateway)
OPENAI_API_KEY: str = os.getenv("OPENAI_API_KEY", "")
OPENAI_BASE_URL: str = os.getenv("OPENAI_BASE_URL", "")
LLM_MODEL: str = os.getenv("LLM_MODEL", "gpt-3.5-turbo")
LLM_TEMPERATURE: float = float(os.getenv("LLM_TEMPERATURE", "0.7"))
LLM_MAX_TOKENS: int = int(os.getenv("LLM_MAX_TOKENS", "1500"))
# Expiry of this timeout routes the request to the local synthesizer.
LLM_TIMEOUT_SECONDS: float = float(os.getenv("LLM_TIMEOUT_SECONDS", "20"))

# Auth
JWT_SECRET: str = os.getenv("JWT_SECRET", "")
JWT_ALGORITHM: str = os.getenv("JWT_ALGORITHM", "HS256")

# Itinerary lifecycle
TEMPORARY_ITINERARY_TTL_HOURS: int = int(os.getenv("TEMPORARY_ITINERARY_TTL_HOURS", "24"))
EXPIRY_SWEEP_INTERVAL_SECONDS: float = float(os.getenv("EXPIRY_SWEEP_INTERVAL_SECONDS", "86400"))
EXPIRY_SWEEP_ENABLED: bool = _flag("EXPIRY_SWEEP_ENABLED", "true")

# Candidate selection caps
ACTIVITY_LIMIT: int = int(os.getenv("ACTIVITY_LIMIT", "10"))
HOTEL_LIMIT: int = int(os.getenv("HOTEL_LIMIT", "5"))
RESTAURANT_LIMIT: int = int(os.getenv("RESTAURANT_LIMIT", "10"))

MAX_DURATION_DAYS: int = int(os.getenv("MAX_DURATION_DAYS", "30"))

CORS_ORIGINS: list[str] = [
    o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()
]

# Preference codes that do not follow the "lowercase + underscores" rule.
# Aliases win over the derived mapping.
CUISINE_ALIASES: dict[str, str] = {
    "saudi": "khaleeji",
    "saudi_arabian": "khaleeji",
    "gulf": "khaleeji",
    "persian": "Iranian",
}

CATEGORY_ALIASES: dict[str, str] = {
    "bbq": "Barbecue",
    "coffee": "Cafe",
    "desserts": "Dessert",
}
