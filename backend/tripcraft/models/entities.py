# tripcraft/models/entities.py
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Any, List, Optional


class CatalogItem(BaseModel):
    """A read-only record from the catalog collections.

    Field aliases follow the stored document names (``locationCity``,
    ``priceRange``), so a raw Mongo document validates directly.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: Optional[str] = None
    name: str
    description: str = ""
    city: Optional[str] = Field(default=None, alias="locationCity")
    categories: List[str] = []
    coordinates: Optional[List[float]] = None  # [longitude, latitude]

    @field_validator("id", mode="before")
    @classmethod
    def _stringify_id(cls, v: Any) -> Optional[str]:
        return str(v) if v is not None else None

    @field_validator("description", mode="before")
    @classmethod
    def _blank_description(cls, v: Any) -> str:
        return v or ""

    @field_validator("coordinates", mode="before")
    @classmethod
    def _geojson_point(cls, v: Any):
        # Stored as {"type": "Point", "coordinates": [lon, lat]}
        if isinstance(v, dict):
            v = v.get("coordinates")
        if not v:
            return None
        return v

    @classmethod
    def from_document(cls, doc: dict):
        return cls.model_validate({**doc, "id": doc.get("_id")})


class Activity(CatalogItem):
    type: Optional[str] = None
    cost: Optional[float] = None


class Hotel(CatalogItem):
    price_tier: Optional[str] = Field(default=None, alias="priceRange")


class Restaurant(CatalogItem):
    cuisine: Optional[str] = None
    price_tier: Optional[str] = Field(default=None, alias="priceRange")
