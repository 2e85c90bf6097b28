"""
Pydantic models for map resources (shelters, food banks, water points...).

Coordinates are accepted as numbers or numeric strings, validated as
Decimal, and persisted as exact decimal text so repeated reads and writes
never drift. They are parsed to float only for distance checks.
"""

from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, field_validator


class ResourceType(str, Enum):
    """The fixed set of resource categories shown on the map."""
    SHELTER = "shelter"
    FOOD = "food"
    WATER = "water"
    WIFI = "wifi"
    WEATHER = "weather"
    RESTROOM = "restroom"
    HEALTH = "health"


RESOURCE_TYPES = [t.value for t in ResourceType]


def decimal_text(value: Decimal) -> str:
    """Render a Decimal as plain positional text (never exponent notation)."""
    text = format(value, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text or "0"


class ResourceCreate(BaseModel):
    """Payload for creating a resource (POST /api/resources)."""
    name: str = Field(..., min_length=1, max_length=200, description="Display name")
    type: ResourceType = Field(..., description="Resource category")
    address: str = Field(..., min_length=1, max_length=300, description="Street address")
    latitude: Decimal = Field(..., ge=-90, le=90, description="Latitude in degrees")
    longitude: Decimal = Field(..., ge=-180, le=180, description="Longitude in degrees")
    hours: Optional[str] = Field(None, max_length=200, description="Free-text opening hours")
    notes: Optional[str] = Field(None, max_length=1000, description="Free-text notes")

    class Config:
        str_strip_whitespace = True
        json_schema_extra = {
            "example": {
                "name": "Community Kitchen",
                "type": "food",
                "address": "456 Oak Ave, Atlanta, GA",
                "latitude": 33.7512,
                "longitude": -84.3901,
                "hours": "Daily: 11am-1pm, 5pm-7pm",
                "notes": "Free hot meals, no ID required",
            }
        }

    def to_record(self) -> Dict[str, Any]:
        return _to_record(self.model_dump())


class ResourceUpdate(BaseModel):
    """
    Partial update payload (PATCH /api/resources/{id}).
    Only the fields present in the request body are applied.
    """
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    type: Optional[ResourceType] = None
    address: Optional[str] = Field(None, min_length=1, max_length=300)
    latitude: Optional[Decimal] = Field(None, ge=-90, le=90)
    longitude: Optional[Decimal] = Field(None, ge=-180, le=180)
    hours: Optional[str] = Field(None, max_length=200)
    notes: Optional[str] = Field(None, max_length=1000)

    class Config:
        str_strip_whitespace = True

    @field_validator("name", "type", "address", "latitude", "longitude")
    @classmethod
    def required_fields_not_null(cls, value):
        # Only runs for fields the caller actually sent.
        if value is None:
            raise ValueError("field cannot be null")
        return value

    def to_changes(self) -> Dict[str, Any]:
        return _to_record(self.model_dump(exclude_unset=True))


class Resource(BaseModel):
    """A stored resource, as returned by the API."""
    id: int
    name: str
    type: ResourceType
    address: str
    latitude: str
    longitude: str
    hours: Optional[str] = None
    notes: Optional[str] = None

    @property
    def lat(self) -> float:
        return float(self.latitude)

    @property
    def lng(self) -> float:
        return float(self.longitude)


def _to_record(data: Dict[str, Any]) -> Dict[str, Any]:
    record = dict(data)
    for key in ("latitude", "longitude"):
        if isinstance(record.get(key), Decimal):
            record[key] = decimal_text(record[key])
    if isinstance(record.get("type"), ResourceType):
        record["type"] = record["type"].value
    return record
