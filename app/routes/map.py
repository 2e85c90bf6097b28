"""Map routes - the filtered marker set for one city view.

The browser normally filters the resource list itself; this endpoint runs
the same rules server-side so a thin client (or a test) can ask for the
markers directly.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from app.core.deps import get_store
from app.core.errors import ValidationError
from app.models.city import City, find_city
from app.models.resource import RESOURCE_TYPES
from app.services.geo_filter import ResourceFilters, ResourceView
from app.services.storage import BaseStore


class MapCenter(BaseModel):
    latitude: float
    longitude: float
    zoom: int


class MapMarker(BaseModel):
    id: int
    name: str
    type: str
    lat: float
    lng: float
    address: str
    hours: Optional[str] = None
    notes: Optional[str] = None


class MapView(BaseModel):
    city: City
    center: MapCenter
    enabled_types: List[str]
    open_now: bool
    count: int
    markers: List[MapMarker]


router = APIRouter(prefix="/api/map", tags=["Map"])


def parse_types(types: Optional[str]) -> ResourceFilters:
    """None enables every type; "" enables none; otherwise a comma list."""
    if types is None:
        return ResourceFilters()
    requested = [t.strip().lower() for t in types.split(",") if t.strip()]
    unknown = [t for t in requested if t not in RESOURCE_TYPES]
    if unknown:
        raise ValidationError(
            "Unknown resource type",
            errors=[{"field": "types", "message": f"unknown type(s): {', '.join(unknown)}"}],
        )
    return ResourceFilters.only(requested)


@router.get("", response_model=MapView)
def map_view(
    city: Optional[str] = Query(None, description="City to center on (default Atlanta)"),
    types: Optional[str] = Query(None, description="Comma-separated enabled types"),
    open_now: bool = Query(False, description="Hide resources whose hours mention 'closed'"),
    store: BaseStore = Depends(get_store),
):
    filters = parse_types(types)
    filters.open_now = open_now

    view = ResourceView(filters=filters)
    if city:
        view.select_city(city)
    # Unknown city: center stays on the default and the list is not scoped.
    view.load(store.get_by_city(city) if find_city(city) else store.get_all())

    markers = view.markers()
    return {
        "city": view.city,
        "center": view.center(),
        "enabled_types": filters.enabled_types(),
        "open_now": filters.open_now,
        "count": len(markers),
        "markers": markers,
    }
