"""
City scoping and map view filtering.

CITY SCOPING:
- A resource belongs to a city when both |lat - city.lat| and
  |lng - city.lng| are strictly below 0.3 degrees.
- This is a rectangular box of roughly 20 miles, NOT a geodesic radius.
  It is deliberately kept as a coordinate-difference check.
- An unknown city name fails open: the unscoped list is returned.

VIEW FILTERING:
- A resource is visible iff its type is enabled AND (the open-now filter
  is off OR its hours text looks open).
- The open-now check is a text heuristic, not an hours parser (see
  is_probably_open).
- No sorting or pagination; input order is preserved.
"""

from typing import Dict, Iterable, List, Optional
import logging

from app.models.city import City, default_city, find_city
from app.models.resource import RESOURCE_TYPES, Resource, ResourceType

logger = logging.getLogger(__name__)

CITY_RADIUS_DEGREES = 0.3


def within_city(resource: Resource, city: City, threshold: float = CITY_RADIUS_DEGREES) -> bool:
    return (
        abs(resource.lat - city.latitude) < threshold
        and abs(resource.lng - city.longitude) < threshold
    )


def scope_to_city(resources: Iterable[Resource], city_name: Optional[str]) -> List[Resource]:
    """Resources inside the named city's box; every resource when the city is unknown."""
    resources = list(resources)
    city = find_city(city_name)
    if city is None:
        logger.info(f"Unknown city '{city_name}', returning all {len(resources)} resources")
        return resources
    return [r for r in resources if within_city(r, city)]


def is_probably_open(hours: Optional[str]) -> bool:
    """
    Approximate "open now" check over free-text hours.

    Missing hours count as open, as does anything containing "24/7" or not
    mentioning "closed". Time of day is NOT considered.
    """
    if not hours:
        return True
    text = hours.lower()
    return "24/7" in text or "closed" not in text


class ResourceFilters:
    """Type toggles plus the open-now switch. All types start enabled."""

    def __init__(self, types: Optional[Dict[str, bool]] = None, open_now: bool = False):
        self.types: Dict[str, bool] = {t: True for t in RESOURCE_TYPES}
        if types:
            for key, enabled in types.items():
                self.types[ResourceType(key).value] = bool(enabled)
        self.open_now = open_now

    @classmethod
    def only(cls, enabled: Iterable[str], open_now: bool = False) -> "ResourceFilters":
        enabled = {ResourceType(t).value for t in enabled}
        return cls({t: t in enabled for t in RESOURCE_TYPES}, open_now=open_now)

    def toggle_type(self, resource_type: str) -> None:
        key = ResourceType(resource_type).value
        self.types[key] = not self.types[key]

    def toggle_open_now(self) -> None:
        self.open_now = not self.open_now

    def is_enabled(self, resource_type: str) -> bool:
        return self.types.get(resource_type, False)

    def enabled_types(self) -> List[str]:
        return [t for t in RESOURCE_TYPES if self.types[t]]


def apply_filters(resources: Iterable[Resource], filters: ResourceFilters) -> List[Resource]:
    visible = []
    for resource in resources:
        if not filters.is_enabled(resource.type.value):
            continue
        if filters.open_now and not is_probably_open(resource.hours):
            continue
        visible.append(resource)
    return visible


class ResourceView:
    """
    Map view state: selected city plus filters over a loaded resource list.

    Mirrors what the browser holds. `load()` replaces the list (as after a
    refetch), `visible()` derives the filtered subset and `markers()`
    shapes it for the map layer.
    """

    def __init__(self, resources: Iterable[Resource] = (), city: Optional[City] = None,
                 filters: Optional[ResourceFilters] = None):
        self.resources = list(resources)
        self.city = city or default_city()
        self.filters = filters or ResourceFilters()

    def load(self, resources: Iterable[Resource]) -> None:
        self.resources = list(resources)

    def select_city(self, city_name: str) -> City:
        city = find_city(city_name)
        if city is not None:
            self.city = city
        return self.city

    def visible(self) -> List[Resource]:
        return apply_filters(self.resources, self.filters)

    def center(self) -> Dict:
        return {
            "latitude": self.city.latitude,
            "longitude": self.city.longitude,
            "zoom": self.city.zoom_level,
        }

    def markers(self) -> List[Dict]:
        return [
            {
                "id": r.id,
                "name": r.name,
                "type": r.type.value,
                "lat": r.lat,
                "lng": r.lng,
                "address": r.address,
                "hours": r.hours,
                "notes": r.notes,
            }
            for r in self.visible()
        ]
