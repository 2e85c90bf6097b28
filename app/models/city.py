"""
Static city reference data.

The map can be centered on one of a fixed set of cities across the
south-eastern states. This list is compiled in; it is not stored in the
database and cannot be changed at runtime.
"""

from collections import OrderedDict
from typing import Dict, List, Optional

from pydantic import BaseModel


class City(BaseModel):
    name: str
    state: str
    latitude: float
    longitude: float
    zoom_level: int = 12


CITIES: List[City] = [
    City(name="Miami", state="FL", latitude=25.7617, longitude=-80.1918),
    City(name="Jacksonville", state="FL", latitude=30.3322, longitude=-81.6557),
    City(name="Atlanta", state="GA", latitude=33.7490, longitude=-84.3880),
    City(name="Columbus", state="GA", latitude=32.4610, longitude=-84.9877),
    City(name="Birmingham", state="AL", latitude=33.5186, longitude=-86.8104),
    City(name="Huntsville", state="AL", latitude=34.7304, longitude=-86.5861),
    City(name="Jackson", state="MS", latitude=32.2988, longitude=-90.1848),
    City(name="Gulfport", state="MS", latitude=30.3674, longitude=-89.0928),
    City(name="Nashville", state="TN", latitude=36.1627, longitude=-86.7816),
    City(name="Memphis", state="TN", latitude=35.1495, longitude=-90.0490),
    City(name="Charlotte", state="NC", latitude=35.2271, longitude=-80.8431),
    City(name="Raleigh", state="NC", latitude=35.7796, longitude=-78.6382),
    City(name="Charleston", state="SC", latitude=32.7876, longitude=-79.9403),
    City(name="Columbia", state="SC", latitude=34.0007, longitude=-81.0348),
]

DEFAULT_CITY_NAME = "Atlanta"

STATES = list(OrderedDict.fromkeys(city.state for city in CITIES))


def find_city(name: Optional[str]) -> Optional[City]:
    """Case-insensitive lookup by city name. Returns None when unknown."""
    if not name or not name.strip():
        return None
    wanted = name.strip().lower()
    for city in CITIES:
        if city.name.lower() == wanted:
            return city
    return None


def default_city() -> City:
    return find_city(DEFAULT_CITY_NAME)


def cities_by_state() -> Dict[str, List[City]]:
    """Cities grouped by state, states in list order."""
    grouped: Dict[str, List[City]] = OrderedDict()
    for city in CITIES:
        grouped.setdefault(city.state, []).append(city)
    return grouped
