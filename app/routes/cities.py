"""City reference data for the map's city picker."""

from typing import Dict, List

from fastapi import APIRouter

from app.models.city import CITIES, City, cities_by_state

router = APIRouter(prefix="/api/cities", tags=["Cities"])


@router.get("", response_model=List[City])
async def list_cities():
    return CITIES


@router.get("/by-state", response_model=Dict[str, List[City]])
async def list_cities_by_state():
    return cities_by_state()
