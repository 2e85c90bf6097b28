"""
Resource CRUD endpoints.

Reads are public. Create, update and delete require an admin session; the
session guard runs as a route dependency, before the handler touches the
store.
"""

from typing import List, Optional
import logging
import re

from fastapi import APIRouter, Depends, Query, Response, status

from app.core.deps import get_store, require_user
from app.core.errors import NotFoundError, ValidationError
from app.models.resource import Resource, ResourceCreate, ResourceUpdate
from app.services.storage import BaseStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/resources", tags=["Resources"])

RESOURCE_NOT_FOUND = "Resource not found"

RESOURCE_ID_PATTERN = re.compile(r"-?[0-9]+")


def parse_resource_id(resource_id: str) -> int:
    # int() alone would also accept "+1", " 1" and "0_1".
    if not RESOURCE_ID_PATTERN.fullmatch(resource_id):
        raise ValidationError("Invalid resource ID")
    return int(resource_id)


@router.get("", response_model=List[Resource])
def list_resources(
    city: Optional[str] = Query(None, description="City name; unknown cities return every resource"),
    store: BaseStore = Depends(get_store),
):
    """
    List resources, optionally scoped to a city's bounding box.

    An unrecognised city name is not an error: the full list is returned.
    """
    if city:
        return store.get_by_city(city)
    return store.get_all()


@router.get("/{resource_id}", response_model=Resource)
def get_resource(resource_id: str, store: BaseStore = Depends(get_store)):
    resource = store.get_by_id(parse_resource_id(resource_id))
    if resource is None:
        raise NotFoundError(RESOURCE_NOT_FOUND)
    return resource


@router.post(
    "",
    response_model=Resource,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_user)],
)
def create_resource(payload: ResourceCreate, store: BaseStore = Depends(get_store)):
    return store.create(payload)


@router.patch("/{resource_id}", response_model=Resource, dependencies=[Depends(require_user)])
def update_resource(resource_id: str, payload: ResourceUpdate, store: BaseStore = Depends(get_store)):
    """Apply a partial update. Fields absent from the body keep their values."""
    updated = store.update(parse_resource_id(resource_id), payload)
    if updated is None:
        raise NotFoundError(RESOURCE_NOT_FOUND)
    return updated


@router.delete(
    "/{resource_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_user)],
)
def delete_resource(resource_id: str, store: BaseStore = Depends(get_store)):
    if not store.delete(parse_resource_id(resource_id)):
        raise NotFoundError(RESOURCE_NOT_FOUND)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
