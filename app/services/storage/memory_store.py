"""
In-memory store. Data lives for the lifetime of the process only.
"""

from threading import Lock
from typing import Dict, Iterable, List, Optional
import logging

from app.core.errors import ConflictError
from app.models.resource import Resource, ResourceCreate, ResourceUpdate
from app.models.user import User
from .base import BaseStore

logger = logging.getLogger(__name__)


class MemoryStore(BaseStore):
    """
    Dict-backed store with per-instance sequential ids.

    FastAPI runs sync handlers on a thread pool, so id assignment and
    writes happen under a lock.
    """

    def __init__(self, seed: Optional[Iterable[ResourceCreate]] = None):
        self._resources: Dict[int, Resource] = {}
        self._users: Dict[int, User] = {}
        self._next_resource_id = 1
        self._next_user_id = 1
        self._lock = Lock()

        for payload in seed or []:
            self.create(payload)

    def get_all(self) -> List[Resource]:
        with self._lock:
            return list(self._resources.values())

    def get_by_id(self, resource_id: int) -> Optional[Resource]:
        return self._resources.get(resource_id)

    def create(self, payload: ResourceCreate) -> Resource:
        with self._lock:
            resource_id = self._next_resource_id
            self._next_resource_id += 1
            resource = Resource(id=resource_id, **payload.to_record())
            self._resources[resource_id] = resource
        logger.info(f"Resource created: {resource_id} ({resource.type.value})")
        return resource

    def update(self, resource_id: int, payload: ResourceUpdate) -> Optional[Resource]:
        with self._lock:
            existing = self._resources.get(resource_id)
            if existing is None:
                return None
            changes = payload.to_changes()
            if not changes:
                return existing
            updated = Resource(**{**existing.model_dump(), **changes})
            self._resources[resource_id] = updated
        logger.info(f"Resource updated: {resource_id} fields={sorted(changes)}")
        return updated

    def delete(self, resource_id: int) -> bool:
        with self._lock:
            removed = self._resources.pop(resource_id, None)
        if removed is not None:
            logger.info(f"Resource deleted: {resource_id}")
        return removed is not None

    def get_user(self, user_id: int) -> Optional[User]:
        return self._users.get(user_id)

    def get_user_by_username(self, username: str) -> Optional[User]:
        with self._lock:
            users = list(self._users.values())
        for user in users:
            if user.username == username:
                return user
        return None

    def create_user(self, username: str, password_hash: str) -> User:
        with self._lock:
            if any(u.username == username for u in self._users.values()):
                raise ConflictError(f"Username '{username}' already exists")
            user = User(id=self._next_user_id, username=username, password=password_hash)
            self._users[user.id] = user
            self._next_user_id += 1
        logger.info(f"User created: {user.id} ({username})")
        return user
