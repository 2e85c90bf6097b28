from abc import ABC, abstractmethod
from typing import List, Optional
import logging

from app.models.resource import Resource, ResourceCreate, ResourceUpdate
from app.models.user import User
from app.services.geo_filter import scope_to_city

logger = logging.getLogger(__name__)


class BaseStore(ABC):
    """
    Persistence contract for resources and admin users.

    Contract:
    - Resource ids are integers assigned by the store on create, increasing
      per store.
    - update() applies only the fields present in the partial payload and
      returns None when the id is unknown.
    - delete() returns False when the id is unknown; it never raises for a
      missing record.
    - Every mutation touches exactly one record.
    - Backend failures propagate; callers turn them into a generic 500.
    """

    @abstractmethod
    def get_all(self) -> List[Resource]:
        raise NotImplementedError

    @abstractmethod
    def get_by_id(self, resource_id: int) -> Optional[Resource]:
        raise NotImplementedError

    @abstractmethod
    def create(self, payload: ResourceCreate) -> Resource:
        raise NotImplementedError

    @abstractmethod
    def update(self, resource_id: int, payload: ResourceUpdate) -> Optional[Resource]:
        raise NotImplementedError

    @abstractmethod
    def delete(self, resource_id: int) -> bool:
        raise NotImplementedError

    @abstractmethod
    def get_user(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    @abstractmethod
    def get_user_by_username(self, username: str) -> Optional[User]:
        raise NotImplementedError

    @abstractmethod
    def create_user(self, username: str, password_hash: str) -> User:
        """Raises ConflictError when the username is taken."""
        raise NotImplementedError

    def get_by_city(self, city_name: Optional[str]) -> List[Resource]:
        """Resources inside the city's bounding box; all of them for an unknown city."""
        return scope_to_city(self.get_all(), city_name)

    def ping(self) -> bool:
        """Lightweight connectivity check for the health endpoint."""
        self.get_all()
        return True
