"""
Firestore-backed store.

Collections:
- resources/{id}: name, type, address, latitude, longitude (decimal text), hours, notes
- users/{id}: username, password
- usernames/{quoted username}: {"user_id": id}, reserves the name
- counters/{resources|users}: {"value": last assigned id}
"""

from typing import List, Optional
import logging
from urllib.parse import quote

from firebase_admin import firestore

from app.core.errors import ConflictError
from app.models.resource import Resource, ResourceCreate, ResourceUpdate
from app.models.user import User
from app.utils.firestore_helpers import (
    claim_next_value,
    counter_ref,
    doc_to_dict,
    next_sequence_value,
    where_filter,
)
from .base import BaseStore

logger = logging.getLogger(__name__)

RESOURCES = "resources"
USERS = "users"
USERNAMES = "usernames"


class FirestoreStore(BaseStore):

    def __init__(self, db=None):
        if db is None:
            from app.config.firebase import get_db
            db = get_db()
        self.db = db

    def get_all(self) -> List[Resource]:
        resources = []
        for doc in self.db.collection(RESOURCES).stream():
            data = doc_to_dict(doc)
            if data is not None:
                resources.append(Resource(**data))
        return sorted(resources, key=lambda r: r.id)

    def get_by_id(self, resource_id: int) -> Optional[Resource]:
        data = doc_to_dict(self.db.collection(RESOURCES).document(str(resource_id)).get())
        return Resource(**data) if data is not None else None

    def create(self, payload: ResourceCreate) -> Resource:
        resource_id = next_sequence_value(self.db, RESOURCES)
        record = payload.to_record()
        self.db.collection(RESOURCES).document(str(resource_id)).set(record)
        logger.info(f"Resource created: {resource_id} ({record['type']})")
        return Resource(id=resource_id, **record)

    def update(self, resource_id: int, payload: ResourceUpdate) -> Optional[Resource]:
        doc_ref = self.db.collection(RESOURCES).document(str(resource_id))
        existing = doc_to_dict(doc_ref.get())
        if existing is None:
            return None
        changes = payload.to_changes()
        if not changes:
            return Resource(**existing)
        doc_ref.update(changes)
        logger.info(f"Resource updated: {resource_id} fields={sorted(changes)}")
        return Resource(**{**existing, **changes})

    def delete(self, resource_id: int) -> bool:
        doc_ref = self.db.collection(RESOURCES).document(str(resource_id))
        if not doc_ref.get().exists:
            return False
        doc_ref.delete()
        logger.info(f"Resource deleted: {resource_id}")
        return True

    def get_user(self, user_id: int) -> Optional[User]:
        data = doc_to_dict(self.db.collection(USERS).document(str(user_id)).get())
        return User(**data) if data is not None else None

    def get_user_by_username(self, username: str) -> Optional[User]:
        query = where_filter(self.db.collection(USERS), "username", "==", username).limit(1)
        for doc in query.stream():
            return User(**doc_to_dict(doc))
        return None

    def create_user(self, username: str, password_hash: str) -> User:
        # Accounts created before the usernames index existed are only
        # visible to the query.
        if self.get_user_by_username(username) is not None:
            raise ConflictError(f"Username '{username}' already exists")

        username_ref = self.db.collection(USERNAMES).document(quote(username, safe=""))
        users_counter = counter_ref(self.db, USERS)

        @firestore.transactional
        def insert(transaction) -> int:
            # All reads precede writes; a concurrent insert of the same
            # username makes one of the two transactions retry and fail here.
            if username_ref.get(transaction=transaction).exists:
                raise ConflictError(f"Username '{username}' already exists")
            user_id = claim_next_value(transaction, users_counter)
            transaction.set(
                self.db.collection(USERS).document(str(user_id)),
                {"username": username, "password": password_hash},
            )
            transaction.set(username_ref, {"user_id": user_id})
            return user_id

        user_id = insert(self.db.transaction())
        logger.info(f"User created: {user_id} ({username})")
        return User(id=user_id, username=username, password=password_hash)

    def ping(self) -> bool:
        list(self.db.collection(RESOURCES).limit(1).stream())
        return True
