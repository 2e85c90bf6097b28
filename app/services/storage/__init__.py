"""
Resource/user persistence.

Two interchangeable backends implement BaseStore:
- MemoryStore: process-local dicts (default)
- FirestoreStore: firebase-admin Firestore collections
"""

import logging

from app.core.settings import settings
from .base import BaseStore
from .memory_store import MemoryStore
from .sample_data import sample_resources

logger = logging.getLogger(__name__)


def build_store() -> BaseStore:
    """
    Construct the store selected by STORE_BACKEND.

    Unlike the old module-level singleton, the caller owns the instance and
    hands it to the app factory.
    """
    backend = (settings.STORE_BACKEND or "memory").lower()

    if backend == "firestore":
        from .firestore_store import FirestoreStore
        logger.info("Store backend initialized: firestore")
        return FirestoreStore()

    if backend != "memory":
        raise ValueError(f"Unknown STORE_BACKEND '{settings.STORE_BACKEND}' (expected 'memory' or 'firestore')")

    logger.info("Store backend initialized: memory")
    return MemoryStore(seed=sample_resources() if settings.SEED_SAMPLE_DATA else None)


__all__ = ["BaseStore", "MemoryStore", "build_store"]
