"""
Firestore query helpers shared by the Firestore-backed stores.

NOTE: For firebase_admin SDK, we use positional arguments which still work.
The deprecation warning is just a warning - the functionality is still supported.
"""

from typing import Any, Dict, Optional

from firebase_admin import firestore


def where_filter(query, field_path: str, op_string: str, value):
    """
    Usage:
        query = where_filter(collection, "username", "==", "admin")
    """
    return query.where(field_path, op_string, value)


def counter_ref(db, name: str):
    return db.collection("counters").document(name)


def claim_next_value(transaction, ref) -> int:
    """Read the counter at `ref` and stage its increment on `transaction`."""
    snapshot = ref.get(transaction=transaction)
    current = (snapshot.to_dict() or {}).get("value", 0) if snapshot.exists else 0
    transaction.set(ref, {"value": current + 1})
    return current + 1


def next_sequence_value(db, name: str) -> int:
    """
    Increment and return the integer counter stored at counters/{name}.

    Runs inside a Firestore transaction so two concurrent creates never
    receive the same id.
    """
    ref = counter_ref(db, name)

    @firestore.transactional
    def increment(transaction) -> int:
        return claim_next_value(transaction, ref)

    return increment(db.transaction())


def doc_to_dict(doc) -> Optional[Dict[str, Any]]:
    """Snapshot data with the integer document id folded in, or None if missing."""
    if not doc.exists:
        return None
    data = doc.to_dict() or {}
    data["id"] = int(doc.id)
    return data
