from unittest import mock

from app.services.storage import MemoryStore


def test_username_lookup_reads_under_lock():
    store = MemoryStore()
    store.create_user("admin_ga", "hash.salt")
    store._lock = mock.MagicMock()

    assert store.get_user_by_username("admin_ga").username == "admin_ga"
    assert store.get_user_by_username("admin_fl") is None
    assert store._lock.__enter__.call_count == 2
