"""Tests for photo storage reporting and cleanup."""

from health_tracker.adapters.sqlite_health_store import SQLiteHealthStore
from health_tracker.services.storage import StorageService
from tests.conftest import make_entry, run


def test_storage_info_reports_counts_and_megabytes(store: SQLiteHealthStore) -> None:
    run(store.add_entry(make_entry(), b"x" * (3 * 1024 * 1024)))
    run(store.add_body_photo("2024-01-05", b"y" * (512 * 1024)))
    run(store.mark_photos_synced("2024-01-05"))

    info = run(StorageService(store).get_storage_info())

    assert (info.unsynced, info.synced, info.processed) == (0, 2, 0)
    assert info.total_size_mb == 3.5


def test_clear_processed_photos(store: SQLiteHealthStore) -> None:
    service = StorageService(store)
    run(store.add_entry(make_entry(), b"meal"))
    run(store.add_entry(make_entry("bodyPhoto_1", "bodyPhoto", subtype="body"), b"b"))
    run(store.import_analysis("2024-01-05", {}))

    assert run(service.clear_processed_photos()) == 1
    assert run(service.clear_processed_photos()) == 0
    assert run(service.get_storage_info()).unsynced == 1
