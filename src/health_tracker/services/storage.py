"""Photo storage usage and cleanup."""

import logging
from dataclasses import dataclass

from health_tracker.services.store import HealthStore

_logger = logging.getLogger(__name__)

_BYTES_PER_MB = 1024 * 1024


@dataclass(frozen=True)
class StorageInfo:
    """Photo counts per sync status and total size."""

    unsynced: int
    synced: int
    processed: int
    total_size_mb: float


@dataclass
class StorageService:
    """Reports and frees photo storage."""

    store: HealthStore

    async def get_storage_info(self) -> StorageInfo:
        counts = await self.store.get_photo_sync_counts()
        return StorageInfo(
            unsynced=counts.unsynced,
            synced=counts.synced,
            processed=counts.processed,
            total_size_mb=round(counts.total_size / _BYTES_PER_MB, 1),
        )

    async def clear_processed_photos(self) -> int:
        """Delete processed meal photos and return how many were removed."""
        count = await self.store.bulk_delete_processed_photos()
        _logger.info("Cleared %s processed photo%s", count, "" if count == 1 else "s")
        return count
