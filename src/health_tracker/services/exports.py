"""Day export into a single archive file."""

import json
import logging
from dataclasses import dataclass

from health_tracker.config import export_filename
from health_tracker.domain.entries import validate_day
from health_tracker.domain.errors import NothingToExportError
from health_tracker.domain.exports import ArchiveEntry, DayPackage, manifest_path
from health_tracker.services.archives import ArchiveCodec
from health_tracker.services.store import HealthStore

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DayExport:
    """A built day archive."""

    date: str
    filename: str
    content: bytes
    file_count: int
    photos_synced: int


@dataclass
class ExportService:
    """Builds day archives and advances photo sync status."""

    store: HealthStore
    codec: ArchiveCodec
    filename_prefix: str = "health"

    async def export_day(self, day: str) -> DayExport:
        """Build the archive for a day and mark its photos synced."""
        validate_day(day)
        package = await self.store.export_day(day)
        if package.is_empty():
            raise NothingToExportError(f"Nothing to export for {day}")
        entries = build_archive_entries(package)
        content = self.codec.write(entries)
        synced = await self.store.mark_photos_synced(day)
        _logger.info(
            "Exported day %s: files=%s bytes=%s photos_synced=%s",
            day,
            len(entries),
            len(content),
            synced,
        )
        return DayExport(
            date=day,
            filename=export_filename(self.filename_prefix, day),
            content=content,
            file_count=len(entries),
            photos_synced=synced,
        )


def build_archive_entries(package: DayPackage) -> list[ArchiveEntry]:
    """Serialize a day package: the manifest first, then the payloads."""
    manifest = json.dumps(package.manifest(), indent=2).encode("utf-8")
    entries = [ArchiveEntry(path=manifest_path(package.date), data=manifest)]
    entries.extend(
        ArchiveEntry(path=path, data=data) for path, data in package.payloads.items()
    )
    return entries
