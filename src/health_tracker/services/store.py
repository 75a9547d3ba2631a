"""Local store interface shared by the application services."""

from typing import Protocol

from health_tracker.domain.entries import Entry, Photo, PhotoSyncCounts
from health_tracker.domain.exports import DayPackage
from health_tracker.domain.summaries import DailySummary


class HealthStore(Protocol):
    """Transactional persistence for entries, photos and per-day records."""

    async def add_entry(
        self, entry: Entry, payload: bytes | None = None, captured_at: str | None = None
    ) -> Entry:
        """Write an entry and its optional photo in one transaction."""

    async def get_entries_by_date(self, day: str) -> list[Entry]:
        """Return all entries for a day, unordered."""

    async def get_entries_by_date_range(self, start: str, end: str) -> list[Entry]:
        """Return all entries with ``start <= date <= end``."""

    async def get_entries_by_type(
        self, entry_type: str, start: str | None = None, end: str | None = None
    ) -> list[Entry]:
        """Return entries of a type, optionally limited to a day range."""

    async def delete_entry(self, entry_id: str) -> None:
        """Delete an entry and its photos."""

    async def get_daily_summary(self, day: str) -> DailySummary:
        """Return the stored summary or an empty one."""

    async def update_daily_summary(
        self, day: str, updates: dict[str, object]
    ) -> DailySummary:
        """Merge fields into a day's summary and return the result."""

    async def get_photos(self, entry_id: str) -> list[Photo]:
        """Return the photos owned by an entry."""

    async def get_photos_by_date_and_category(
        self, day: str, category: str
    ) -> list[Photo]:
        """Return a day's photos of one category."""

    async def get_body_photos(self, day: str) -> list[Photo]:
        """Return a day's body photos, with or without an owning entry."""

    async def add_body_photo(
        self,
        day: str,
        payload: bytes,
        photo_id: str | None = None,
        timestamp: str | None = None,
    ) -> Photo:
        """Store a progress photo attached directly to a day."""

    async def get_photo_sync_counts(self) -> PhotoSyncCounts:
        """Return photo counts per sync status and total payload size."""

    async def mark_photos_synced(self, day: str) -> int:
        """Advance a day's unsynced photos to synced."""

    async def bulk_delete_processed_photos(self) -> int:
        """Delete processed photos that are not body photos."""

    async def get_analysis(self, day: str) -> dict[str, object] | None:
        """Return the stored analysis for a day."""

    async def import_analysis(self, day: str, payload: dict[str, object]) -> None:
        """Store an analysis and mark the day's meal photos processed."""

    async def get_analysis_range(self, start: str, end: str) -> list[dict[str, object]]:
        """Return analyses with ``start <= date <= end``."""

    async def get_profile(self, key: str) -> object | None:
        """Return a profile value."""

    async def set_profile(self, key: str, value: object) -> None:
        """Replace a profile value."""

    async def get_meal_plan(self) -> dict[str, object] | None:
        """Return the most recently generated meal plan."""

    async def save_meal_plan(self, plan: dict[str, object]) -> None:
        """Store a meal plan keyed by its generation date."""

    async def export_day(self, day: str) -> DayPackage:
        """Assemble the export package for a day."""
