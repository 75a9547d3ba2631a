"""Quick logging actions built on the local store."""

from dataclasses import dataclass
from datetime import UTC, datetime

from health_tracker.domain.entries import Entry, generate_entry_id
from health_tracker.domain.summaries import DailySummary
from health_tracker.services.store import HealthStore


@dataclass
class QuickLogService:
    """Creates entries and adjusts daily summary values."""

    store: HealthStore

    async def log_entry(  # noqa: PLR0913
        self,
        entry_type: str,
        day: str,
        subtype: str | None = None,
        notes: str = "",
        duration_minutes: int | None = None,
        payload: bytes | None = None,
        captured_at: str | None = None,
    ) -> Entry:
        """Create a new entry with a generated id and the current time."""
        entry = Entry(
            id=generate_entry_id(entry_type),
            type=entry_type,
            subtype=subtype,
            date=day,
            timestamp=datetime.now(tz=UTC).isoformat(),
            notes=notes.strip(),
            has_photo=payload is not None,
            duration_minutes=duration_minutes if entry_type == "workout" else None,
        )
        return await self.store.add_entry(entry, payload, captured_at)

    async def add_water(self, day: str, oz: int) -> DailySummary:
        """Add ``oz`` to the day's water total."""
        summary = await self.store.get_daily_summary(day)
        current = summary.water_oz or 0
        return await self.store.update_daily_summary(day, {"water_oz": current + oz})

    async def set_water(self, day: str, oz: int) -> DailySummary:
        return await self.store.update_daily_summary(day, {"water_oz": oz})

    async def set_weight(self, day: str, value: float, unit: str = "lbs") -> DailySummary:
        if value <= 0:
            raise ValueError("Weight must be positive")
        return await self.store.update_daily_summary(
            day, {"weight": {"value": value, "unit": unit}}
        )
