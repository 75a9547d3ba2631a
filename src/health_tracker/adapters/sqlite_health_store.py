"""SQLite implementation of the local health store."""

import asyncio
import json
import logging
from dataclasses import replace
from datetime import UTC, datetime

import aiosqlite

from health_tracker.adapters.sqlite_connection import AsyncSQLiteConnection
from health_tracker.adapters.sqlite_schema import create_schema
from health_tracker.domain.entries import (
    PROCESSED,
    SYNCED,
    UNSYNCED,
    Entry,
    Photo,
    PhotoSyncCounts,
    photo_for_entry,
    validate_day,
)
from health_tracker.domain.exports import (
    DayPackage,
    body_pose,
    entry_photo_path,
    progress_photo_path,
)
from health_tracker.domain.summaries import DailySummary, Weight
from health_tracker.services.store import HealthStore

_logger = logging.getLogger(__name__)

_ENTRY_COLUMNS = (
    "id, type, subtype, date, timestamp, notes, has_photo, duration_minutes"
)
_PHOTO_COLUMNS = "id, entry_id, date, category, sync_status, payload, timestamp"


class SQLiteHealthStore(HealthStore):
    """Local store backed by a single SQLite file.

    The schema is created on first use. Every public method runs in its own
    transaction; multi-table writes either fully apply or not at all.
    """

    def __init__(self, connection: AsyncSQLiteConnection) -> None:
        self._conn = connection
        self._schema_ready = False
        self._schema_lock: asyncio.Lock | None = None

    @classmethod
    def from_path(cls, db_path: str) -> "SQLiteHealthStore":
        return cls(AsyncSQLiteConnection(db_path))

    async def initialize(self) -> None:
        """Create the schema once per store instance."""
        if self._schema_ready:
            return
        if self._schema_lock is None:
            self._schema_lock = asyncio.Lock()
        async with self._schema_lock:
            if self._schema_ready:
                return
            async with self._conn.transaction() as conn:
                await create_schema(conn)
            self._schema_ready = True

    # --- Entries ---

    async def add_entry(
        self, entry: Entry, payload: bytes | None = None, captured_at: str | None = None
    ) -> Entry:
        """Write the entry and, when a payload is given, its photo.

        An existing entry with the same id is replaced together with its
        previous photos.
        """
        await self.initialize()
        stored = _with_photo_flag(entry, payload is not None)
        async with self._conn.transaction() as conn:
            await conn.execute("DELETE FROM photos WHERE entry_id = ?", (stored.id,))
            await conn.execute(
                f"INSERT OR REPLACE INTO entries ({_ENTRY_COLUMNS}) "
                "VALUES (?, ?, ?, ?, ?, ?, ?, ?)",
                (
                    stored.id,
                    stored.type,
                    stored.subtype,
                    stored.date,
                    stored.timestamp,
                    stored.notes,
                    int(stored.has_photo),
                    stored.duration_minutes,
                ),
            )
            if payload is not None:
                await _insert_photo(conn, photo_for_entry(stored, payload, captured_at))
        return stored

    async def get_entries_by_date(self, day: str) -> list[Entry]:
        await self.initialize()
        async with self._conn.transaction() as conn:
            return await _fetch_entries(conn, "date = ?", (day,))

    async def get_entries_by_date_range(self, start: str, end: str) -> list[Entry]:
        await self.initialize()
        async with self._conn.transaction() as conn:
            return await _fetch_entries(conn, "date BETWEEN ? AND ?", (start, end))

    async def get_entries_by_type(
        self, entry_type: str, start: str | None = None, end: str | None = None
    ) -> list[Entry]:
        """Return entries of a type, scoped to a day range when both ends are set."""
        if (start is None) != (end is None):
            raise ValueError("Provide both start and end, or neither")
        await self.initialize()
        async with self._conn.transaction() as conn:
            if start is not None and end is not None:
                return await _fetch_entries(
                    conn,
                    "date BETWEEN ? AND ? AND type = ?",
                    (start, end, entry_type),
                    index="idx_entries_date_type",
                )
            return await _fetch_entries(conn, "type = ?", (entry_type,))

    async def delete_entry(self, entry_id: str) -> None:
        await self.initialize()
        async with self._conn.transaction() as conn:
            await conn.execute("DELETE FROM photos WHERE entry_id = ?", (entry_id,))
            await conn.execute("DELETE FROM entries WHERE id = ?", (entry_id,))

    # --- Daily summary ---

    async def get_daily_summary(self, day: str) -> DailySummary:
        await self.initialize()
        async with self._conn.transaction() as conn:
            return await _fetch_summary(conn, day)

    async def update_daily_summary(
        self, day: str, updates: dict[str, object]
    ) -> DailySummary:
        """Read, merge and write a day's summary. Last write wins per field."""
        validate_day(day)
        await self.initialize()
        async with self._conn.transaction() as conn:
            existing = await _fetch_summary(conn, day)
            merged = existing.merged(updates)
            await conn.execute(
                "INSERT OR REPLACE INTO daily_summary "
                "(date, water_oz, weight, sleep, notes) VALUES (?, ?, ?, ?, ?)",
                (
                    day,
                    merged.water_oz,
                    _dump(merged.weight.to_dict()) if merged.weight else None,
                    _dump(merged.sleep),
                    merged.notes,
                ),
            )
        return merged

    # --- Photos ---

    async def get_photos(self, entry_id: str) -> list[Photo]:
        await self.initialize()
        async with self._conn.transaction() as conn:
            return await _fetch_photos(conn, "entry_id = ?", (entry_id,))

    async def get_photos_by_date_and_category(
        self, day: str, category: str
    ) -> list[Photo]:
        await self.initialize()
        async with self._conn.transaction() as conn:
            return await _fetch_photos(
                conn, "date = ? AND category = ?", (day, category)
            )

    async def get_body_photos(self, day: str) -> list[Photo]:
        return await self.get_photos_by_date_and_category(day, "body")

    async def add_body_photo(
        self,
        day: str,
        payload: bytes,
        photo_id: str | None = None,
        timestamp: str | None = None,
    ) -> Photo:
        """Store a progress photo that has no owning entry."""
        validate_day(day)
        await self.initialize()
        photo = Photo(
            id=photo_id or f"photo_body_{day}",
            entry_id=None,
            date=day,
            category="body",
            sync_status=UNSYNCED,
            payload=payload,
            timestamp=timestamp or datetime.now(tz=UTC).isoformat(),
        )
        async with self._conn.transaction() as conn:
            await _insert_photo(conn, photo)
        return photo

    async def get_photo_sync_counts(self) -> PhotoSyncCounts:
        await self.initialize()
        async with self._conn.transaction() as conn:
            rows = await conn.execute_fetchall(
                "SELECT sync_status, COUNT(*) AS count, "
                "COALESCE(SUM(LENGTH(payload)), 0) AS size "
                "FROM photos GROUP BY sync_status"
            )
        counts = {UNSYNCED: 0, SYNCED: 0, PROCESSED: 0}
        total_size = 0
        for row in rows:
            counts[row["sync_status"]] = int(row["count"])
            total_size += int(row["size"])
        return PhotoSyncCounts(
            unsynced=counts[UNSYNCED],
            synced=counts[SYNCED],
            processed=counts[PROCESSED],
            total_size=total_size,
        )

    async def mark_photos_synced(self, day: str) -> int:
        """Move a day's unsynced photos to synced; other statuses are untouched."""
        await self.initialize()
        async with self._conn.transaction() as conn:
            cursor = await conn.execute(
                "UPDATE photos SET sync_status = ? WHERE date = ? AND sync_status = ?",
                (SYNCED, day, UNSYNCED),
            )
            return cursor.rowcount

    async def bulk_delete_processed_photos(self) -> int:
        """Delete processed photos, always keeping body photos."""
        await self.initialize()
        async with self._conn.transaction() as conn:
            cursor = await conn.execute(
                "DELETE FROM photos WHERE sync_status = ? AND category != 'body'",
                (PROCESSED,),
            )
            deleted = cursor.rowcount
        _logger.info("Deleted %s processed photos", deleted)
        return deleted

    # --- Analysis ---

    async def get_analysis(self, day: str) -> dict[str, object] | None:
        await self.initialize()
        async with self._conn.transaction() as conn:
            rows = await conn.execute_fetchall(
                "SELECT data FROM analysis WHERE date = ?", (day,)
            )
        if not rows:
            return None
        return json.loads(rows[0]["data"])

    async def import_analysis(self, day: str, payload: dict[str, object]) -> None:
        """Store the analysis verbatim and mark the day's meal photos processed."""
        validate_day(day)
        await self.initialize()
        record = {**payload, "date": day}
        async with self._conn.transaction() as conn:
            await conn.execute(
                "INSERT OR REPLACE INTO analysis (date, data) VALUES (?, ?)",
                (day, _dump(record)),
            )
            await conn.execute(
                "UPDATE photos SET sync_status = ? "
                "WHERE date = ? AND category = 'meal' AND sync_status IN (?, ?)",
                (PROCESSED, day, UNSYNCED, SYNCED),
            )

    async def get_analysis_range(self, start: str, end: str) -> list[dict[str, object]]:
        await self.initialize()
        async with self._conn.transaction() as conn:
            rows = await conn.execute_fetchall(
                "SELECT data FROM analysis WHERE date BETWEEN ? AND ? ORDER BY date",
                (start, end),
            )
        return [json.loads(row["data"]) for row in rows]

    # --- Profile and meal plans ---

    async def get_profile(self, key: str) -> object | None:
        await self.initialize()
        async with self._conn.transaction() as conn:
            rows = await conn.execute_fetchall(
                "SELECT value FROM profile WHERE key = ?", (key,)
            )
        if not rows or rows[0]["value"] is None:
            return None
        return json.loads(rows[0]["value"])

    async def set_profile(self, key: str, value: object) -> None:
        await self.initialize()
        async with self._conn.transaction() as conn:
            await conn.execute(
                "INSERT OR REPLACE INTO profile (key, value) VALUES (?, ?)",
                (key, _dump(value)),
            )

    async def get_meal_plan(self) -> dict[str, object] | None:
        """Return the plan with the greatest generation date key."""
        await self.initialize()
        async with self._conn.transaction() as conn:
            rows = await conn.execute_fetchall(
                "SELECT data FROM meal_plan ORDER BY generated_date DESC LIMIT 1"
            )
        if not rows:
            return None
        return json.loads(rows[0]["data"])

    async def save_meal_plan(self, plan: dict[str, object]) -> None:
        generated = plan.get("generatedDate")
        if not generated:
            raise ValueError("Meal plan requires a generatedDate")
        await self.initialize()
        async with self._conn.transaction() as conn:
            await conn.execute(
                "INSERT OR REPLACE INTO meal_plan (generated_date, data) VALUES (?, ?)",
                (str(generated), _dump(plan)),
            )

    # --- Export ---

    async def export_day(self, day: str) -> DayPackage:
        """Assemble the day's entries, summary and photo payloads.

        Entry photos are keyed under ``daily/<date>/photos/<id>.jpg``; body
        photos under ``progress/<date>/face.jpg`` or ``body.jpg``.
        """
        await self.initialize()
        async with self._conn.transaction() as conn:
            entries = await _fetch_entries(conn, "date = ?", (day,))
            summary = await _fetch_summary(conn, day)
            payloads: dict[str, bytes] = {}
            for entry in entries:
                if entry.type == "bodyPhoto":
                    continue
                for photo in await _fetch_photos(conn, "entry_id = ?", (entry.id,)):
                    payloads[entry_photo_path(day, entry.id)] = photo.payload
            body_photos = await _fetch_photos(
                conn, "date = ? AND category = 'body'", (day,)
            )
        for photo in body_photos:
            path = progress_photo_path(day, body_pose(photo.id, photo.entry_id))
            if path in payloads:
                _logger.warning("Body photo %s replaces an earlier %s", photo.id, path)
            payloads[path] = photo.payload
        return DayPackage(date=day, entries=entries, summary=summary, payloads=payloads)


def _with_photo_flag(entry: Entry, has_photo: bool) -> Entry:
    if entry.has_photo == has_photo:
        return entry
    return replace(entry, has_photo=has_photo)


async def _insert_photo(conn: aiosqlite.Connection, photo: Photo) -> None:
    await conn.execute(
        f"INSERT OR REPLACE INTO photos ({_PHOTO_COLUMNS}) "
        "VALUES (?, ?, ?, ?, ?, ?, ?)",
        (
            photo.id,
            photo.entry_id,
            photo.date,
            photo.category,
            photo.sync_status,
            photo.payload,
            photo.timestamp,
        ),
    )


async def _fetch_entries(
    conn: aiosqlite.Connection,
    where: str,
    params: tuple[object, ...],
    index: str | None = None,
) -> list[Entry]:
    source = f"entries INDEXED BY {index}" if index else "entries"
    rows = await conn.execute_fetchall(
        f"SELECT {_ENTRY_COLUMNS} FROM {source} WHERE {where}", params
    )
    return [_row_to_entry(row) for row in rows]


async def _fetch_photos(
    conn: aiosqlite.Connection, where: str, params: tuple[object, ...]
) -> list[Photo]:
    rows = await conn.execute_fetchall(
        f"SELECT {_PHOTO_COLUMNS} FROM photos WHERE {where}", params
    )
    return [_row_to_photo(row) for row in rows]


async def _fetch_summary(conn: aiosqlite.Connection, day: str) -> DailySummary:
    rows = await conn.execute_fetchall(
        "SELECT date, water_oz, weight, sleep, notes FROM daily_summary WHERE date = ?",
        (day,),
    )
    if not rows:
        return DailySummary(date=day)
    row = rows[0]
    return DailySummary(
        date=row["date"],
        water_oz=row["water_oz"],
        weight=Weight.from_value(_load(row["weight"])),
        sleep=_load(row["sleep"]),
        notes=row["notes"],
    )


def _row_to_entry(row: aiosqlite.Row) -> Entry:
    return Entry(
        id=row["id"],
        type=row["type"],
        subtype=row["subtype"],
        date=row["date"],
        timestamp=row["timestamp"],
        notes=row["notes"] or "",
        has_photo=bool(row["has_photo"]),
        duration_minutes=row["duration_minutes"],
    )


def _row_to_photo(row: aiosqlite.Row) -> Photo:
    return Photo(
        id=row["id"],
        entry_id=row["entry_id"],
        date=row["date"],
        category=row["category"],
        sync_status=row["sync_status"],
        payload=bytes(row["payload"]),
        timestamp=row["timestamp"],
    )


def _dump(value: object) -> str | None:
    if value is None:
        return None
    return json.dumps(value)


def _load(raw: str | None) -> object | None:
    if raw is None:
        return None
    return json.loads(raw)
