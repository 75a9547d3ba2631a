"""Importing archives, analysis files and meal plans into the store."""

import json
import logging
from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import Literal

from health_tracker.domain.entries import Entry, validate_day
from health_tracker.domain.errors import ImportFormatError, ImportValidationError
from health_tracker.domain.exports import (
    MANIFEST_FILENAME,
    ArchiveEntry,
    is_image_path,
)
from health_tracker.domain.summaries import DailySummary
from health_tracker.services.archives import ArchiveCodec
from health_tracker.services.photo_matching import resolve_photo
from health_tracker.services.store import HealthStore

_logger = logging.getLogger(__name__)

_ZIP_MAGIC = b"PK\x03\x04"
_MANIFEST_SUMMARY_FIELDS = ("water_oz", "weight", "sleep", "notes")

ImportKind = Literal["archive", "analysis", "meal_plan"]


@dataclass(frozen=True)
class ArchiveImportResult:
    """Outcome of merging one exported day back into the store."""

    date: str
    imported: int
    skipped: int
    photos: int


@dataclass(frozen=True)
class ImportOutcome:
    """Outcome of a dispatched import."""

    kind: ImportKind
    date: str | None
    imported: int


@dataclass
class ImportService:
    """Routes picked files to the matching import and writes the results."""

    store: HealthStore
    codec: ArchiveCodec

    async def import_file(self, filename: str, content: bytes) -> ImportOutcome:
        """Import a file by extension and content shape."""
        if filename.lower().endswith(".zip") or content.startswith(_ZIP_MAGIC):
            result = await self.import_archive(content)
            return ImportOutcome(
                kind="archive", date=result.date, imported=result.imported
            )

        data = _parse_json_object(content)
        if "date" in data and "entries" in data:
            day = await self.import_analysis(data)
            return ImportOutcome(kind="analysis", date=day, imported=1)
        if ("generatedDate" in data or "generated" in data) and "days" in data:
            plan = await self.import_meal_plan(data)
            return ImportOutcome(
                kind="meal_plan", date=str(plan["generatedDate"]), imported=1
            )
        raise ImportFormatError(f"Unrecognized import file: {filename}")

    async def import_archive(self, content: bytes) -> ArchiveImportResult:
        """Unpack a day archive and merge it into the store."""
        return await self.merge_archive_entries(self.codec.read(content))

    async def merge_archive_entries(
        self, entries: list[ArchiveEntry]
    ) -> ArchiveImportResult:
        """Rebuild entries, photos and the summary from archive members.

        Summary fields are checked before anything is written. Entries that
        fail to parse are skipped. Entries whose photo cannot be found are
        written without one.
        """
        manifest = _find_manifest(entries)
        day = str(manifest["date"])
        raw_entries = manifest["entries"]
        updates = _checked_summary_updates(day, manifest)
        images = {entry.path: entry.data for entry in entries if is_image_path(entry.path)}

        imported = 0
        skipped = 0
        photos = 0
        for raw in raw_entries:
            try:
                entry = Entry.from_dict(raw)
            except (KeyError, TypeError, ValueError, AttributeError):
                _logger.warning("Skipping unreadable manifest entry: %r", raw)
                skipped += 1
                continue
            payload = None
            if entry.has_photo:
                match = resolve_photo(entry, day, images)
                if match is not None:
                    payload = match.payload
                    photos += 1
            await self.store.add_entry(entry, payload)
            imported += 1

        if updates:
            await self.store.update_daily_summary(day, updates)

        _logger.info(
            "Imported archive for %s: entries=%s skipped=%s photos=%s",
            day,
            imported,
            skipped,
            photos,
        )
        return ArchiveImportResult(
            date=day, imported=imported, skipped=skipped, photos=photos
        )

    async def import_analysis(self, data: dict[str, object]) -> str:
        """Store an analysis object verbatim under its ``date``."""
        day = data.get("date")
        if not day:
            raise ImportValidationError("Invalid analysis file: no date field")
        day = _checked_day(str(day))
        await self.store.import_analysis(day, data)
        _logger.info("Imported analysis for %s", day)
        return day

    async def import_meal_plan(self, data: dict[str, object]) -> dict[str, object]:
        """Store a meal plan, normalizing ``generated`` to ``generatedDate``."""
        plan = dict(data)
        generated = plan.pop("generated", None)
        plan["generatedDate"] = plan.get("generatedDate") or generated
        if not plan["generatedDate"] or not isinstance(plan.get("days"), list):
            raise ImportValidationError("Invalid meal plan file")
        plan["generatedDate"] = str(plan["generatedDate"])
        await self.store.save_meal_plan(plan)
        _logger.info("Imported meal plan generated %s", plan["generatedDate"])
        return plan

    async def import_analysis_file(self, content: bytes) -> str:
        return await self.import_analysis(_parse_json_object(content))

    async def import_meal_plan_file(self, content: bytes) -> dict[str, object]:
        return await self.import_meal_plan(_parse_json_object(content))


def _find_manifest(entries: list[ArchiveEntry]) -> dict[str, object]:
    for entry in entries:
        if PurePosixPath(entry.path).name != MANIFEST_FILENAME:
            continue
        manifest = _parse_json_object(entry.data)
        if not manifest.get("date") or not isinstance(manifest.get("entries"), list):
            raise ImportValidationError("Log manifest is missing date or entries")
        _checked_day(str(manifest["date"]))
        return manifest
    raise ImportFormatError(f"Archive has no {MANIFEST_FILENAME}")


def _checked_summary_updates(
    day: str, manifest: dict[str, object]
) -> dict[str, object]:
    updates = {
        name: manifest[name]
        for name in _MANIFEST_SUMMARY_FIELDS
        if manifest.get(name) is not None
    }
    try:
        DailySummary(date=day).merged(updates)
    except ValueError as exc:
        raise ImportValidationError(
            f"Invalid summary fields in {MANIFEST_FILENAME}: {exc}"
        ) from exc
    return updates


def _parse_json_object(content: bytes) -> dict[str, object]:
    try:
        data = json.loads(content.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise ImportFormatError("File is not valid JSON") from exc
    if not isinstance(data, dict):
        raise ImportFormatError("Expected a JSON object")
    return data


def _checked_day(value: str) -> str:
    try:
        return validate_day(value)
    except ValueError as exc:
        raise ImportValidationError(str(exc)) from exc
