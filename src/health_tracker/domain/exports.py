"""Day packages and archive path conventions."""

from dataclasses import dataclass, field

from health_tracker.domain.entries import Entry
from health_tracker.domain.summaries import DailySummary

MANIFEST_FILENAME = "log.json"
IMAGE_EXTENSIONS = (".jpg", ".jpeg", ".png", ".webp", ".heic")
BODY_POSES = ("face", "body")


@dataclass(frozen=True)
class ArchiveEntry:
    """One member of a container file."""

    path: str
    data: bytes


@dataclass(frozen=True)
class DayPackage:
    """Everything exported for one day, before serialization."""

    date: str
    entries: list[Entry]
    summary: DailySummary
    payloads: dict[str, bytes] = field(default_factory=dict)

    def manifest(self) -> dict[str, object]:
        """Return the log manifest written at ``daily/<date>/log.json``."""
        return {
            "date": self.date,
            "entries": [entry.to_dict() for entry in self.entries],
            "sleep": self.summary.sleep or None,
            "weight": self.summary.weight.to_dict() if self.summary.weight else None,
            "water_oz": self.summary.water_oz or None,
            "notes": self.summary.notes or None,
        }

    def is_empty(self) -> bool:
        return (
            not self.entries
            and not self.summary.water_oz
            and self.summary.weight is None
        )


def manifest_path(day: str) -> str:
    return f"daily/{day}/{MANIFEST_FILENAME}"


def entry_photo_path(day: str, entry_id: str) -> str:
    return f"daily/{day}/photos/{entry_id}.jpg"


def progress_photo_path(day: str, pose: str) -> str:
    return f"progress/{day}/{pose}.jpg"


def body_pose(photo_id: str, entry_id: str | None) -> str:
    """Classify a body photo as ``face`` or ``body``.

    Matches on the substring "face" in the entry or photo id, so an id that
    contains "face" for an unrelated reason is filed as a face photo.
    """
    if "face" in (entry_id or "") or "face" in photo_id:
        return "face"
    return "body"


def is_image_path(path: str) -> bool:
    return path.lower().endswith(IMAGE_EXTENSIONS)
