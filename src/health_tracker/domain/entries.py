"""Domain models for logged entries and their photos."""

import secrets
import string
import time
from dataclasses import dataclass
from datetime import date

ENTRY_TYPES = frozenset(
    {"meal", "snack", "drink", "workout", "water", "weight", "bodyPhoto"}
)
PHOTO_CATEGORIES = frozenset({"meal", "body"})

UNSYNCED = "unsynced"
SYNCED = "synced"
PROCESSED = "processed"
SYNC_STATUSES = (UNSYNCED, SYNCED, PROCESSED)

_ID_ALPHABET = string.digits + string.ascii_lowercase


@dataclass(frozen=True)
class Entry:
    """A single logged event for a calendar day."""

    id: str
    type: str
    date: str
    timestamp: str
    subtype: str | None = None
    notes: str = ""
    has_photo: bool = False
    duration_minutes: int | None = None

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Entry id is required")
        if self.type not in ENTRY_TYPES:
            raise ValueError(f"Unknown entry type: {self.type}")
        validate_day(self.date)

    def to_dict(self) -> dict[str, object]:
        """Return the manifest representation of the entry."""
        return {
            "id": self.id,
            "type": self.type,
            "subtype": self.subtype,
            "date": self.date,
            "timestamp": self.timestamp,
            "notes": self.notes,
            "has_photo": self.has_photo,
            "duration_minutes": self.duration_minutes,
        }

    @classmethod
    def from_dict(cls, payload: dict[str, object]) -> "Entry":
        """Build an entry from a manifest object.

        Accepts the snake_case keys written by the exporter as well as the
        older ``photo``/``hasPhoto`` and ``durationMinutes`` spellings.
        """
        if "has_photo" in payload:
            has_photo = bool(payload["has_photo"])
        elif "hasPhoto" in payload:
            has_photo = bool(payload["hasPhoto"])
        else:
            has_photo = bool(payload.get("photo"))
        duration = payload.get("duration_minutes", payload.get("durationMinutes"))
        subtype = payload.get("subtype")
        return cls(
            id=str(payload["id"]),
            type=str(payload["type"]),
            subtype=str(subtype) if subtype is not None else None,
            date=str(payload["date"]),
            timestamp=str(payload.get("timestamp") or ""),
            notes=str(payload.get("notes") or ""),
            has_photo=has_photo,
            duration_minutes=int(duration) if duration is not None else None,
        )


@dataclass(frozen=True)
class Photo:
    """Binary payload attached to an entry or directly to a day."""

    id: str
    entry_id: str | None
    date: str
    category: str
    sync_status: str
    payload: bytes
    timestamp: str

    def __post_init__(self) -> None:
        if self.category not in PHOTO_CATEGORIES:
            raise ValueError(f"Unknown photo category: {self.category}")
        if self.sync_status not in SYNC_STATUSES:
            raise ValueError(f"Unknown sync status: {self.sync_status}")

    @property
    def size(self) -> int:
        return len(self.payload)


@dataclass(frozen=True)
class PhotoSyncCounts:
    """Photo counts per sync status plus total payload size."""

    unsynced: int = 0
    synced: int = 0
    processed: int = 0
    total_size: int = 0

    @property
    def total(self) -> int:
        return self.unsynced + self.synced + self.processed


def photo_for_entry(
    entry: Entry, payload: bytes, captured_at: str | None = None
) -> Photo:
    """Derive the companion photo record for an entry payload."""
    return Photo(
        id=f"photo_{entry.id}",
        entry_id=entry.id,
        date=entry.date,
        category="body" if entry.type == "bodyPhoto" else "meal",
        sync_status=UNSYNCED,
        payload=payload,
        timestamp=captured_at or entry.timestamp,
    )


def can_advance(current: str, target: str) -> bool:
    """Return whether a sync status may move from ``current`` to ``target``."""
    return SYNC_STATUSES.index(target) > SYNC_STATUSES.index(current)


def generate_entry_id(prefix: str) -> str:
    """Return an id built from the creation time and a random suffix."""
    millis = int(time.time() * 1000)
    suffix = "".join(secrets.choice(_ID_ALPHABET) for _ in range(4))
    return f"{prefix}_{millis}_{suffix}"


def validate_day(value: str) -> str:
    """Ensure ``value`` is a ``YYYY-MM-DD`` calendar day key."""
    try:
        parsed = date.fromisoformat(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Invalid day key: {value!r}") from exc
    if parsed.isoformat() != value:
        raise ValueError(f"Invalid day key: {value!r}")
    return value
