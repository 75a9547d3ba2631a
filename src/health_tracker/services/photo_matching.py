"""Resolve archive photo payloads for imported entries.

Strategies are tried in order and the first hit wins:

1. ``canonical``: ``daily/<date>/photos/<id>.jpg``.
2. ``progress``: ``progress/<date>/<pose>.jpg`` when the subtype is a pose.
3. ``id_scan``: any image whose path has the entry id as a segment or stem.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import PurePosixPath

from health_tracker.domain.entries import Entry
from health_tracker.domain.exports import (
    BODY_POSES,
    entry_photo_path,
    progress_photo_path,
)

_logger = logging.getLogger(__name__)

Strategy = Callable[[Entry, str, dict[str, bytes]], str | None]


@dataclass(frozen=True)
class PhotoMatch:
    """Archive path and payload chosen for an entry."""

    path: str
    strategy: str
    payload: bytes


def match_canonical(entry: Entry, day: str, images: dict[str, bytes]) -> str | None:
    path = entry_photo_path(day, entry.id)
    return path if path in images else None


def match_progress(entry: Entry, day: str, images: dict[str, bytes]) -> str | None:
    if entry.subtype not in BODY_POSES:
        return None
    path = progress_photo_path(day, entry.subtype)
    return path if path in images else None


def match_id_scan(entry: Entry, day: str, images: dict[str, bytes]) -> str | None:
    for path in sorted(images):
        pure = PurePosixPath(path)
        if entry.id in pure.parts[:-1] or pure.stem == entry.id:
            return path
    return None


STRATEGIES: tuple[tuple[str, Strategy], ...] = (
    ("canonical", match_canonical),
    ("progress", match_progress),
    ("id_scan", match_id_scan),
)


def resolve_photo(entry: Entry, day: str, images: dict[str, bytes]) -> PhotoMatch | None:
    """Return the payload for ``entry`` or ``None`` if no strategy matches."""
    for name, strategy in STRATEGIES:
        path = strategy(entry, day, images)
        if path is not None:
            _logger.info("Photo for entry %s matched by %s: %s", entry.id, name, path)
            return PhotoMatch(path=path, strategy=name, payload=images[path])
    _logger.warning("No photo found in archive for entry %s", entry.id)
    return None
