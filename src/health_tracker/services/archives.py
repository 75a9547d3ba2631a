"""Archive codec interface."""

from collections.abc import Iterable
from typing import Protocol

from health_tracker.domain.exports import ArchiveEntry


class ArchiveCodec(Protocol):
    """Packs and unpacks container files."""

    def write(self, entries: Iterable[ArchiveEntry]) -> bytes:
        """Return a container file holding ``entries`` in order."""

    def read(self, data: bytes) -> list[ArchiveEntry]:
        """Return the entries stored in a container file."""
