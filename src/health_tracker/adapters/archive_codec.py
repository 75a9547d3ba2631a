"""Injectable archive codec combining the ZIP writer and reader."""

from collections.abc import Iterable
from dataclasses import dataclass, field

from health_tracker.adapters.crc32 import Crc32
from health_tracker.adapters.zip_reader import read_archive
from health_tracker.adapters.zip_writer import write_archive
from health_tracker.domain.exports import ArchiveEntry
from health_tracker.services.archives import ArchiveCodec


@dataclass
class ZipArchiveCodec(ArchiveCodec):
    """Store-only ZIP codec with its own checksum table."""

    crc: Crc32 = field(default_factory=Crc32)

    def write(self, entries: Iterable[ArchiveEntry]) -> bytes:
        """Pack entries into a container file."""
        return write_archive(entries, checksum=self.crc.checksum)

    def read(self, data: bytes) -> list[ArchiveEntry]:
        """Unpack a container file into entries."""
        return read_archive(data)
