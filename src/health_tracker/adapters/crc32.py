"""Table-driven CRC-32 used for archive member checksums."""

import threading
from collections.abc import Iterable

POLYNOMIAL = 0xEDB88320
_MASK = 0xFFFFFFFF


def build_table(polynomial: int = POLYNOMIAL) -> tuple[int, ...]:
    """Return the 256-entry lookup table for a reflected polynomial."""
    table = []
    for index in range(256):
        value = index
        for _ in range(8):
            if value & 1:
                value = polynomial ^ (value >> 1)
            else:
                value >>= 1
        table.append(value)
    return tuple(table)


class Crc32:
    """CRC-32 calculator whose lookup table is built once on first use."""

    def __init__(self, polynomial: int = POLYNOMIAL) -> None:
        self._polynomial = polynomial
        self._table: tuple[int, ...] | None = None
        self._lock = threading.Lock()

    @property
    def table(self) -> tuple[int, ...]:
        if self._table is None:
            with self._lock:
                if self._table is None:
                    self._table = build_table(self._polynomial)
        return self._table

    def checksum(self, data: bytes | bytearray | memoryview | Iterable[int]) -> int:
        """Return the CRC-32 of ``data`` as an unsigned 32-bit integer."""
        table = self.table
        crc = _MASK
        for byte in bytes(data):
            crc = table[(crc ^ byte) & 0xFF] ^ (crc >> 8)
        return crc ^ _MASK


_default = Crc32()


def crc32(data: bytes | bytearray | memoryview) -> int:
    """Return the CRC-32 of ``data`` using the process-wide table."""
    return _default.checksum(data)
