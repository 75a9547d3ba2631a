"""Store-only ZIP writer."""

from collections.abc import Callable, Iterable

from health_tracker.adapters.crc32 import crc32
from health_tracker.adapters.zip_format import (
    CENTRAL_DIRECTORY_HEADER,
    CENTRAL_DIRECTORY_SIGNATURE,
    END_OF_CENTRAL_DIRECTORY,
    END_OF_CENTRAL_DIRECTORY_SIGNATURE,
    LOCAL_FILE_HEADER,
    LOCAL_FILE_SIGNATURE,
    METHOD_STORE,
    VERSION,
)
from health_tracker.domain.exports import ArchiveEntry


def write_archive(
    entries: Iterable[ArchiveEntry],
    checksum: Callable[[bytes], int] = crc32,
) -> bytes:
    """Pack ``entries`` in order into an uncompressed ZIP container.

    Payloads are written byte-for-byte. Payloads or offsets beyond the
    32-bit limits of the format are not supported.
    """
    local_records: list[bytes] = []
    central_records: list[bytes] = []
    offset = 0
    count = 0

    for entry in entries:
        name = entry.path.encode("utf-8")
        data = bytes(entry.data)
        crc = checksum(data)
        size = len(data)

        local_header = LOCAL_FILE_HEADER.pack(
            LOCAL_FILE_SIGNATURE,
            VERSION,
            0,
            METHOD_STORE,
            0,
            0,
            crc,
            size,
            size,
            len(name),
            0,
        )
        local = local_header + name + data
        local_records.append(local)

        central_header = CENTRAL_DIRECTORY_HEADER.pack(
            CENTRAL_DIRECTORY_SIGNATURE,
            VERSION,
            VERSION,
            0,
            METHOD_STORE,
            0,
            0,
            crc,
            size,
            size,
            len(name),
            0,
            0,
            0,
            0,
            0,
            offset,
        )
        central_records.append(central_header + name)

        offset += len(local)
        count += 1

    central_directory = b"".join(central_records)
    end_record = END_OF_CENTRAL_DIRECTORY.pack(
        END_OF_CENTRAL_DIRECTORY_SIGNATURE,
        0,
        0,
        count,
        count,
        len(central_directory),
        offset,
        0,
    )
    return b"".join(local_records) + central_directory + end_record
