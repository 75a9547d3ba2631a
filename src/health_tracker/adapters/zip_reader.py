"""Store-only ZIP reader.

Scans local file records from the start of the buffer and never consults the
central directory. Members written with a compression method are skipped, so
archives produced by general-purpose compressing tools read as partial or
empty.
"""

import logging

from health_tracker.adapters.zip_format import (
    LOCAL_FILE_HEADER,
    LOCAL_FILE_SIGNATURE,
    METHOD_STORE,
    SIGNATURE,
)
from health_tracker.domain.exports import ArchiveEntry

_logger = logging.getLogger(__name__)


def read_archive(data: bytes) -> list[ArchiveEntry]:
    """Return the stored members of ``data`` in archive order.

    Stops at the first record that is not a local file header. A truncated
    buffer yields the members that fit completely; no exception is raised.
    Directory placeholders are dropped.
    """
    view = memoryview(data)
    total = len(view)
    offset = 0
    entries: list[ArchiveEntry] = []

    while offset + SIGNATURE.size <= total:
        (signature,) = SIGNATURE.unpack_from(view, offset)
        if signature != LOCAL_FILE_SIGNATURE:
            break
        if offset + LOCAL_FILE_HEADER.size > total:
            _logger.warning("Archive truncated inside a header at offset %s", offset)
            break
        (
            _signature,
            _version,
            _flags,
            method,
            _mod_time,
            _mod_date,
            _crc,
            compressed_size,
            _size,
            name_length,
            extra_length,
        ) = LOCAL_FILE_HEADER.unpack_from(view, offset)

        name_start = offset + LOCAL_FILE_HEADER.size
        data_start = name_start + name_length + extra_length
        data_end = data_start + compressed_size
        if data_end > total:
            _logger.warning("Archive truncated inside a member at offset %s", offset)
            break

        path = bytes(view[name_start : name_start + name_length]).decode(
            "utf-8", errors="replace"
        )
        offset = data_end

        if method != METHOD_STORE:
            _logger.warning("Skipping compressed archive member %s", path)
            continue
        if path.endswith("/"):
            continue
        entries.append(ArchiveEntry(path=path, data=bytes(view[data_start:data_end])))

    return entries
