"""Tests for the store-only ZIP writer and reader."""

import io
import struct
import zipfile

from health_tracker.adapters.archive_codec import ZipArchiveCodec
from health_tracker.adapters.crc32 import crc32
from health_tracker.adapters.zip_format import (
    CENTRAL_DIRECTORY_HEADER,
    END_OF_CENTRAL_DIRECTORY,
    LOCAL_FILE_HEADER,
)
from health_tracker.adapters.zip_reader import read_archive
from health_tracker.adapters.zip_writer import write_archive
from health_tracker.domain.exports import ArchiveEntry


def _sample_entries() -> list[ArchiveEntry]:
    return [
        ArchiveEntry(path="daily/2024-01-05/log.json", data=b'{"date": "2024-01-05"}'),
        ArchiveEntry(path="daily/2024-01-05/photos/empty.jpg", data=b""),
        ArchiveEntry(path="daily/2024-01-05/photos/one.jpg", data=b"\x00"),
        ArchiveEntry(
            path="progress/2024-01-05/body.jpg",
            data=bytes(range(256)) * 300,
        ),
    ]


def test_record_layout_sizes() -> None:
    assert LOCAL_FILE_HEADER.size == 30
    assert CENTRAL_DIRECTORY_HEADER.size == 46
    assert END_OF_CENTRAL_DIRECTORY.size == 22


def test_round_trip_preserves_paths_and_bytes() -> None:
    entries = _sample_entries()

    result = read_archive(write_archive(entries))

    assert result == entries
    assert len(result[3].data) > 64 * 1024


def test_empty_archive_is_only_end_record() -> None:
    data = write_archive([])

    assert len(data) == 22
    assert read_archive(data) == []
    assert zipfile.ZipFile(io.BytesIO(data)).namelist() == []


def test_writer_layout_matches_format() -> None:
    entry = ArchiveEntry(path="a.txt", data=b"hello")
    data = write_archive([entry])

    fields = LOCAL_FILE_HEADER.unpack_from(data, 0)
    assert fields[0] == 0x04034B50
    assert fields[3] == 0
    assert fields[6] == crc32(b"hello")
    assert fields[7] == fields[8] == 5
    assert fields[9] == len("a.txt")
    assert fields[10] == 0
    assert data[30:35] == b"a.txt"
    assert data[35:40] == b"hello"

    central_offset = 40
    central = CENTRAL_DIRECTORY_HEADER.unpack_from(data, central_offset)
    assert central[0] == 0x02014B50
    assert central[7] == crc32(b"hello")
    assert central[-1] == 0

    end = END_OF_CENTRAL_DIRECTORY.unpack_from(data, len(data) - 22)
    assert end[0] == 0x06054B50
    assert end[3] == end[4] == 1
    assert end[5] == 46 + len("a.txt")
    assert end[6] == central_offset


def test_output_opens_in_standard_zip_tooling() -> None:
    entries = _sample_entries()
    data = write_archive(entries)

    with zipfile.ZipFile(io.BytesIO(data)) as archive:
        assert archive.testzip() is None
        assert archive.namelist() == [entry.path for entry in entries]
        for entry in entries:
            info = archive.getinfo(entry.path)
            assert info.compress_type == zipfile.ZIP_STORED
            assert archive.read(entry.path) == entry.data


def test_reader_accepts_stored_archive_from_zipfile() -> None:
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_STORED) as archive:
        archive.writestr("daily/", b"")
        archive.writestr("daily/2024-01-05/log.json", b"{}")
        archive.writestr("daily/2024-01-05/photos/x.jpg", b"jpeg-bytes")

    result = read_archive(buffer.getvalue())

    assert [entry.path for entry in result] == [
        "daily/2024-01-05/log.json",
        "daily/2024-01-05/photos/x.jpg",
    ]
    assert result[1].data == b"jpeg-bytes"


def test_reader_skips_compressed_members() -> None:
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as archive:
        archive.writestr(
            "deflated.txt", b"a" * 1000, compress_type=zipfile.ZIP_DEFLATED
        )
        archive.writestr("stored.txt", b"kept", compress_type=zipfile.ZIP_STORED)

    result = read_archive(buffer.getvalue())

    assert result == [ArchiveEntry(path="stored.txt", data=b"kept")]


def test_reader_tolerates_truncation_at_every_offset() -> None:
    entries = [
        ArchiveEntry(path="one.bin", data=b"1" * 7),
        ArchiveEntry(path="two.bin", data=b""),
        ArchiveEntry(path="three.bin", data=b"333"),
    ]
    data = write_archive(entries)
    member_ends = []
    offset = 0
    for entry in entries:
        offset += 30 + len(entry.path) + len(entry.data)
        member_ends.append(offset)

    for cut in range(len(data) + 1):
        result = read_archive(data[:cut])
        complete = sum(1 for end in member_ends if end <= cut)
        assert result == entries[:complete]


def test_reader_stops_at_unknown_signature() -> None:
    good = write_archive([ArchiveEntry(path="a.txt", data=b"a")])
    local_only = good[: 30 + 5 + 1]
    garbage = struct.pack("<I", 0xDEADBEEF) + b"\x00" * 64

    result = read_archive(local_only + garbage + good)

    assert result == [ArchiveEntry(path="a.txt", data=b"a")]


def test_reader_ignores_bytes_that_are_not_an_archive() -> None:
    assert read_archive(b"") == []
    assert read_archive(b"PK") == []
    assert read_archive(b'{"date": "2024-01-05"}') == []


def test_codec_uses_its_own_checksum_table() -> None:
    codec = ZipArchiveCodec()
    entries = [ArchiveEntry(path="a.txt", data=b"abc")]

    data = codec.write(entries)

    assert codec.crc._table is not None
    assert codec.read(data) == entries
    assert data == write_archive(entries)


def test_non_ascii_paths_round_trip() -> None:
    entries = [ArchiveEntry(path="daily/2024-01-05/notes-café.txt", data=b"x")]

    assert read_archive(write_archive(entries)) == entries
