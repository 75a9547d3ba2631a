"""Tests for the CRC-32 checksum."""

import zlib

from health_tracker.adapters.crc32 import Crc32, build_table, crc32


def test_crc32_known_check_value() -> None:
    assert crc32(b"123456789") == 0xCBF43926


def test_crc32_of_empty_input_is_zero() -> None:
    assert crc32(b"") == 0


def test_crc32_matches_zlib() -> None:
    samples = [b"a", b"hello world", bytes(range(256)), b"\xff" * 4096]
    for sample in samples:
        assert crc32(sample) == zlib.crc32(sample)


def test_crc32_is_deterministic_across_fresh_tables() -> None:
    data = b"daily/2024-01-05/log.json" * 50
    first = Crc32().checksum(data)
    second = Crc32().checksum(data)

    assert first == second == crc32(data)
    assert crc32(data) == crc32(data)


def test_table_is_built_once_on_first_use() -> None:
    calculator = Crc32()
    assert calculator._table is None

    calculator.checksum(b"x")
    table = calculator._table
    calculator.checksum(b"y")

    assert table is not None
    assert calculator._table is table
    assert len(table) == 256
    assert table == build_table()
    assert table[1] == 0x77073096
