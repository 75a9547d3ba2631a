"""Shared test fixtures."""

import asyncio
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

import pytest

from health_tracker.adapters.archive_codec import ZipArchiveCodec
from health_tracker.adapters.sqlite_health_store import SQLiteHealthStore
from health_tracker.config import Settings
from health_tracker.containers import AppContainer, build_container
from health_tracker.domain.entries import Entry
from health_tracker.domain.exports import ArchiveEntry
from health_tracker.services.archives import ArchiveCodec


@dataclass
class RecordingArchiveCodec(ArchiveCodec):
    """Archive codec that records what it was asked to write."""

    inner: ZipArchiveCodec = field(default_factory=ZipArchiveCodec)
    written: list[list[ArchiveEntry]] = field(default_factory=list)

    def write(self, entries: Iterable[ArchiveEntry]) -> bytes:
        materialized = list(entries)
        self.written.append(materialized)
        return self.inner.write(materialized)

    def read(self, data: bytes) -> list[ArchiveEntry]:
        return self.inner.read(data)


def make_entry(  # noqa: PLR0913
    entry_id: str = "meal_1",
    entry_type: str = "meal",
    day: str = "2024-01-05",
    subtype: str | None = "lunch",
    timestamp: str = "2024-01-05T12:30:00+00:00",
    has_photo: bool = False,
    notes: str = "",
    duration_minutes: int | None = None,
) -> Entry:
    return Entry(
        id=entry_id,
        type=entry_type,
        subtype=subtype,
        date=day,
        timestamp=timestamp,
        notes=notes,
        has_photo=has_photo,
        duration_minutes=duration_minutes,
    )


def run(coro):  # type: ignore[no-untyped-def]
    return asyncio.run(coro)


@pytest.fixture
def db_path(tmp_path: Path) -> str:
    return str(tmp_path / "health-tracker.db")


@pytest.fixture
def settings(db_path: str) -> Settings:
    return Settings(database_path=db_path, environment="test")


@pytest.fixture
def store(db_path: str) -> SQLiteHealthStore:
    return SQLiteHealthStore.from_path(db_path)


@pytest.fixture
def codec() -> ZipArchiveCodec:
    return ZipArchiveCodec()


@pytest.fixture
def container(settings: Settings) -> AppContainer:
    return build_container(settings)
