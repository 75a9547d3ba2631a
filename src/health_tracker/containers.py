"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from health_tracker.adapters.archive_codec import ZipArchiveCodec
from health_tracker.adapters.sqlite_health_store import SQLiteHealthStore
from health_tracker.config import Settings
from health_tracker.services.archives import ArchiveCodec
from health_tracker.services.exports import ExportService
from health_tracker.services.goals import GoalsService
from health_tracker.services.imports import ImportService
from health_tracker.services.quick_log import QuickLogService
from health_tracker.services.storage import StorageService
from health_tracker.services.store import HealthStore


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    store: HealthStore
    codec: ArchiveCodec
    quick_log_service: QuickLogService
    export_service: ExportService
    import_service: ImportService
    storage_service: StorageService
    goals_service: GoalsService
    open_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    store = SQLiteHealthStore.from_path(resolved_settings.database_path)
    codec = ZipArchiveCodec()

    return AppContainer(
        settings=resolved_settings,
        store=store,
        codec=codec,
        quick_log_service=QuickLogService(store),
        export_service=ExportService(
            store=store,
            codec=codec,
            filename_prefix=resolved_settings.export_filename_prefix,
        ),
        import_service=ImportService(store=store, codec=codec),
        storage_service=StorageService(store),
        goals_service=GoalsService(store),
        open_resources=store.initialize,
    )
