"""Entries service: the application's entry point to entry persistence."""

from ..config import StorageSettings
from ..logging_config import get_logger
from ..models import ScrapbookEntry
from ..storage import StorageAdapter, create_storage_adapter

logger = get_logger(__name__)


class EntriesService:
    """
    Pass-through facade over a storage adapter.

    Each operation forwards to the adapter unchanged, so the adapter's error
    policy is the service's error policy.
    """

    def __init__(self, adapter: StorageAdapter) -> None:
        self._adapter = adapter

    @classmethod
    def from_settings(cls, settings: StorageSettings) -> "EntriesService":
        return cls(create_storage_adapter(settings))

    @property
    def adapter(self) -> StorageAdapter:
        return self._adapter

    def list_entries(self) -> list[ScrapbookEntry]:
        return self._adapter.list_entries()

    def get_entry(self, date: str) -> ScrapbookEntry | None:
        return self._adapter.get_entry(date)

    def create_entry(self, entry: ScrapbookEntry) -> None:
        self._adapter.create_entry(entry)

    def delete_entry(self, date: str) -> None:
        self._adapter.delete_entry(date)


_entries_service: EntriesService | None = None


def configure_entries_service(settings: StorageSettings | None = None) -> EntriesService:
    """
    Create the process-wide entries service.

    Called once at startup; storage selection is not re-evaluated per call.

    Args:
        settings: Storage settings; read from the environment when omitted
    """
    global _entries_service
    _entries_service = EntriesService.from_settings(settings or StorageSettings.from_env())
    logger.info("entries_service_configured", adapter=_entries_service.adapter.name)
    return _entries_service


def get_entries_service() -> EntriesService:
    """Get the process-wide entries service, configuring it on first use."""
    if _entries_service is None:
        return configure_entries_service()
    return _entries_service


def reset_entries_service() -> None:
    """Forget the process-wide entries service (used by tests)."""
    global _entries_service
    _entries_service = None
