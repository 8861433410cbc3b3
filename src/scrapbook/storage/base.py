"""
Storage adapter contract shared by every backend.

Backends are plain classes that satisfy ``StorageAdapter`` structurally;
there is no common base class. The contract's error policy:

- ``list_entries`` and ``get_entry`` never raise; failures read as empty/None
- ``create_entry``, ``upload_photo`` and ``delete_photo`` raise StorageError
- ``delete_entry`` swallows photo failures and raises only when the entry
  record itself cannot be deleted
"""

from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor
from typing import Protocol, runtime_checkable

from ..errors import PhotoDeletionFailure
from ..logging_config import get_logger
from ..models import Photo, ScrapbookEntry

logger = get_logger(__name__)


@runtime_checkable
class StorageAdapter(Protocol):
    """Persistence operations for entries and their photos."""

    name: str

    def list_entries(self) -> list[ScrapbookEntry]:
        """All entries, newest date first. Returns [] on any failure."""
        ...

    def get_entry(self, date: str) -> ScrapbookEntry | None:
        """The entry stored under ``date``, or None if missing or unreadable."""
        ...

    def create_entry(self, entry: ScrapbookEntry) -> None:
        """Store ``entry`` under its date, replacing any existing entry."""
        ...

    def delete_entry(self, date: str) -> None:
        """Delete an entry's photos (best effort) and then the entry itself."""
        ...

    def upload_photo(self, data: bytes, filename: str, content_type: str) -> str:
        """Store photo bytes and return the URL they can be fetched from."""
        ...

    def delete_photo(self, url: str) -> None:
        """Delete the photo addressed by ``url``."""
        ...


def delete_photos_best_effort(
    delete_photo: Callable[[str], None],
    photos: Sequence[Photo],
) -> list[PhotoDeletionFailure]:
    """
    Delete every photo concurrently and wait for all of them to settle.

    One failing deletion never prevents the others from being attempted.
    Failures are logged and returned, never raised.

    Args:
        delete_photo: The adapter's single-photo delete operation
        photos: Photos owned by the entry being deleted

    Returns:
        list[PhotoDeletionFailure]: One record per photo that could not be deleted
    """
    if not photos:
        return []

    failures: list[PhotoDeletionFailure] = []

    with ThreadPoolExecutor(max_workers=len(photos), thread_name_prefix="photo-delete") as executor:
        futures = [(photo.url, executor.submit(delete_photo, photo.url)) for photo in photos]

        for url, future in futures:
            try:
                future.result()
            except Exception as e:
                logger.warning("photo_delete_failed", url=url, error=str(e))
                failures.append(PhotoDeletionFailure(url=url, error=e))

    logger.debug("photo_deletions_settled", total=len(photos), failed=len(failures))
    return failures


def delete_entry_photos(adapter: StorageAdapter, entry: ScrapbookEntry | None) -> list[PhotoDeletionFailure]:
    """Run the best-effort photo cascade for ``entry`` using ``adapter.delete_photo``."""
    if entry is None or not entry.photos:
        return []
    return delete_photos_best_effort(adapter.delete_photo, entry.photos)
