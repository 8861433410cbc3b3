"""Local filesystem storage adapter.

Entries are stored as ``<entries_dir>/<date>.json`` and photos as raw bytes
in ``<uploads_dir>/<filename>``. Photo URLs are root-relative paths under the
public uploads prefix (``/uploads/<filename>``), which the web layer serves
straight from ``uploads_dir``.
"""

import json
from pathlib import Path, PurePosixPath

from ..errors import StorageError
from ..logging_config import get_logger
from ..models import ScrapbookEntry, sort_entries_newest_first
from .base import delete_entry_photos

logger = get_logger(__name__)

ENTRY_SUFFIX = ".json"


class LocalStorageAdapter:
    """Stores entries as JSON documents and photos as files on local disk."""

    name = "local"

    def __init__(
        self,
        entries_dir: str | Path,
        uploads_dir: str | Path,
        public_prefix: str = "/uploads",
    ) -> None:
        """
        Initialize the local adapter.

        Args:
            entries_dir: Directory holding one JSON document per entry
            uploads_dir: Directory holding uploaded photo bytes
            public_prefix: URL prefix under which ``uploads_dir`` is served
        """
        self.entries_dir = Path(entries_dir)
        self.uploads_dir = Path(uploads_dir)
        self.public_prefix = "/" + public_prefix.strip("/")

        logger.info(
            "local_storage_initialized",
            entries_dir=str(self.entries_dir),
            uploads_dir=str(self.uploads_dir),
            public_prefix=self.public_prefix,
        )

    def _entry_path(self, date: str) -> Path:
        return self.entries_dir / f"{date}{ENTRY_SUFFIX}"

    def _read_entry(self, path: Path) -> ScrapbookEntry:
        with path.open("r", encoding="utf-8") as f:
            return ScrapbookEntry.from_dict(json.load(f))

    def list_entries(self) -> list[ScrapbookEntry]:
        try:
            self.entries_dir.mkdir(parents=True, exist_ok=True)
            paths = sorted(
                path for path in self.entries_dir.iterdir() if path.is_file() and path.name.endswith(ENTRY_SUFFIX)
            )
            entries = [self._read_entry(path) for path in paths]
            return sort_entries_newest_first(entries)
        except Exception as e:
            logger.error("list_entries_failed", entries_dir=str(self.entries_dir), error=str(e))
            return []

    def get_entry(self, date: str) -> ScrapbookEntry | None:
        path = self._entry_path(date)
        try:
            return self._read_entry(path)
        except FileNotFoundError:
            logger.debug("entry_not_found", date=date)
            return None
        except Exception as e:
            logger.error("get_entry_failed", date=date, path=str(path), error=str(e))
            return None

    def create_entry(self, entry: ScrapbookEntry) -> None:
        path = self._entry_path(entry.date)
        try:
            self.entries_dir.mkdir(parents=True, exist_ok=True)
            path.write_text(json.dumps(entry.to_dict(), indent=2, ensure_ascii=False), encoding="utf-8")
        except OSError as e:
            raise StorageError(
                f"Failed to write entry '{entry.date}': {e}",
                code="entry_write_failed",
                details={"date": entry.date, "path": str(path)},
                original_exception=e,
            ) from e

        logger.info("entry_created", date=entry.date, path=str(path), photos=len(entry.photos))

    def delete_entry(self, date: str) -> None:
        entry = self.get_entry(date)
        failures = delete_entry_photos(self, entry)

        path = self._entry_path(date)
        try:
            path.unlink()
        except OSError as e:
            raise StorageError(
                f"Failed to delete entry '{date}': {e}",
                code="entry_delete_failed",
                details={"date": date, "path": str(path)},
                original_exception=e,
            ) from e

        logger.info("entry_deleted", date=date, path=str(path), photo_failures=len(failures))

    def upload_photo(self, data: bytes, filename: str, content_type: str) -> str:
        safe_filename = PurePosixPath(filename.replace("\\", "/")).name
        if not safe_filename:
            raise StorageError(f"Invalid photo filename: '{filename}'", code="invalid_filename")

        path = self.uploads_dir / safe_filename
        try:
            self.uploads_dir.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)
        except OSError as e:
            raise StorageError(
                f"Failed to write photo '{safe_filename}': {e}",
                code="photo_upload_failed",
                details={"filename": safe_filename, "content_type": content_type},
                original_exception=e,
            ) from e

        logger.info("photo_uploaded", filename=safe_filename, size=len(data), content_type=content_type)
        return f"{self.public_prefix}/{safe_filename}"

    def delete_photo(self, url: str) -> None:
        filename = url.rstrip().split("/")[-1]
        if not filename:
            logger.warning("photo_url_without_filename", url=url)
            return
        if filename in (".", ".."):
            raise StorageError(f"Invalid photo URL: '{url}'", code="invalid_photo_url", details={"url": url})

        path = self.uploads_dir / filename
        try:
            path.unlink()
        except OSError as e:
            raise StorageError(
                f"Failed to delete photo '{url}': {e}",
                code="photo_delete_failed",
                details={"url": url, "path": str(path)},
                original_exception=e,
            ) from e

        logger.info("photo_deleted", filename=filename)

    def resolve_photo_path(self, url: str) -> Path | None:
        """Local file for a photo URL produced by this adapter, if it exists."""
        filename = url.split("/")[-1]
        if not filename or not url.startswith(self.public_prefix + "/"):
            return None
        path = self.uploads_dir / filename
        return path if path.is_file() else None
