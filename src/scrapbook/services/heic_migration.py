"""
Conversion of HEIC photos already sitting in the local uploads directory.

Uploads made before HEIC conversion existed were stored as-is. This module
turns each of them into a JPEG next to the original, points the entries that
reference the old file at the new one, and optionally removes the originals.
"""

import uuid
from dataclasses import dataclass, field
from pathlib import Path

from ..errors import PhotoDeletionFailure, ScrapbookError
from ..logging_config import get_logger
from ..models import Photo
from ..storage import LocalStorageAdapter, delete_photos_best_effort
from .image_processor import HEIC_EXTENSIONS, ImageProcessor, get_image_processor

logger = get_logger(__name__)


@dataclass
class HeicMigrationReport:
    """Outcome of a migration run.

    Attributes:
        converted: Old photo URL mapped to the URL of its JPEG replacement
        failed: Files that could not be converted
        updated_entries: Dates of entries whose photo URLs were rewritten
        failed_entries: Dates of entries that could not be rewritten
        deleted: Original URLs removed after conversion
        delete_failures: Originals that could not be removed
    """

    converted: dict[str, str] = field(default_factory=dict)
    failed: list[str] = field(default_factory=list)
    updated_entries: list[str] = field(default_factory=list)
    failed_entries: list[str] = field(default_factory=list)
    deleted: list[str] = field(default_factory=list)
    delete_failures: list[PhotoDeletionFailure] = field(default_factory=list)


def find_heic_uploads(adapter: LocalStorageAdapter) -> list[Path]:
    """HEIC/HEIF files in the uploads directory, any extension case, sorted by name."""
    if not adapter.uploads_dir.is_dir():
        return []
    return sorted(
        path for path in adapter.uploads_dir.iterdir() if path.is_file() and path.suffix.lower() in HEIC_EXTENSIONS
    )


def convert_upload(adapter: LocalStorageAdapter, path: Path, processor: ImageProcessor) -> str | None:
    """
    Write a JPEG copy of one HEIC upload under the same stem.

    Returns:
        str | None: URL of the JPEG, or None if the file could not be converted
    """
    try:
        jpeg_data = processor.convert_heic_to_jpeg(path.read_bytes())
        url = adapter.upload_photo(jpeg_data, path.with_suffix(".jpg").name, "image/jpeg")
    except (OSError, ScrapbookError) as e:
        logger.error("heic_migration_convert_failed", filename=path.name, error=str(e))
        return None

    logger.info("heic_migration_converted", filename=path.name, url=url)
    return url


def rewrite_entry_urls(adapter: LocalStorageAdapter, url_map: dict[str, str], report: HeicMigrationReport) -> None:
    """Point every photo whose URL is in ``url_map`` at its replacement."""
    for entry in adapter.list_entries():
        if not any(photo.url in url_map for photo in entry.photos):
            continue

        for photo in entry.photos:
            photo.url = url_map.get(photo.url, photo.url)

        try:
            adapter.create_entry(entry)
        except ScrapbookError as e:
            logger.error("heic_migration_entry_update_failed", date=entry.date, error=str(e))
            report.failed_entries.append(entry.date)
            continue

        report.updated_entries.append(entry.date)


def migrate_heic_uploads(
    adapter: LocalStorageAdapter,
    processor: ImageProcessor | None = None,
    delete_originals: bool = False,
) -> HeicMigrationReport:
    """
    Convert every HEIC upload to JPEG and update the entries that use it.

    A file that fails to convert is skipped and left untouched. Originals are
    only deleted when ``delete_originals`` is set, and never while an entry
    that could not be rewritten still references them.

    Args:
        adapter: Local adapter owning the uploads and entries directories
        processor: Image processor used for conversion
        delete_originals: Remove HEIC files once they have been converted

    Returns:
        HeicMigrationReport: What was converted, rewritten and deleted
    """
    processor = processor or get_image_processor()
    report = HeicMigrationReport()

    paths = find_heic_uploads(adapter)
    logger.info("heic_migration_started", files=len(paths), delete_originals=delete_originals)

    for path in paths:
        new_url = convert_upload(adapter, path, processor)
        if new_url is None:
            report.failed.append(path.name)
        else:
            report.converted[f"{adapter.public_prefix}/{path.name}"] = new_url

    if report.converted:
        rewrite_entry_urls(adapter, report.converted, report)

    if delete_originals and report.converted:
        still_referenced: set[str] = set()
        for date in report.failed_entries:
            entry = adapter.get_entry(date)
            if entry is not None:
                still_referenced.update(photo.url for photo in entry.photos)

        originals = [
            Photo(id=str(uuid.uuid4()), url=url) for url in report.converted if url not in still_referenced
        ]
        report.delete_failures = delete_photos_best_effort(adapter.delete_photo, originals)
        failed_urls = {failure.url for failure in report.delete_failures}
        report.deleted = [photo.url for photo in originals if photo.url not in failed_urls]

    logger.info(
        "heic_migration_finished",
        converted=len(report.converted),
        failed=len(report.failed),
        updated_entries=len(report.updated_entries),
        deleted=len(report.deleted),
    )
    return report
