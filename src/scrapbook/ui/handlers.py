"""Actions behind the admin pages, kept free of Streamlit calls."""

import uuid
from collections.abc import Sequence
from datetime import date
from typing import Any

from ..logging_config import log_error, log_user_action
from ..models import Photo, ScrapbookEntry
from ..services import EntriesService, PhotoUploadService
from ..services.validation import entry_from_payload
from ..storage import delete_photos_best_effort


def upload_form_photos(
    upload_service: PhotoUploadService,
    uploaded_files: Sequence[Any],
    captions: Sequence[str],
) -> list[Photo]:
    """
    Upload files picked in the new-entry form, keeping their order.

    Args:
        upload_service: Photo upload pipeline
        uploaded_files: Streamlit ``UploadedFile`` objects
        captions: Caption per file (may be shorter than ``uploaded_files``)

    Returns:
        list[Photo]: Stored photos in upload order

    Raises:
        ScrapbookError: If any upload fails; photos already stored are removed
            before any error is re-raised
    """
    photos: list[Photo] = []
    try:
        for index, uploaded_file in enumerate(uploaded_files):
            result = upload_service.upload(uploaded_file.getvalue(), uploaded_file.name, uploaded_file.type)
            caption = captions[index].strip() if index < len(captions) else ""
            photos.append(
                Photo(
                    id=str(uuid.uuid4()),
                    url=result.url,
                    width=result.width,
                    height=result.height,
                    caption=caption or None,
                )
            )
    except Exception:
        delete_photos_best_effort(upload_service.adapter.delete_photo, photos)
        raise

    return photos


def create_entry_from_form(
    entries_service: EntriesService,
    upload_service: PhotoUploadService,
    entry_date: date,
    title: str,
    description: str,
    uploaded_files: Sequence[Any],
    captions: Sequence[str],
) -> ScrapbookEntry:
    """
    Validate the form, upload its photos and save the entry.

    Validation runs before any upload so a rejected form stores nothing. If
    saving the entry fails, the freshly uploaded photos are removed again.

    Raises:
        ValidationError: If the date, title or photos are missing
        ScrapbookError: If an upload or the entry write fails
    """
    placeholder_photos = [{"url": getattr(f, "name", "") or "upload"} for f in uploaded_files]
    payload = {
        "date": entry_date.isoformat(),
        "title": title.strip(),
        "description": description.strip(),
        "photos": placeholder_photos,
    }
    entry = entry_from_payload(payload)

    entry.photos = upload_form_photos(upload_service, uploaded_files, captions)

    try:
        entries_service.create_entry(entry)
    except Exception:
        delete_photos_best_effort(upload_service.adapter.delete_photo, entry.photos)
        raise

    log_user_action("entry_created", date=entry.date, photos=len(entry.photos), source="streamlit")
    return entry


def delete_entry_with_feedback(entries_service: EntriesService, entry_date: str) -> bool:
    """
    Delete an entry from the admin table.

    Returns:
        bool: True if the entry record was deleted
    """
    try:
        entries_service.delete_entry(entry_date)
    except Exception as e:
        log_error(e, {"operation": "delete_entry", "date": entry_date, "source": "streamlit"})
        return False

    log_user_action("entry_deleted", date=entry_date, source="streamlit")
    return True
