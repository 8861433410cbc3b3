"""Validation of incoming entry data shared by the API and the admin pages."""

import uuid
from typing import Any

from ..errors import ValidationError
from ..models import PLACEHOLDER_HEIGHT, PLACEHOLDER_WIDTH, Photo, ScrapbookEntry, utc_now_iso, validate_entry_date

MISSING_FIELDS_MESSAGE = "Missing required fields: date, title, and at least one photo"


def photo_from_payload(data: Any) -> Photo:
    """
    Build a photo from request data, filling in a generated id and placeholder size.

    Raises:
        ValidationError: If the photo has no url or non-numeric dimensions
    """
    if not isinstance(data, dict) or not isinstance(data.get("url"), str) or not data["url"]:
        raise ValidationError("Photo without a url", code="invalid_photo", user_message="Each photo needs a url")

    caption = data.get("caption")
    try:
        return Photo(
            id=str(data.get("id") or uuid.uuid4()),
            url=data["url"],
            width=int(data.get("width", PLACEHOLDER_WIDTH)),
            height=int(data.get("height", PLACEHOLDER_HEIGHT)),
            caption=str(caption) if caption else None,
        )
    except (TypeError, ValueError) as e:
        raise ValidationError(
            f"Invalid photo dimensions: {e}",
            code="invalid_photo",
            user_message="Photo width and height must be numbers",
            original_exception=e,
        ) from e


def entry_from_payload(payload: Any) -> ScrapbookEntry:
    """
    Build an entry from create-request data.

    The date, a title and at least one photo are required. ``id`` is
    generated when absent and both timestamps are set to now.

    Raises:
        ValidationError: If required fields are missing or malformed
    """
    if not isinstance(payload, dict):
        raise ValidationError(
            "Entry body must be a JSON object", code="invalid_body", user_message=MISSING_FIELDS_MESSAGE
        )

    date = payload.get("date")
    title = payload.get("title")
    photos = payload.get("photos")

    if not date or not title or not isinstance(photos, list) or not photos:
        raise ValidationError(
            "Entry is missing required fields",
            code="missing_fields",
            user_message=MISSING_FIELDS_MESSAGE,
            details={"has_date": bool(date), "has_title": bool(title), "has_photos": bool(photos)},
        )

    if not validate_entry_date(date):
        raise ValidationError(
            f"Invalid entry date: {date!r}",
            code="invalid_date",
            user_message="Date must be in YYYY-MM-DD format",
        )

    now = utc_now_iso()
    return ScrapbookEntry(
        id=str(payload.get("id") or uuid.uuid4()),
        date=date,
        title=str(title),
        description=str(payload.get("description") or ""),
        photos=[photo_from_payload(photo) for photo in photos],
        created_at=now,
        updated_at=now,
    )
