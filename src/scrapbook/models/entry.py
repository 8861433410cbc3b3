"""
Scrapbook entry and photo models.

An entry is one dated journal record. Its ``date`` (``YYYY-MM-DD``) is the
primary key and doubles as the storage file/object name, so at most one
entry exists per date. Photos are owned by their entry and keep their order.

The JSON document format is shared by every storage backend::

    {id, date, title, description, photos: [{id, url, caption?, width, height}],
     createdAt, updatedAt}
"""

import re
import uuid
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import UTC, date, datetime
from typing import Any

# Photos are never inspected, so every upload reports these dimensions.
PLACEHOLDER_WIDTH = 800
PLACEHOLDER_HEIGHT = 600

_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def utc_now_iso() -> str:
    """Current UTC time in the ISO-8601 form stored in entry timestamps."""
    return datetime.now(UTC).isoformat().replace("+00:00", "Z")


def validate_entry_date(value: str) -> bool:
    """
    Check that a value is a real calendar date in ``YYYY-MM-DD`` form.

    Entry dates become file and object names, so this also rules out
    path separators and other traversal tricks.
    """
    if not isinstance(value, str) or not _DATE_PATTERN.match(value):
        return False
    try:
        date.fromisoformat(value)
    except ValueError:
        return False
    return True


@dataclass
class Photo:
    """A photo belonging to a scrapbook entry."""

    id: str
    url: str
    width: int = PLACEHOLDER_WIDTH
    height: int = PLACEHOLDER_HEIGHT
    caption: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"id": self.id, "url": self.url}
        if self.caption is not None:
            data["caption"] = self.caption
        data["width"] = self.width
        data["height"] = self.height
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Photo":
        return cls(
            id=data["id"],
            url=data["url"],
            width=int(data["width"]),
            height=int(data["height"]),
            caption=data.get("caption"),
        )


@dataclass
class ScrapbookEntry:
    """
    One dated scrapbook record.

    Entries are written whole and only ever replaced by a full overwrite.
    """

    id: str
    date: str
    title: str
    description: str
    photos: list[Photo] = field(default_factory=list)
    created_at: str = ""
    updated_at: str = ""

    @classmethod
    def create_new(
        cls,
        date: str,
        title: str,
        description: str = "",
        photos: list[Photo] | None = None,
    ) -> "ScrapbookEntry":
        """
        Create a new entry with a generated ID and both timestamps set to now.

        Args:
            date: Entry date in ``YYYY-MM-DD`` form
            title: Entry title
            description: Free-text description
            photos: Ordered photos owned by the entry

        Returns:
            New ScrapbookEntry instance
        """
        now = utc_now_iso()
        return cls(
            id=str(uuid.uuid4()),
            date=date,
            title=title,
            description=description,
            photos=list(photos or []),
            created_at=now,
            updated_at=now,
        )

    def to_dict(self) -> dict[str, Any]:
        """
        Convert the entry to its JSON document form.

        Returns:
            Dictionary using the camelCase keys of the stored document
        """
        return {
            "id": self.id,
            "date": self.date,
            "title": self.title,
            "description": self.description,
            "photos": [photo.to_dict() for photo in self.photos],
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ScrapbookEntry":
        """
        Create an entry from its JSON document form.

        Raises:
            KeyError: If a required key is missing
            TypeError, ValueError: If a value has the wrong shape
        """
        return cls(
            id=data["id"],
            date=data["date"],
            title=data["title"],
            description=data["description"],
            photos=[Photo.from_dict(photo) for photo in data["photos"]],
            created_at=data["createdAt"],
            updated_at=data["updatedAt"],
        )

    @property
    def storage_name(self) -> str:
        """File/object name for this entry's document."""
        return f"{self.date}.json"

    def get_display_date(self) -> str:
        """Human-friendly date such as 'January 29, 2026'."""
        try:
            parsed = date.fromisoformat(self.date)
        except ValueError:
            return self.date
        return f"{parsed.strftime('%B')} {parsed.day}, {parsed.year}"


def _date_sort_key(entry: ScrapbookEntry) -> date:
    try:
        return date.fromisoformat(entry.date)
    except ValueError:
        return date.min


def sort_entries_newest_first(entries: Iterable[ScrapbookEntry]) -> list[ScrapbookEntry]:
    """Sort entries by calendar date, newest first."""
    return sorted(entries, key=_date_sort_key, reverse=True)
