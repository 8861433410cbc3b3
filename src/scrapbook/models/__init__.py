"""
Models module for the scrapbook application.

- ScrapbookEntry: one dated journal record
- Photo: an ordered photo owned by an entry
"""

from .entry import (
    PLACEHOLDER_HEIGHT,
    PLACEHOLDER_WIDTH,
    Photo,
    ScrapbookEntry,
    sort_entries_newest_first,
    utc_now_iso,
    validate_entry_date,
)

__all__ = [
    "PLACEHOLDER_HEIGHT",
    "PLACEHOLDER_WIDTH",
    "Photo",
    "ScrapbookEntry",
    "sort_entries_newest_first",
    "utc_now_iso",
    "validate_entry_date",
]
