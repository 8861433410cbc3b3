"""Timeline page: every entry, newest first."""

import streamlit as st

from ...logging_config import get_logger
from ...services import get_entries_service
from ..components import render_empty_state, render_entry_card

logger = get_logger(__name__)


def render_timeline_page() -> None:
    """Render all entries in date order, newest first."""
    service = get_entries_service()
    entries = service.list_entries()

    if not entries:
        render_empty_state(
            title="No entries yet",
            description="The scrapbook is empty. Create the first entry to start the timeline.",
            icon="📔",
            action_text="➕ New entry",
            action_page="new_entry",
        )
        return

    st.caption(f"{len(entries)} entries")
    for entry in entries:
        render_entry_card(entry, service.adapter)

    logger.debug("timeline_rendered", entries=len(entries))
