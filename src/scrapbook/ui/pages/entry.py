"""Single entry page."""

import streamlit as st

from ...models import validate_entry_date
from ...services import get_entries_service
from ..components import navigate_to, render_empty_state, render_photo_grid


def render_entry_page() -> None:
    """Render the entry selected on the timeline (or via ``?date=``)."""
    selected_date = st.session_state.get("selected_date") or st.query_params.get("date")
    service = get_entries_service()

    entry = service.get_entry(selected_date) if selected_date and validate_entry_date(selected_date) else None

    if st.button("← Back to timeline"):
        navigate_to("timeline", selected_date=None)

    if entry is None:
        render_empty_state(
            title="Entry not found",
            description=f"There is no entry for {selected_date or 'this date'}.",
            icon="🔍",
        )
        return

    st.markdown(f"## {entry.title}")
    st.caption(entry.get_display_date())
    if entry.description:
        st.write(entry.description)
    render_photo_grid(entry, service.adapter, columns=2)
