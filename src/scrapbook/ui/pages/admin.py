"""Admin page: entry table with delete actions."""

import streamlit as st

from ...services import get_entries_service
from ..auth_handlers import require_admin
from ..components import navigate_to, render_empty_state
from ..handlers import delete_entry_with_feedback


def render_admin_page() -> None:
    """Render the admin dashboard."""
    if not require_admin():
        return

    service = get_entries_service()

    st.markdown("### 🛠️ Manage entries")
    if st.button("➕ Create new entry", type="primary"):
        navigate_to("new_entry")

    entries = service.list_entries()
    if not entries:
        render_empty_state(title="No entries yet", description="Nothing to manage.", icon="📭")
        return

    header = st.columns([2, 4, 1, 1])
    for col, label in zip(header, ["Date", "Title", "Photos", ""], strict=True):
        col.markdown(f"**{label}**")

    for entry in entries:
        date_col, title_col, photos_col, action_col = st.columns([2, 4, 1, 1])
        date_col.write(entry.date)
        title_col.write(entry.title)
        photos_col.write(len(entry.photos))

        pending_key = f"confirm_delete_{entry.date}"
        if st.session_state.get(pending_key):
            if action_col.button("Confirm", key=f"confirm_{entry.date}", type="primary"):
                st.session_state[pending_key] = False
                if delete_entry_with_feedback(service, entry.date):
                    st.success(f"Deleted entry for {entry.date}")
                    st.rerun()
                else:
                    st.error("Failed to delete entry")
        elif action_col.button("🗑️", key=f"delete_{entry.date}", help="Delete entry"):
            st.session_state[pending_key] = True
            st.rerun()
