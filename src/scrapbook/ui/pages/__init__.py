"""Page renderers for the Streamlit UI."""

from .admin import render_admin_page
from .entry import render_entry_page
from .new_entry import render_new_entry_page
from .timeline import render_timeline_page

__all__ = [
    "render_admin_page",
    "render_entry_page",
    "render_new_entry_page",
    "render_timeline_page",
]
