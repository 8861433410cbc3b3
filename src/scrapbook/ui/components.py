"""Reusable UI components for the scrapbook application."""

import html
from pathlib import Path

import streamlit as st

from ..logging_config import get_logger
from ..models import ScrapbookEntry
from ..storage import LocalStorageAdapter, StorageAdapter

logger = get_logger(__name__)

PAGES = {
    "📖 Timeline": "timeline",
    "🛠️ Admin": "admin",
    "➕ New entry": "new_entry",
}


def navigate_to(page: str, **state: object) -> None:
    """Switch page on the next rerun, optionally setting extra session state."""
    for key, value in state.items():
        st.session_state[key] = value
    logger.info("page_navigation", from_page=st.session_state.get("current_page"), to_page=page)
    st.session_state.current_page = page
    st.rerun()


def render_empty_state(
    title: str,
    description: str,
    icon: str = "📭",
    action_text: str | None = None,
    action_page: str | None = None,
) -> None:
    """
    Render an empty state message with optional action button.

    Args:
        title: Main title for the empty state
        description: Description text
        icon: Emoji icon to display
        action_text: Text for action button (optional)
        action_page: Page to navigate to when action button is clicked (optional)
    """
    _, col, _ = st.columns([1, 2, 1])

    with col:
        st.markdown(
            f"""
        <div style='text-align: center; padding: 2rem 0;'>
            <div style='font-size: 4rem; margin-bottom: 1rem;'>{html.escape(icon)}</div>
            <h3 style='color: #5c4033; margin-bottom: 1rem;'>{html.escape(title)}</h3>
            <p style='color: #8b7355; margin-bottom: 2rem;'>{html.escape(description)}</p>
        </div>
        """,
            unsafe_allow_html=True,
        )

        if action_text and action_page:
            if st.button(action_text, use_container_width=True, type="primary"):
                navigate_to(action_page)


def render_error_message(title: str, message: str) -> None:
    """Render a standardized error message without internal details."""
    st.error(f"**{title}:** {message}")


def resolve_photo_source(url: str, adapter: StorageAdapter) -> str | Path:
    """
    Turn a stored photo URL into something ``st.image`` can load.

    Local URLs are root-relative paths that only the API serves, so they are
    mapped back to files on disk. Remote URLs are used as-is.
    """
    if isinstance(adapter, LocalStorageAdapter):
        path = adapter.resolve_photo_path(url)
        if path is not None:
            return path
    return url


def render_photo_grid(entry: ScrapbookEntry, adapter: StorageAdapter, columns: int = 3) -> None:
    """Render an entry's photos in order, with captions."""
    if not entry.photos:
        st.caption("No photos")
        return

    cols = st.columns(columns)
    for index, photo in enumerate(entry.photos):
        with cols[index % columns]:
            try:
                st.image(str(resolve_photo_source(photo.url, adapter)), caption=photo.caption, use_container_width=True)
            except Exception as e:
                logger.warning("photo_render_failed", url=photo.url, error=str(e))
                st.caption(f"🖼️ {photo.caption or 'Photo unavailable'}")


def render_entry_card(entry: ScrapbookEntry, adapter: StorageAdapter) -> None:
    """Render one entry on the timeline."""
    with st.container(border=True):
        st.markdown(f"### {entry.title}")
        st.caption(entry.get_display_date())
        if entry.description:
            st.write(entry.description)
        render_photo_grid(entry, adapter)
        if st.button("Open entry", key=f"open_{entry.date}"):
            navigate_to("entry", selected_date=entry.date)


def render_header() -> None:
    """Render the application header."""
    st.markdown("# 📔 Scrapbook")
    st.divider()


def render_sidebar() -> None:
    """Render the sidebar navigation and admin status."""
    with st.sidebar:
        st.markdown("### 📔 Scrapbook")
        st.divider()

        current_page = st.session_state.current_page
        for page_name, page_key in PAGES.items():
            if st.button(
                page_name,
                key=f"nav_{page_key}",
                use_container_width=True,
                type="primary" if page_key == current_page else "secondary",
            ):
                navigate_to(page_key)

        st.divider()


def render_footer(storage_name: str) -> None:
    """Render the application footer."""
    st.divider()
    st.markdown(
        f"""
    <div style='text-align: center; color: #8b7355; font-size: 0.8em;'>
        <strong>scrapbook v0.1</strong> · storage: {html.escape(storage_name)}
    </div>
    """,
        unsafe_allow_html=True,
    )
