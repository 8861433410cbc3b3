"""
Main Streamlit application for scrapbook.

This is the entry point for the photo journal web application:
``streamlit run src/scrapbook/main.py``.
"""

import streamlit as st

from scrapbook.config import get_config, load_environment
from scrapbook.logging_config import configure_structured_logging, get_logger
from scrapbook.services import get_entries_service
from scrapbook.ui.auth_handlers import SESSION_TOKEN_KEY
from scrapbook.ui.components import navigate_to, render_error_message, render_footer, render_header, render_sidebar
from scrapbook.ui.pages import render_admin_page, render_entry_page, render_new_entry_page, render_timeline_page

load_environment()
configure_structured_logging()
logger = get_logger(__name__)

PAGE_RENDERERS = {
    "timeline": render_timeline_page,
    "entry": render_entry_page,
    "admin": render_admin_page,
    "new_entry": render_new_entry_page,
}


def initialize_session_state() -> None:
    """Initialize session state variables."""
    if "current_page" not in st.session_state:
        # Deep links such as ?date=2026-01-29 open the entry page directly
        st.session_state.current_page = "entry" if st.query_params.get("date") else "timeline"

    if "selected_date" not in st.session_state:
        st.session_state.selected_date = None

    if SESSION_TOKEN_KEY not in st.session_state:
        st.session_state[SESSION_TOKEN_KEY] = None


def render_main_content() -> None:
    """Render the main content area based on the current page."""
    current_page = st.session_state.current_page
    renderer = PAGE_RENDERERS.get(current_page)

    if renderer is None:
        st.warning(f"Page '{current_page}' not found.")
        if st.button("📖 Back to timeline", use_container_width=True, type="primary"):
            navigate_to("timeline")
        return

    renderer()


def main() -> None:
    """Main application entry point."""
    logger.info("application_starting", page="main")

    try:
        st.set_page_config(
            page_title="Scrapbook",
            page_icon="📔",
            layout="wide",
            initial_sidebar_state="expanded",
            menu_items={
                "Get Help": None,
                "Report a bug": None,
                "About": "scrapbook - a dated photo journal",
            },
        )

        initialize_session_state()

        logger.info("session_initialized", current_page=st.session_state.current_page)

        render_header()
        render_sidebar()

        with st.container():
            render_main_content()

        render_footer(get_entries_service().adapter.name)

        try:
            if get_config().get("debug", False, bool):
                with st.expander("Debug Info"):
                    st.write("Session State:", st.session_state)
        except Exception as e:
            logger.debug("debug_section_error", error=str(e))

    except Exception as e:
        logger.error("critical_application_error", error=str(e))
        render_error_message("Something went wrong", "The page could not be rendered.")

        if st.button("🔄 Reload", type="primary"):
            st.rerun()


if __name__ == "__main__":
    main()
