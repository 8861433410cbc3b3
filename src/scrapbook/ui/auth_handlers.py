"""Password gate for the admin pages of the Streamlit UI."""

import streamlit as st

from ..errors import AuthenticationError
from ..logging_config import get_logger
from ..services import get_auth_service

logger = get_logger(__name__)

SESSION_TOKEN_KEY = "admin_session_token"


def is_admin() -> bool:
    """Whether the current browser session holds a valid admin token."""
    return get_auth_service().verify_session(st.session_state.get(SESSION_TOKEN_KEY))


def attempt_login(password: str) -> bool:
    """
    Check the shared password and store a session token on success.

    Returns:
        bool: True if the password was accepted
    """
    try:
        st.session_state[SESSION_TOKEN_KEY] = get_auth_service().login(password)
    except AuthenticationError:
        st.session_state[SESSION_TOKEN_KEY] = None
        return False
    return True


def handle_logout() -> None:
    """Drop the admin session and return to the timeline."""
    st.session_state[SESSION_TOKEN_KEY] = None
    st.session_state.current_page = "timeline"
    logger.info("admin_logout")
    st.rerun()


def render_login_form() -> None:
    """Render the password form."""
    auth_service = get_auth_service()
    if not auth_service.enabled:
        st.warning("Admin access is disabled. Set ADMIN_PASSWORD to enable it.")
        return

    with st.form("admin_login_form"):
        st.markdown("### 🔐 Admin login")
        password = st.text_input("Password", type="password")
        submitted = st.form_submit_button("Log in", type="primary")

    if submitted:
        if attempt_login(password):
            st.rerun()
        else:
            st.error("Invalid password")


def require_admin() -> bool:
    """
    Gate an admin page.

    Returns:
        bool: True if the page may render, False if the login form was shown instead
    """
    if is_admin():
        with st.sidebar:
            if st.button("🚪 Log out", use_container_width=True):
                handle_logout()
        return True

    render_login_form()
    return False
