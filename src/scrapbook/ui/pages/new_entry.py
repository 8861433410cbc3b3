"""New entry page: form with photo uploads."""

from datetime import date

import streamlit as st

from ...errors import ScrapbookError, ValidationError
from ...logging_config import log_error
from ...services import get_entries_service, get_photo_upload_service
from ..auth_handlers import require_admin
from ..components import navigate_to, render_error_message
from ..handlers import create_entry_from_form


def render_new_entry_page() -> None:
    """Render the new entry form."""
    if not require_admin():
        return

    st.markdown("### ➕ New entry")

    entry_date = st.date_input("Date", value=date.today())
    title = st.text_input("Title")
    description = st.text_area("Description")
    uploaded_files = st.file_uploader(
        "Photos",
        type=["jpg", "jpeg", "png", "gif", "webp", "heic", "heif"],
        accept_multiple_files=True,
        help="HEIC photos are converted to JPEG automatically",
    )

    captions: list[str] = []
    for index, uploaded_file in enumerate(uploaded_files or []):
        captions.append(st.text_input(f"Caption for {uploaded_file.name}", key=f"caption_{index}"))

    existing = get_entries_service().get_entry(entry_date.isoformat())
    if existing is not None:
        st.warning(f"An entry already exists for {entry_date.isoformat()}. Saving will replace it.")

    if not st.button("💾 Save entry", type="primary"):
        return

    with st.spinner("Saving entry..."):
        try:
            entry = create_entry_from_form(
                get_entries_service(),
                get_photo_upload_service(),
                entry_date,
                title,
                description,
                uploaded_files or [],
                captions,
            )
        except ValidationError as e:
            render_error_message("Invalid entry", e.user_message)
            return
        except ScrapbookError as e:
            render_error_message("Could not save entry", e.user_message)
            return
        except Exception as e:
            log_error(e, {"operation": "create_entry", "source": "streamlit"})
            render_error_message("Could not save entry", "Unexpected error")
            return

    st.success(f"Saved entry for {entry.date}")
    navigate_to("entry", selected_date=entry.date)
