"""
Main Streamlit application for lovememories.

Run with `streamlit run src/lovememories/main.py` next to a running API.
"""

import streamlit as st

from lovememories.config import get_debug_mode
from lovememories.logging_config import configure_structured_logging, get_logger
from lovememories.ui.auth_handlers import get_api_client, get_pin_gate, save_browser_state
from lovememories.ui.components.common import render_header, render_search_bar
from lovememories.ui.pages.notes import render_notes_page
from lovememories.ui.pages.photos import render_photos_page
from lovememories.ui.pin_screen import render_pin_screen

configure_structured_logging()
logger = get_logger(__name__)


def initialize_session_state() -> None:
    """Initialize session state variables."""
    if "search_query" not in st.session_state:
        st.session_state.search_query = ""

    if "editing_note_id" not in st.session_state:
        st.session_state.editing_note_id = None


def main() -> None:
    """Main application entry point."""
    st.set_page_config(
        page_title="LoveMemories",
        page_icon="💕",
        layout="wide",
        menu_items={"Get Help": None, "Report a bug": None, "About": "LoveMemories - nos photos et nos notes"},
    )

    initialize_session_state()

    gate = get_pin_gate()
    save_browser_state()
    if not render_pin_screen(gate):
        return

    client = get_api_client()

    render_header()
    search_query = render_search_bar()

    photos_tab, notes_tab = st.tabs(["📷 Photos", "📝 Notes"])
    with photos_tab:
        render_photos_page(client, search_query)
    with notes_tab:
        render_notes_page(client, search_query)

    if get_debug_mode():
        with st.expander("Debug Info"):
            st.write("Gate state:", gate.state.value)


if __name__ == "__main__":
    main()
