"""PIN gate handlers for the Streamlit UI."""

import extra_streamlit_components as stx
import streamlit as st
import structlog

from lovememories.config import get_api_base_url
from lovememories.services.api_client import LoveMemoriesClient
from lovememories.services.auth import PinGate, create_pin_gate
from lovememories.services.client_state import CookieStateStore

logger = structlog.get_logger()

COOKIE_MANAGER_KEY = "lovememories_cookies"


def streamlit_notifier(title: str, description: str, variant: str) -> None:
    """Show a gate notification as a toast."""
    icon = "⚠️" if variant == "destructive" else "👋"
    st.toast(f"**{title}** {description}", icon=icon)


def get_browser_state() -> CookieStateStore:
    """
    Get the persisted state of the current browser.

    It is read from the cookies the browser sent when the session started, so
    every browser has its own token and starts locked until it unlocks.
    """
    if "browser_state" not in st.session_state:
        st.session_state.browser_state = CookieStateStore(
            dict(st.context.cookies), stx.CookieManager(key=COOKIE_MANAGER_KEY)
        )
    return st.session_state.browser_state


def get_pin_gate() -> PinGate:
    """
    Get the PIN gate of the current browser session.

    The gate restores itself from the browser's token the first time it is
    created, so a reload does not ask for the PIN again.
    """
    if "pin_gate" not in st.session_state:
        st.session_state.pin_gate = create_pin_gate(state_store=get_browser_state(), notifier=streamlit_notifier)
        logger.info("pin_gate_created", unlocked=st.session_state.pin_gate.is_unlocked)
    return st.session_state.pin_gate


def save_browser_state() -> None:
    """Send the writes made by the keypad and logout callbacks to the browser."""
    get_browser_state().flush()


def get_api_client() -> LoveMemoriesClient:
    """
    Build an API client on the gate's current dispatcher.

    Only call this once the gate is unlocked; the dispatcher then carries the PIN.
    """
    return LoveMemoriesClient(get_api_base_url(), get_pin_gate().dispatcher)


def handle_logout() -> None:
    """Handle logout from the header button."""
    get_pin_gate().logout()

    st.session_state.search_query = ""
    st.session_state.editing_note_id = None

    logger.info("user_logout")
