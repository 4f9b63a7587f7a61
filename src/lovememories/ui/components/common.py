"""Reusable UI components for lovememories application."""

from datetime import datetime

import streamlit as st
import structlog

from lovememories.ui.auth_handlers import handle_logout

logger = structlog.get_logger()


def render_empty_state(title: str, description: str, icon: str = "📭") -> None:
    """
    Render an empty state message.

    Args:
        title: Main title for the empty state
        description: Description text
        icon: Emoji icon to display
    """
    col1, col2, col3 = st.columns([1, 2, 1])

    with col2:
        st.markdown(
            f"""
        <div style='text-align: center; padding: 2rem 0;'>
            <div style='font-size: 4rem; margin-bottom: 1rem;'>{icon}</div>
            <h3 style='color: #666; margin-bottom: 1rem;'>{title}</h3>
            <p style='color: #888;'>{description}</p>
        </div>
        """,
            unsafe_allow_html=True,
        )


def render_error_message(error_type: str, message: str, details: str | None = None) -> None:
    """
    Render a standardized error message.

    Args:
        error_type: Short error title
        message: Main error message
        details: Additional error details (optional)
    """
    st.error(f"**{error_type} :** {message}")

    if details:
        with st.expander("🔍 Détails"):
            st.code(details)


def format_date(value: datetime) -> str:
    """Format a stored date for display in local time, e.g. "14/02/2024 18:30"."""
    return value.astimezone().strftime("%d/%m/%Y %H:%M")


def render_header() -> None:
    """Render the application header with the logout button."""
    title_col, logout_col = st.columns([4, 1])

    with title_col:
        st.markdown("# 💕 LoveMemories")

    with logout_col:
        st.button("🔒 Déconnexion", key="logout_button", on_click=handle_logout, use_container_width=True)

    st.divider()


def render_search_bar() -> str:
    """
    Render the search field shared by both tabs.

    Returns:
        str: The current search query, stripped
    """
    query = st.text_input(
        "Rechercher",
        key="search_query",
        placeholder="Rechercher une légende ou un titre…",
        label_visibility="collapsed",
    )
    return (query or "").strip()
