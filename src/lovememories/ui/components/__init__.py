"""UI components for lovememories application."""

from .common import format_date, render_empty_state, render_error_message, render_header, render_search_bar

__all__ = [
    "format_date",
    "render_empty_state",
    "render_error_message",
    "render_header",
    "render_search_bar",
]
