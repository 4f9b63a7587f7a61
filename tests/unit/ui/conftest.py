"""Configuration for UI unit tests."""

from unittest.mock import MagicMock

import pytest


class SessionState(dict):
    """Stand-in for st.session_state supporting item and attribute access."""

    def __getattr__(self, name):
        try:
            return self[name]
        except KeyError as e:
            raise AttributeError(name) from e

    def __setattr__(self, name, value):
        self[name] = value


def _columns(spec, *args, **kwargs):
    count = spec if isinstance(spec, int) else len(spec)
    return [MagicMock() for _ in range(count)]


@pytest.fixture
def mock_st():
    """A streamlit module mock whose layout helpers return usable containers."""
    st = MagicMock()
    st.session_state = SessionState()
    st.columns.side_effect = _columns
    st.button.return_value = False
    st.form_submit_button.return_value = False
    return st
