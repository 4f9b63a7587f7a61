"""Tests for the Streamlit PIN gate handlers."""

from unittest.mock import MagicMock, patch

import pytest

from lovememories.services.auth import PinGate
from lovememories.services.client_state import AUTH_FLAG_KEY, TOKEN_KEY
from lovememories.ui import auth_handlers
from lovememories.ui.auth_handlers import (
    get_api_client,
    get_browser_state,
    get_pin_gate,
    handle_logout,
    save_browser_state,
    streamlit_notifier,
)
from tests.conftest import TEST_PIN


@pytest.fixture
def mock_stx():
    return MagicMock()


@pytest.fixture(autouse=True)
def patched_st(mock_st, mock_stx):
    mock_st.context.cookies = {}
    with patch.object(auth_handlers, "st", mock_st), patch.object(auth_handlers, "stx", mock_stx):
        yield mock_st


class TestGetPinGate:
    """Test cases for the per-session gate."""

    def test_creates_gate_once(self, patched_st):
        gate = get_pin_gate()

        assert isinstance(gate, PinGate)
        assert get_pin_gate() is gate
        assert patched_st.session_state["pin_gate"] is gate

    def test_new_session_restores_unlock_from_cookies(self, patched_st):
        """Test a fresh session of a browser holding the token starts unlocked."""
        patched_st.context.cookies = {AUTH_FLAG_KEY: "true", TOKEN_KEY: TEST_PIN}

        assert get_pin_gate().is_unlocked

    def test_other_browser_starts_locked(self, patched_st):
        """Test unlocking one session does not unlock a browser without the cookie."""
        get_pin_gate().login(TEST_PIN)
        save_browser_state()
        patched_st.session_state.clear()
        patched_st.context.cookies = {}

        assert not get_pin_gate().is_unlocked

    def test_notifications_become_toasts(self, patched_st):
        gate = get_pin_gate()

        for digit in "1234":
            gate.press_digit(digit)

        patched_st.toast.assert_called_once()
        assert "Code PIN incorrect" in patched_st.toast.call_args.args[0]


class TestBrowserState:
    """Test cases for the cookie-backed browser state."""

    def test_cookie_manager_created_once(self, mock_stx):
        assert get_browser_state() is get_browser_state()

        mock_stx.CookieManager.assert_called_once_with(key=auth_handlers.COOKIE_MANAGER_KEY)

    def test_save_sends_token_cookies(self, mock_stx):
        get_pin_gate().login(TEST_PIN)

        save_browser_state()

        cookie_manager = mock_stx.CookieManager.return_value
        names = [call.args[0] for call in cookie_manager.set.call_args_list]
        assert names == [AUTH_FLAG_KEY, TOKEN_KEY]
        assert cookie_manager.set.call_args_list[1].args[1] == TEST_PIN

    def test_save_without_changes_sends_nothing(self, mock_stx):
        get_pin_gate()

        save_browser_state()

        mock_stx.CookieManager.return_value.set.assert_not_called()
        mock_stx.CookieManager.return_value.delete.assert_not_called()


class TestApiClient:
    """Test cases for the client handed to the pages."""

    def test_uses_gate_dispatcher(self, patched_st):
        gate = get_pin_gate()
        gate.login(TEST_PIN)

        client = get_api_client()

        assert client.dispatcher is gate.dispatcher
        assert client.base_url == "http://localhost:8000"


class TestHandleLogout:
    """Test cases for the logout button."""

    def test_logout(self, patched_st, mock_stx):
        gate = get_pin_gate()
        gate.login(TEST_PIN)
        patched_st.session_state.search_query = "beach"
        patched_st.session_state.editing_note_id = 3

        handle_logout()

        assert not gate.is_unlocked
        assert get_browser_state().get(TOKEN_KEY) is None
        assert patched_st.session_state.search_query == ""
        assert patched_st.session_state.editing_note_id is None
        assert "Déconnecté" in patched_st.toast.call_args.args[0]

    def test_logout_deletes_cookies_on_save(self, mock_stx):
        get_pin_gate().login(TEST_PIN)
        save_browser_state()

        handle_logout()
        save_browser_state()

        deleted = [call.args[0] for call in mock_stx.CookieManager.return_value.delete.call_args_list]
        assert sorted(deleted) == [AUTH_FLAG_KEY, TOKEN_KEY]


class TestNotifier:
    """Test cases for the toast notifier."""

    def test_destructive_icon(self, patched_st):
        streamlit_notifier("Code PIN incorrect", "Veuillez réessayer.", "destructive")

        patched_st.toast.assert_called_once_with("**Code PIN incorrect** Veuillez réessayer.", icon="⚠️")

    def test_default_icon(self, patched_st):
        streamlit_notifier("Déconnecté", "Au revoir.", "default")

        assert patched_st.toast.call_args.kwargs["icon"] == "👋"
