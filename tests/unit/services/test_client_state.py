"""
Unit tests for the persisted PIN screen state.
"""

from datetime import datetime, timedelta

from lovememories.services.client_state import AUTH_FLAG_KEY, TOKEN_KEY, ClientStateStore, CookieStateStore
from tests.conftest import FakeCookieManager


class TestClientStateStore:
    """Test cases for ClientStateStore."""

    def test_empty_store(self, state_store):
        assert state_store.get(TOKEN_KEY) is None

    def test_set_and_get(self, state_store):
        state_store.set(TOKEN_KEY, "4079")

        assert state_store.get(TOKEN_KEY) == "4079"

    def test_initial_values(self):
        store = ClientStateStore({AUTH_FLAG_KEY: "true", TOKEN_KEY: "4079"})

        assert store.get(AUTH_FLAG_KEY) == "true"
        assert store.get(TOKEN_KEY) == "4079"

    def test_ignores_unrelated_keys(self):
        store = ClientStateStore({"session_id": "abc", TOKEN_KEY: "4079"})

        assert store.get("session_id") is None

    def test_remove(self, state_store):
        state_store.set(TOKEN_KEY, "4079")
        state_store.set(AUTH_FLAG_KEY, "true")

        state_store.remove(TOKEN_KEY)

        assert state_store.get(TOKEN_KEY) is None
        assert state_store.get(AUTH_FLAG_KEY) == "true"

    def test_remove_missing_key(self, state_store):
        state_store.remove(TOKEN_KEY)

        assert state_store.get(TOKEN_KEY) is None


class TestCookieStateStore:
    """Test cases for CookieStateStore."""

    def test_reads_browser_cookies(self):
        store = CookieStateStore({TOKEN_KEY: "4079", "other": "x"}, FakeCookieManager())

        assert store.get(TOKEN_KEY) == "4079"
        assert store.get("other") is None

    def test_writes_wait_for_flush(self):
        manager = FakeCookieManager()
        store = CookieStateStore({}, manager)

        store.set(TOKEN_KEY, "4079")

        assert store.get(TOKEN_KEY) == "4079"
        assert store.has_pending_writes
        assert manager.calls == []

    def test_flush_sets_cookies(self):
        manager = FakeCookieManager()
        store = CookieStateStore({}, manager, lifetime=timedelta(days=30))

        store.set(AUTH_FLAG_KEY, "true")
        store.set(TOKEN_KEY, "4079")
        store.flush()

        assert manager.jar == {AUTH_FLAG_KEY: "true", TOKEN_KEY: "4079"}
        assert [call[4] for call in manager.calls] == ["set_cl_auth_1", "set_cl_pin_1"]
        expires_at = manager.calls[0][3]
        assert datetime.now() + timedelta(days=29) < expires_at <= datetime.now() + timedelta(days=30)
        assert not store.has_pending_writes

    def test_flush_deletes_removed_cookies(self):
        manager = FakeCookieManager({AUTH_FLAG_KEY: "true", TOKEN_KEY: "4079"})
        store = CookieStateStore(dict(manager.jar), manager)

        store.remove(TOKEN_KEY)
        store.remove(AUTH_FLAG_KEY)
        store.flush()

        assert manager.jar == {}
        assert manager.calls == [("delete", TOKEN_KEY, "delete_cl_pin_1"), ("delete", AUTH_FLAG_KEY, "delete_cl_auth_1")]

    def test_last_write_wins(self):
        manager = FakeCookieManager()
        store = CookieStateStore({}, manager)

        store.set(TOKEN_KEY, "4079")
        store.remove(TOKEN_KEY)
        store.flush()

        assert manager.calls == [("delete", TOKEN_KEY, "delete_cl_pin_1")]

    def test_second_flush_sends_nothing(self):
        manager = FakeCookieManager()
        store = CookieStateStore({}, manager)
        store.set(TOKEN_KEY, "4079")
        store.flush()

        store.flush()

        assert len(manager.calls) == 1

    def test_each_flush_uses_new_component_keys(self):
        manager = FakeCookieManager()
        store = CookieStateStore({}, manager)

        store.set(TOKEN_KEY, "4079")
        store.flush()
        store.remove(TOKEN_KEY)
        store.flush()
        store.set(TOKEN_KEY, "4079")
        store.flush()

        assert [call[-1] for call in manager.calls] == ["set_cl_pin_1", "delete_cl_pin_2", "set_cl_pin_3"]

    def test_next_session_reads_flushed_cookies(self):
        manager = FakeCookieManager()
        store = CookieStateStore({}, manager)
        store.set(TOKEN_KEY, "4079")
        store.flush()

        next_session = CookieStateStore(dict(manager.jar), FakeCookieManager(manager.jar))

        assert next_session.get(TOKEN_KEY) == "4079"
