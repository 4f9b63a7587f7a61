"""Persisted PIN screen state, kept in the browser.

Two entries survive reloads until logout: the authenticated flag and the raw
token. Each browser has its own entries; nothing is shared between browsers
on the server.
"""

from collections.abc import Mapping
from datetime import datetime, timedelta
from typing import Any

from ..logging_config import get_logger

logger = get_logger(__name__)

AUTH_FLAG_KEY = "cl_auth"
TOKEN_KEY = "cl_pin"

COOKIE_LIFETIME = timedelta(days=365)


class ClientStateStore:
    """State of one browser: a small key/value mapping."""

    def __init__(self, initial: Mapping[str, str] | None = None) -> None:
        self._values: dict[str, str] = {
            key: value for key, value in (initial or {}).items() if key in (AUTH_FLAG_KEY, TOKEN_KEY)
        }

    def get(self, key: str) -> str | None:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value

    def remove(self, key: str) -> None:
        self._values.pop(key, None)


class CookieStateStore(ClientStateStore):
    """
    Browser state backed by cookies.

    Values are read once from the cookies the browser sent when the session
    started. Writes are queued and sent to the browser by ``flush()``, which
    the page calls on every run; key presses run in widget callbacks where
    the cookie component cannot be rendered.
    """

    def __init__(self, cookies: Mapping[str, str], cookie_manager: Any, lifetime: timedelta = COOKIE_LIFETIME) -> None:
        """
        Args:
            cookies: Cookies of the browser at session start
            cookie_manager: Object with ``set(name, value, expires_at=, key=)`` and ``delete(name, key=)``,
                such as ``extra_streamlit_components.CookieManager``
            lifetime: How long a set cookie lives
        """
        super().__init__(cookies)
        self._cookie_manager = cookie_manager
        self._lifetime = lifetime
        self._pending: dict[str, str | None] = {}
        self._flush_count = 0

    def set(self, key: str, value: str) -> None:
        super().set(key, value)
        self._pending[key] = value

    def remove(self, key: str) -> None:
        super().remove(key)
        self._pending[key] = None

    @property
    def has_pending_writes(self) -> bool:
        return bool(self._pending)

    def flush(self) -> None:
        """Send queued writes to the browser."""
        if not self.has_pending_writes:
            return

        pending, self._pending = self._pending, {}
        # component keys must not repeat within a session
        self._flush_count += 1
        for key, value in pending.items():
            if value is None:
                self._cookie_manager.delete(key, key=f"delete_{key}_{self._flush_count}")
            else:
                self._cookie_manager.set(
                    key, value, expires_at=datetime.now() + self._lifetime, key=f"set_{key}_{self._flush_count}"
                )
        logger.debug("client_state_flushed", keys=sorted(pending))
