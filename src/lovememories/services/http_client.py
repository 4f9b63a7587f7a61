"""Request dispatchers used to talk to the API.

A dispatcher is any callable ``(method, url, **kwargs) -> response`` such as
``requests.Session().request``. Once the PIN screen is unlocked it hands out an
``AuthorizedDispatcher`` that adds the token to every request; after logout it
hands out the plain dispatcher again.
"""

from collections.abc import Callable
from typing import Any

import requests

from ..logging_config import get_logger

logger = get_logger(__name__)

AUTHORIZATION_HEADER = "Authorization"

Dispatcher = Callable[..., Any]


def create_session_dispatcher(session: requests.Session | None = None) -> Dispatcher:
    """Get the unwrapped dispatcher backed by a requests session."""
    return (session or requests.Session()).request


class AuthorizedDispatcher:
    """Wraps a dispatcher and sends the token in the Authorization header."""

    def __init__(self, inner: Dispatcher, token: str) -> None:
        self.inner = inner
        self.token = token

    def __call__(self, method: str, url: str, **kwargs: Any) -> Any:
        """
        Send a request through the wrapped dispatcher with the token attached.

        The caller's keyword arguments are left untouched; any Authorization
        header they carry, whatever its case, is replaced by the token.

        Returns:
            Whatever the wrapped dispatcher returns
        """
        headers = {
            key: value
            for key, value in dict(kwargs.get("headers") or {}).items()
            if key.lower() != AUTHORIZATION_HEADER.lower()
        }
        headers[AUTHORIZATION_HEADER] = self.token
        return self.inner(method, url, **{**kwargs, "headers": headers})

    def __repr__(self) -> str:
        return f"AuthorizedDispatcher(inner={self.inner!r})"


def unwrap(dispatcher: Dispatcher) -> Dispatcher:
    """Get the innermost dispatcher below any authorization wrappers."""
    while isinstance(dispatcher, AuthorizedDispatcher):
        dispatcher = dispatcher.inner
    return dispatcher


def authorize(dispatcher: Dispatcher, token: str) -> AuthorizedDispatcher:
    """
    Wrap a dispatcher so every request carries the token.

    Authorizing an already authorized dispatcher wraps its innermost dispatcher
    instead, so the underlying request is never sent twice.
    """
    base = unwrap(dispatcher)
    if base is not dispatcher:
        logger.debug("dispatcher_already_authorized")
    return AuthorizedDispatcher(base, token)
