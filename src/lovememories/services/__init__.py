"""
Services module for lovememories application.

This module contains the service classes that handle business logic:
- CredentialStore: the shared PIN
- PinGate: PIN screen state machine and token persistence
- AuthorizedDispatcher: request dispatcher carrying the token
- MemoryStorage: DuckDB persistence for photos, notes and the user
- UploadStorage / ImageValidator: photo files on local disk
- LoveMemoriesClient: HTTP client for the API
"""

from .api_client import LoveMemoriesClient
from .auth import GateState, PinGate, create_pin_gate
from .client_state import ClientStateStore, CookieStateStore
from .credentials import CredentialStore, get_credential_store
from .http_client import AuthorizedDispatcher, authorize, create_session_dispatcher, unwrap
from .image_processor import ImageValidator
from .memories import MemoryStorage, create_memory_storage
from .storage import UploadStorage

__all__ = [
    "AuthorizedDispatcher",
    "ClientStateStore",
    "CookieStateStore",
    "CredentialStore",
    "GateState",
    "ImageValidator",
    "LoveMemoriesClient",
    "MemoryStorage",
    "PinGate",
    "UploadStorage",
    "authorize",
    "create_memory_storage",
    "create_pin_gate",
    "create_session_dispatcher",
    "get_credential_store",
    "unwrap",
]
