"""
Pytest configuration and fixtures for lovememories tests.
"""

import io
from collections.abc import Generator
from pathlib import Path
from typing import Any

import pytest
from fastapi.testclient import TestClient
from PIL import Image

import lovememories.config as config_module
import lovememories.services.credentials as credentials_module
from lovememories.api.app import create_app
from lovememories.services.auth import PinGate
from lovememories.services.client_state import ClientStateStore
from lovememories.services.credentials import CredentialStore
from lovememories.services.image_processor import ImageValidator
from lovememories.services.memories import MemoryStorage, create_memory_storage

TEST_PIN = "4079"


@pytest.fixture(autouse=True)
def setup_test_env(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Set up test environment variables and drop cached configuration."""
    monkeypatch.setenv("ENVIRONMENT", "test")
    monkeypatch.setenv("ACCESS_PIN", TEST_PIN)
    monkeypatch.delenv("PIN_VERIFY_MODE", raising=False)
    monkeypatch.setattr(config_module, "_config", None)
    monkeypatch.setattr(credentials_module, "_credential_store", None)
    yield


@pytest.fixture
def temp_dir(tmp_path: Path) -> Path:
    """Provide a temporary directory for tests."""
    return tmp_path


@pytest.fixture
def sample_image_data() -> bytes:
    """Provide a small valid PNG image."""
    buffer = io.BytesIO()
    Image.new("RGB", (4, 4), color=(200, 30, 90)).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def sample_jpeg_data() -> bytes:
    """Provide a small valid JPEG image."""
    buffer = io.BytesIO()
    Image.new("RGB", (4, 4), color=(10, 120, 200)).save(buffer, format="JPEG")
    return buffer.getvalue()


class FakeClock:
    """Monotonic clock controlled by the test."""

    def __init__(self, start: float = 100.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def set(self, value: float) -> None:
        self.now = value


class FakeCookieManager:
    """Cookie manager writing into one browser's cookie jar."""

    def __init__(self, jar: dict[str, str] | None = None):
        self.jar: dict[str, str] = jar if jar is not None else {}
        self.calls: list[tuple[Any, ...]] = []

    def set(self, name: str, value: str, expires_at: Any = None, key: str = "set") -> None:
        self.calls.append(("set", name, value, expires_at, key))
        self.jar[name] = value

    def delete(self, name: str, key: str = "delete") -> None:
        self.calls.append(("delete", name, key))
        self.jar.pop(name, None)


class RecordingDispatcher:
    """Dispatcher that records every call and returns a fixed response."""

    def __init__(self, response: Any = None):
        self.calls: list[tuple[str, str, dict[str, Any]]] = []
        self.response = response if response is not None else object()

    def __call__(self, method: str, url: str, **kwargs: Any) -> Any:
        self.calls.append((method, url, kwargs))
        return self.response

    @property
    def last_headers(self) -> dict[str, str]:
        return dict(self.calls[-1][2].get("headers") or {})


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def recording_dispatcher() -> RecordingDispatcher:
    return RecordingDispatcher()


@pytest.fixture
def credential_store() -> CredentialStore:
    return CredentialStore(TEST_PIN)


@pytest.fixture
def state_store() -> ClientStateStore:
    return ClientStateStore()


@pytest.fixture
def notifications() -> list[tuple[str, str, str]]:
    return []


@pytest.fixture
def pin_gate(credential_store, state_store, recording_dispatcher, clock, notifications) -> PinGate:
    """PIN gate on a fake clock, validating locally against 4079."""
    return PinGate(
        validator=credential_store.is_valid,
        state_store=state_store,
        base_dispatcher=recording_dispatcher,
        pin_length=credential_store.pin_length,
        error_delay=0.8,
        clock=clock,
        notifier=lambda title, description, variant: notifications.append((title, description, variant)),
    )


@pytest.fixture
def memory_storage(tmp_path: Path) -> Generator[MemoryStorage, None, None]:
    """Storage on a fresh DuckDB file and uploads directory."""
    storage = create_memory_storage(str(tmp_path / "test.db"), str(tmp_path / "uploads"))
    yield storage
    storage.db_manager.close()


@pytest.fixture
def api_client(memory_storage: MemoryStorage, credential_store: CredentialStore) -> TestClient:
    """FastAPI test client over the temporary storage."""
    app = create_app(
        credential_store=credential_store,
        storage=memory_storage,
        image_validator=ImageValidator(max_file_size=5 * 1024 * 1024),
    )
    return TestClient(app)


@pytest.fixture
def auth_headers() -> dict[str, str]:
    return {"Authorization": TEST_PIN}
